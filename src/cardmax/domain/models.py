from datetime import date as Date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Monetary value of one point/mile when neither the card nor the rule sets one.
DEFAULT_POINT_VALUE = 1.0


class RewardKind(str, Enum):
    CASHBACK = "Cashback"
    POINTS = "Points"
    MILES = "Miles"

    @property
    def needs_point_value(self) -> bool:
        return self is not RewardKind.CASHBACK


class MatchKind(str, Enum):
    MERCHANT = "Merchant"
    CATEGORY = "Category"


class RewardRule(BaseModel):
    id: int = 0
    card_id: int = 0
    match_kind: MatchKind
    match_value: str
    reward_rate: float = Field(ge=0)
    reward_kind: RewardKind = RewardKind.CASHBACK
    point_value: float | None = Field(default=None, ge=0)


class Card(BaseModel):
    id: int = 0
    name: str
    issuer: str = ""
    last4_digits: str = Field(default="", pattern=r"^(\d{4})?$")
    expiry_date: str | None = Field(default=None, pattern=r"^(0[1-9]|1[0-2])/\d{2}$")
    card_type: str = ""
    default_reward_rate: float = Field(default=0, ge=0)
    default_reward_kind: RewardKind = RewardKind.CASHBACK
    default_point_value: float | None = Field(default=None, ge=0)

    catalog_key: str | None = None
    annual_fee: float = 0
    annual_fee_waiver: str | None = None
    benefits: list[str] = Field(default_factory=list)

    @property
    def masked_number(self) -> str:
        return f"**** {self.last4_digits}" if self.last4_digits else ""


class Transaction(BaseModel):
    id: int = 0
    date: Date
    merchant: str
    category: str = ""
    amount: float = Field(gt=0)
    card_id: int
    reward_earned: float = 0
    notes: str | None = None


class RankedResult(BaseModel):
    """Reward computed for one card against one purchase."""

    model_config = ConfigDict(frozen=True)

    card: Card
    reward_rate: float
    reward_kind: RewardKind
    point_value: float
    reward_value: float
    cash_value: float
    rule: RewardRule | None = None


class WalletSnapshot(BaseModel):
    """Point-in-time copy of every card and the rules owned by each card."""

    model_config = ConfigDict(frozen=True)

    cards: list[Card] = Field(default_factory=list)
    rules_by_card: dict[int, list[RewardRule]] = Field(default_factory=dict)


class CatalogRule(BaseModel):
    match_kind: MatchKind
    match_value: str
    reward_rate: float = Field(ge=0)
    reward_kind: RewardKind | None = None


class CatalogCard(BaseModel):
    """Predefined card definition that can be copied into the wallet."""

    key: str
    name: str
    issuer: str
    card_type: str = ""
    default_reward_rate: float = Field(default=0, ge=0)
    reward_kind: RewardKind = RewardKind.CASHBACK
    point_value: float | None = Field(default=None, gt=0)
    annual_fee: float = 0
    annual_fee_waiver: str | None = None
    reward_rules: list[CatalogRule] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
