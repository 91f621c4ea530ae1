from datetime import date as Date

from pydantic import BaseModel, Field

from cardmax.domain.models import Card, MatchKind, RewardKind, RewardRule


class RecommendRequest(BaseModel):
    merchant: str = ""
    category: str = ""
    amount: float = Field(gt=0, allow_inf_nan=False)
    # None means every card in the wallet; an empty list means no candidates.
    user_cards: list[int] | None = None


class CardIn(BaseModel):
    name: str = Field(min_length=1)
    issuer: str = ""
    last4_digits: str = Field(default="", pattern=r"^(\d{4})?$")
    expiry_date: str | None = Field(default=None, pattern=r"^(0[1-9]|1[0-2])/\d{2}$")
    card_type: str = ""
    default_reward_rate: float = Field(default=0, ge=0)
    default_reward_kind: RewardKind = RewardKind.CASHBACK
    default_point_value: float | None = Field(default=None, gt=0)
    annual_fee: float = Field(default=0, ge=0)
    annual_fee_waiver: str | None = None
    benefits: list[str] = Field(default_factory=list)

    def to_card(self) -> Card:
        return Card.model_validate(self.model_dump())


class RuleIn(BaseModel):
    match_kind: MatchKind
    match_value: str = Field(min_length=1)
    reward_rate: float = Field(ge=0)
    reward_kind: RewardKind = RewardKind.CASHBACK
    point_value: float | None = Field(default=None, gt=0)

    def to_rule(self) -> RewardRule:
        return RewardRule.model_validate(self.model_dump())


class TransactionIn(BaseModel):
    date: Date = Field(default_factory=Date.today)
    merchant: str = Field(min_length=1)
    category: str = ""
    amount: float = Field(gt=0, allow_inf_nan=False)
    card_id: int
    # Left empty, the reward is computed from the card's rules when the transaction is saved.
    reward_earned: float | None = Field(default=None, ge=0)
    notes: str | None = None


class CatalogAddRequest(BaseModel):
    last4_digits: str = Field(default="", pattern=r"^(\d{4})?$")
    expiry_date: str | None = Field(default=None, pattern=r"^(0[1-9]|1[0-2])/\d{2}$")
