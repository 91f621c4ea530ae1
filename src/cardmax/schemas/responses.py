from pydantic import BaseModel

from cardmax.domain.models import Card, MatchKind, RankedResult, RewardKind, RewardRule


class CardSummary(BaseModel):
    id: int
    key: str | None = None
    name: str
    issuer: str
    last4_digits: str
    masked_number: str

    @classmethod
    def from_card(cls, card: Card) -> "CardSummary":
        return cls(
            id=card.id,
            key=card.catalog_key,
            name=card.name,
            issuer=card.issuer,
            last4_digits=card.last4_digits,
            masked_number=card.masked_number,
        )


class RuleSummary(BaseModel):
    type: MatchKind
    entity_name: str
    reward_rate: float

    @classmethod
    def from_rule(cls, rule: RewardRule) -> "RuleSummary":
        return cls(type=rule.match_kind, entity_name=rule.match_value, reward_rate=rule.reward_rate)


class RankedResultOut(BaseModel):
    card: CardSummary
    reward_rate: float
    reward_type: RewardKind
    reward_value: float
    cash_value: float
    rule: RuleSummary | None = None

    @classmethod
    def from_result(cls, result: RankedResult) -> "RankedResultOut":
        return cls(
            card=CardSummary.from_card(result.card),
            reward_rate=result.reward_rate,
            reward_type=result.reward_kind,
            reward_value=result.reward_value,
            cash_value=result.cash_value,
            rule=RuleSummary.from_rule(result.rule) if result.rule else None,
        )


class RecommendResponse(BaseModel):
    best_card: RankedResultOut | None = None
    all_cards: list[RankedResultOut]


class TransactionSummary(BaseModel):
    count: int
    total_spent: float
    total_rewards: float
    average_reward_rate: float
