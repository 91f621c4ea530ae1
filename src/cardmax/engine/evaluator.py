import math
from collections.abc import Iterable
from decimal import Decimal
from numbers import Real

from cardmax.domain.errors import InvalidInput
from cardmax.domain.models import (
    DEFAULT_POINT_VALUE,
    Card,
    MatchKind,
    RankedResult,
    RewardKind,
    RewardRule,
)


def validate_amount(amount: object) -> float:
    # bool is a Real subclass; True is not a purchase amount.
    if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
        raise InvalidInput(f"amount must be a number, got {type(amount).__name__}")

    value = float(amount)
    if not math.isfinite(value):
        raise InvalidInput(f"amount must be finite, got {value}")
    return value


def rule_matches(rule: RewardRule, merchant: str, category: str) -> bool:
    if rule.match_kind is MatchKind.MERCHANT:
        target = merchant
    else:
        target = category
    return rule.match_value.casefold() == (target or "").casefold()


def find_best_rule(
    card: Card, rules: Iterable[RewardRule], merchant: str, category: str
) -> RewardRule | None:
    """Highest-rate matching rule that beats the card's default, first one on ties."""
    best_rule: RewardRule | None = None
    best_rate = card.default_reward_rate

    for rule in rules:
        if not rule_matches(rule, merchant, category):
            continue
        if rule.reward_rate > best_rate:
            best_rule = rule
            best_rate = rule.reward_rate

    return best_rule


def compute_cash_value(reward_value: float, kind: RewardKind, point_value: float) -> float:
    if kind is RewardKind.CASHBACK:
        return reward_value
    return reward_value * point_value


def _point_value_or_default(point_value: float | None) -> float:
    return DEFAULT_POINT_VALUE if point_value is None else point_value


def evaluate_card(
    card: Card,
    rules: Iterable[RewardRule],
    merchant: str,
    category: str,
    amount: float,
) -> RankedResult:
    rate = card.default_reward_rate
    kind = card.default_reward_kind
    point_value = _point_value_or_default(card.default_point_value)

    rule = find_best_rule(card, rules, merchant, category)
    if rule is not None:
        rate = rule.reward_rate
        kind = rule.reward_kind
        point_value = _point_value_or_default(rule.point_value)

    reward_value = amount * rate / 100 if amount > 0 else 0.0

    return RankedResult(
        card=card,
        reward_rate=rate,
        reward_kind=kind,
        point_value=point_value,
        reward_value=reward_value,
        cash_value=compute_cash_value(reward_value, kind, point_value),
        rule=rule,
    )
