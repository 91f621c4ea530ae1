from collections.abc import Mapping, Sequence

from cardmax.domain.models import Card, RankedResult, RewardRule
from cardmax.engine.evaluator import evaluate_card, validate_amount


def rank_results(results: list[RankedResult]) -> list[RankedResult]:
    # list.sort is stable, and stays stable with reverse=True: equal cash values keep card order.
    results.sort(key=lambda item: item.cash_value, reverse=True)
    return results


def recommend(
    merchant: str,
    category: str,
    amount: float,
    cards: Sequence[Card],
    rules_by_card: Mapping[int, Sequence[RewardRule]],
) -> list[RankedResult]:
    """Rank ``cards`` for a purchase, best cash value first.

    Pure function of its arguments. Raises ``InvalidInput`` only when
    ``amount`` is not a finite number; a zero or negative amount ranks every
    card at zero reward.
    """
    value = validate_amount(amount)
    merchant = merchant or ""
    category = category or ""

    evaluations = [
        evaluate_card(card, rules_by_card.get(card.id, ()), merchant, category, value)
        for card in cards
    ]
    return rank_results(evaluations)
