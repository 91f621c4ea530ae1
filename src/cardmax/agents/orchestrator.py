from collections.abc import Iterable

from cardmax.domain.errors import InternalError, NotFound
from cardmax.domain.models import Card, Transaction, WalletSnapshot
from cardmax.engine import selectors
from cardmax.engine.evaluator import evaluate_card
from cardmax.log import get_logger
from cardmax.repository.base import WalletRepository
from cardmax.schemas.requests import RecommendRequest, TransactionIn
from cardmax.schemas.responses import RankedResultOut, RecommendResponse, TransactionSummary

logger = get_logger(__name__)


def _check_snapshot(snapshot: WalletSnapshot) -> None:
    card_ids = {card.id for card in snapshot.cards}
    orphaned = sorted(set(snapshot.rules_by_card) - card_ids)
    if orphaned:
        raise InternalError(f"snapshot has rules for cards it does not contain: {orphaned}")


class RecommendationOrchestrator:
    def __init__(self, repository: WalletRepository):
        self.repository = repository

    def _candidate_cards(self, snapshot: WalletSnapshot, user_cards: list[int] | None) -> list[Card]:
        if user_cards is None:
            return list(snapshot.cards)

        wanted = set(user_cards)
        candidates = [card for card in snapshot.cards if card.id in wanted]
        unknown = wanted - {card.id for card in candidates}
        if unknown:
            logger.warning("unknown_candidate_cards", card_ids=sorted(unknown))
        return candidates

    def recommend(self, request: RecommendRequest) -> RecommendResponse:
        snapshot = self.repository.snapshot()
        _check_snapshot(snapshot)

        cards = self._candidate_cards(snapshot, request.user_cards)
        ranked = selectors.recommend(
            merchant=request.merchant,
            category=request.category,
            amount=request.amount,
            cards=cards,
            rules_by_card=snapshot.rules_by_card,
        )
        all_cards = [RankedResultOut.from_result(result) for result in ranked]

        logger.info(
            "recommendation_computed",
            merchant=request.merchant,
            category=request.category,
            amount=request.amount,
            candidates=len(cards),
            best_card_id=all_cards[0].card.id if all_cards else None,
        )
        return RecommendResponse(best_card=all_cards[0] if all_cards else None, all_cards=all_cards)

    def record_transaction(self, payload: TransactionIn) -> Transaction:
        reward_earned = payload.reward_earned
        if reward_earned is None:
            snapshot = self.repository.snapshot()
            card = next((c for c in snapshot.cards if c.id == payload.card_id), None)
            if card is None:
                raise NotFound("card", payload.card_id)
            result = evaluate_card(
                card,
                snapshot.rules_by_card.get(card.id, []),
                payload.merchant,
                payload.category,
                payload.amount,
            )
            reward_earned = result.cash_value

        transaction = Transaction(
            date=payload.date,
            merchant=payload.merchant,
            category=payload.category,
            amount=payload.amount,
            card_id=payload.card_id,
            reward_earned=reward_earned,
            notes=payload.notes,
        )
        return self.repository.add_transaction(transaction)


def summarize_transactions(transactions: Iterable[Transaction]) -> TransactionSummary:
    items = list(transactions)
    total_spent = sum(t.amount for t in items)
    total_rewards = sum(t.reward_earned for t in items)
    average = total_rewards / total_spent * 100 if total_spent > 0 else 0.0
    return TransactionSummary(
        count=len(items),
        total_spent=total_spent,
        total_rewards=total_rewards,
        average_reward_rate=average,
    )
