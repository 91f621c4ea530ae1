import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from cardmax.domain.errors import NotFound
from cardmax.domain.models import Card, RewardRule, Transaction, WalletSnapshot
from cardmax.log import get_logger
from cardmax.repository.base import ensure_rule_valid

logger = get_logger(__name__)


class InMemoryWalletRepository:
    """Process-local wallet store.

    Every public method takes the same re-entrant lock, so a snapshot never
    observes a half-applied write such as a card deleted while its rules are
    still being read. A write that fails to persist is rolled back.

    Identifiers come from per-entity counters that only move forward, so an
    id is never handed out twice, even after the entity holding it is deleted.
    """

    def __init__(
        self,
        cards: list[Card] | None = None,
        rules: list[RewardRule] | None = None,
        transactions: list[Transaction] | None = None,
        last_ids: dict[str, int] | None = None,
    ):
        self._lock = threading.RLock()
        self._cards: dict[int, Card] = {card.id: card for card in cards or []}
        self._rules: dict[int, RewardRule] = {rule.id: rule for rule in rules or []}
        self._transactions: dict[int, Transaction] = {txn.id: txn for txn in transactions or []}

        last_ids = last_ids or {}
        self._last_ids: dict[str, int] = {
            "card": max([last_ids.get("card", 0), *self._cards]),
            "rule": max([last_ids.get("rule", 0), *self._rules]),
            "transaction": max([last_ids.get("transaction", 0), *self._transactions]),
        }

    def _persist(self) -> None:
        """Hook for durable subclasses; called after every write, under the lock."""

    def _next_id(self, kind: str) -> int:
        self._last_ids[kind] += 1
        return self._last_ids[kind]

    @contextmanager
    def _write(self) -> Iterator[None]:
        with self._lock:
            saved = (
                dict(self._cards),
                dict(self._rules),
                dict(self._transactions),
                dict(self._last_ids),
            )
            try:
                yield
                self._persist()
            except BaseException:
                self._cards, self._rules, self._transactions, self._last_ids = saved
                raise

    def _require_card(self, card_id: int) -> Card:
        card = self._cards.get(card_id)
        if card is None:
            raise NotFound("card", card_id)
        return card

    def _require_rule(self, card_id: int, rule_id: int) -> RewardRule:
        self._require_card(card_id)
        rule = self._rules.get(rule_id)
        if rule is None or rule.card_id != card_id:
            raise NotFound("reward rule", rule_id)
        return rule

    def _store_rule(self, card_id: int, rule: RewardRule) -> RewardRule:
        stored = rule.model_copy(update={"id": self._next_id("rule"), "card_id": card_id}, deep=True)
        self._rules[stored.id] = stored
        return stored

    def snapshot(self) -> WalletSnapshot:
        with self._lock:
            cards = [card.model_copy(deep=True) for card in self._cards.values()]
            rules_by_card: dict[int, list[RewardRule]] = {card.id: [] for card in cards}
            for rule in self._rules.values():
                if rule.card_id in rules_by_card:
                    rules_by_card[rule.card_id].append(rule.model_copy(deep=True))
        return WalletSnapshot(cards=cards, rules_by_card=rules_by_card)

    # Cards

    def list_cards(self) -> list[Card]:
        with self._lock:
            return [card.model_copy(deep=True) for card in self._cards.values()]

    def get_card(self, card_id: int) -> Card:
        with self._lock:
            return self._require_card(card_id).model_copy(deep=True)

    def add_card(self, card: Card) -> Card:
        stored, _ = self.add_card_with_rules(card, [])
        return stored

    def add_card_with_rules(
        self, card: Card, rules: list[RewardRule]
    ) -> tuple[Card, list[RewardRule]]:
        """Add a card and its rules as one write; snapshots see both or neither."""
        for rule in rules:
            ensure_rule_valid(rule)

        with self._write():
            stored = card.model_copy(update={"id": self._next_id("card")}, deep=True)
            self._cards[stored.id] = stored
            stored_rules = [self._store_rule(stored.id, rule) for rule in rules]

        logger.info(
            "card_created",
            card_id=stored.id,
            name=stored.name,
            issuer=stored.issuer,
            rules=len(stored_rules),
        )
        return stored.model_copy(deep=True), [rule.model_copy(deep=True) for rule in stored_rules]

    def update_card(self, card_id: int, card: Card) -> Card:
        with self._write():
            self._require_card(card_id)
            stored = card.model_copy(update={"id": card_id}, deep=True)
            self._cards[card_id] = stored
        logger.info("card_updated", card_id=card_id)
        return stored.model_copy(deep=True)

    def delete_card(self, card_id: int) -> None:
        with self._write():
            self._require_card(card_id)
            del self._cards[card_id]
            owned = [rule_id for rule_id, rule in self._rules.items() if rule.card_id == card_id]
            for rule_id in owned:
                del self._rules[rule_id]
        logger.info("card_deleted", card_id=card_id, rules_deleted=len(owned))

    # Reward rules

    def list_rules(self, card_id: int) -> list[RewardRule]:
        with self._lock:
            self._require_card(card_id)
            return [
                rule.model_copy(deep=True)
                for rule in self._rules.values()
                if rule.card_id == card_id
            ]

    def add_rule(self, card_id: int, rule: RewardRule) -> RewardRule:
        ensure_rule_valid(rule)
        with self._write():
            self._require_card(card_id)
            stored = self._store_rule(card_id, rule)
        logger.info(
            "reward_rule_created",
            card_id=card_id,
            rule_id=stored.id,
            match_kind=stored.match_kind.value,
            match_value=stored.match_value,
        )
        return stored.model_copy(deep=True)

    def update_rule(self, card_id: int, rule_id: int, rule: RewardRule) -> RewardRule:
        ensure_rule_valid(rule)
        with self._write():
            self._require_rule(card_id, rule_id)
            stored = rule.model_copy(update={"id": rule_id, "card_id": card_id}, deep=True)
            self._rules[rule_id] = stored
        logger.info("reward_rule_updated", card_id=card_id, rule_id=rule_id)
        return stored.model_copy(deep=True)

    def delete_rule(self, card_id: int, rule_id: int) -> None:
        with self._write():
            self._require_rule(card_id, rule_id)
            del self._rules[rule_id]
        logger.info("reward_rule_deleted", card_id=card_id, rule_id=rule_id)

    # Transactions

    def list_transactions(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        category: str | None = None,
        card_id: int | None = None,
    ) -> list[Transaction]:
        with self._lock:
            transactions = list(self._transactions.values())

        if date_from is not None:
            transactions = [t for t in transactions if t.date >= date_from]
        if date_to is not None:
            transactions = [t for t in transactions if t.date <= date_to]
        if category:
            transactions = [t for t in transactions if t.category.lower() == category.lower()]
        if card_id is not None:
            transactions = [t for t in transactions if t.card_id == card_id]

        transactions.sort(key=lambda t: (t.date, t.id), reverse=True)
        return [t.model_copy(deep=True) for t in transactions]

    def get_transaction(self, transaction_id: int) -> Transaction:
        with self._lock:
            transaction = self._transactions.get(transaction_id)
            if transaction is None:
                raise NotFound("transaction", transaction_id)
            return transaction.model_copy(deep=True)

    def add_transaction(self, transaction: Transaction) -> Transaction:
        with self._write():
            self._require_card(transaction.card_id)
            stored = transaction.model_copy(update={"id": self._next_id("transaction")}, deep=True)
            self._transactions[stored.id] = stored
        logger.info(
            "transaction_recorded",
            transaction_id=stored.id,
            card_id=stored.card_id,
            amount=stored.amount,
            reward_earned=stored.reward_earned,
        )
        return stored.model_copy(deep=True)

    def delete_transaction(self, transaction_id: int) -> None:
        with self._write():
            if transaction_id not in self._transactions:
                raise NotFound("transaction", transaction_id)
            del self._transactions[transaction_id]
        logger.info("transaction_deleted", transaction_id=transaction_id)
