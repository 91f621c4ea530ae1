from datetime import date
from typing import Protocol

from cardmax.domain.errors import InvalidInput
from cardmax.domain.models import Card, RewardRule, Transaction, WalletSnapshot


class WalletRepository(Protocol):
    """Storage for cards, their reward rules and recorded transactions.

    Reads return copies; mutating a returned object never changes the store.
    """

    def snapshot(self) -> WalletSnapshot:
        """All cards plus all of their rules, read consistently."""

    def list_cards(self) -> list[Card]: ...

    def get_card(self, card_id: int) -> Card: ...

    def add_card(self, card: Card) -> Card: ...

    def add_card_with_rules(
        self, card: Card, rules: list[RewardRule]
    ) -> tuple[Card, list[RewardRule]]:
        """Add a card and its rules in one write; snapshots see both or neither."""

    def update_card(self, card_id: int, card: Card) -> Card: ...

    def delete_card(self, card_id: int) -> None:
        """Delete a card together with every rule it owns."""

    def list_rules(self, card_id: int) -> list[RewardRule]: ...

    def add_rule(self, card_id: int, rule: RewardRule) -> RewardRule: ...

    def update_rule(self, card_id: int, rule_id: int, rule: RewardRule) -> RewardRule: ...

    def delete_rule(self, card_id: int, rule_id: int) -> None: ...

    def list_transactions(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        category: str | None = None,
        card_id: int | None = None,
    ) -> list[Transaction]: ...

    def get_transaction(self, transaction_id: int) -> Transaction: ...

    def add_transaction(self, transaction: Transaction) -> Transaction: ...

    def delete_transaction(self, transaction_id: int) -> None: ...


def ensure_rule_valid(rule: RewardRule) -> None:
    if not rule.match_value.strip():
        raise InvalidInput("rule match value must not be empty")
    if rule.reward_kind.needs_point_value and not rule.point_value:
        raise InvalidInput(f"{rule.reward_kind.value} rules require a positive point value")
