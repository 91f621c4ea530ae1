import json
from pathlib import Path

from cardmax.domain.errors import NotFound
from cardmax.domain.models import Card, CatalogCard, RewardRule
from cardmax.log import get_logger
from cardmax.repository.base import WalletRepository

logger = get_logger(__name__)


class CardCatalog:
    """Predefined card definitions, one JSON file per card."""

    def __init__(self, catalog_dir: str):
        self.catalog_dir = Path(catalog_dir)

    def load_cards(self) -> list[CatalogCard]:
        if not self.catalog_dir.is_dir():
            raise FileNotFoundError(f"Card catalog directory not found: {self.catalog_dir}")

        cards = []
        for path in sorted(self.catalog_dir.glob("*.json")):
            with path.open("r", encoding="utf-8") as fh:
                cards.append(CatalogCard.model_validate(json.load(fh)))
        return cards

    def get(self, key: str) -> CatalogCard:
        for card in self.load_cards():
            if card.key == key:
                return card
        raise NotFound("catalog card", key)


def catalog_to_card(
    entry: CatalogCard, last4_digits: str = "", expiry_date: str | None = None
) -> Card:
    return Card(
        name=entry.name,
        issuer=entry.issuer,
        last4_digits=last4_digits,
        expiry_date=expiry_date,
        card_type=entry.card_type,
        default_reward_rate=entry.default_reward_rate,
        default_reward_kind=entry.reward_kind,
        default_point_value=entry.point_value,
        catalog_key=entry.key,
        annual_fee=entry.annual_fee,
        annual_fee_waiver=entry.annual_fee_waiver,
        benefits=list(entry.benefits),
    )


def catalog_rules(entry: CatalogCard, card_id: int = 0) -> list[RewardRule]:
    rules = []
    for item in entry.reward_rules:
        kind = item.reward_kind or entry.reward_kind
        rules.append(
            RewardRule(
                card_id=card_id,
                match_kind=item.match_kind,
                match_value=item.match_value,
                reward_rate=item.reward_rate,
                reward_kind=kind,
                # Catalog rules earn in the card's own currency of points.
                point_value=entry.point_value if kind.needs_point_value else None,
            )
        )
    return rules


def add_to_wallet(
    repository: WalletRepository,
    entry: CatalogCard,
    last4_digits: str = "",
    expiry_date: str | None = None,
) -> tuple[Card, list[RewardRule]]:
    card, rules = repository.add_card_with_rules(
        catalog_to_card(entry, last4_digits, expiry_date), catalog_rules(entry)
    )
    logger.info("catalog_card_added", catalog_key=entry.key, card_id=card.id, rules=len(rules))
    return card, rules
