import pytest

from cardmax.domain.errors import InvalidInput, NotFound
from cardmax.domain.models import CatalogCard, CatalogRule, MatchKind, RewardKind
from cardmax.repository.catalog import add_to_wallet, catalog_rules


def test_bundled_catalog_loads(catalog) -> None:
    cards = catalog.load_cards()

    keys = [card.key for card in cards]
    assert keys == sorted(keys)
    assert "hdfc_millennia" in keys


def test_unknown_catalog_key_is_not_found(catalog) -> None:
    with pytest.raises(NotFound):
        catalog.get("no_such_card")


def test_missing_catalog_dir_raises(tmp_path) -> None:
    from cardmax.repository.catalog import CardCatalog

    with pytest.raises(FileNotFoundError):
        CardCatalog(str(tmp_path / "nope")).load_cards()


def test_add_to_wallet_copies_rules(repository, catalog) -> None:
    entry = catalog.get("amex_mrcc")

    card, rules = add_to_wallet(repository, entry, last4_digits="4321", expiry_date="09/28")

    assert card.catalog_key == "amex_mrcc"
    assert card.masked_number == "**** 4321"
    assert card.default_reward_kind is RewardKind.POINTS
    assert len(rules) == len(entry.reward_rules)
    assert all(rule.card_id == card.id for rule in rules)
    assert all(rule.point_value == entry.point_value for rule in rules)


def test_catalog_rules_inherit_card_reward_kind() -> None:
    entry = CatalogCard(
        key="k",
        name="K",
        issuer="I",
        reward_kind=RewardKind.CASHBACK,
        reward_rules=[
            CatalogRule(match_kind=MatchKind.CATEGORY, match_value="fuel", reward_rate=3),
            CatalogRule(
                match_kind=MatchKind.CATEGORY,
                match_value="travel",
                reward_rate=4,
                reward_kind=RewardKind.MILES,
            ),
        ],
    )

    fuel, travel = catalog_rules(entry)

    assert fuel.reward_kind is RewardKind.CASHBACK
    assert fuel.point_value is None
    assert travel.reward_kind is RewardKind.MILES


def test_invalid_catalog_entry_leaves_wallet_untouched(repository) -> None:
    entry = CatalogCard(
        key="broken",
        name="Broken",
        issuer="I",
        reward_kind=RewardKind.POINTS,
        reward_rules=[CatalogRule(match_kind=MatchKind.CATEGORY, match_value="fuel", reward_rate=3)],
    )

    with pytest.raises(InvalidInput):
        add_to_wallet(repository, entry)
    assert repository.list_cards() == []


def test_add_to_wallet_is_a_single_write(catalog) -> None:
    from cardmax.repository.memory import InMemoryWalletRepository

    class RecordingRepository(InMemoryWalletRepository):
        def __init__(self):
            super().__init__()
            self.writes: list[tuple[int, int]] = []

        def _persist(self) -> None:
            self.writes.append((len(self._cards), len(self._rules)))

    repository = RecordingRepository()
    entry = catalog.get("hdfc_millennia")

    add_to_wallet(repository, entry)

    assert repository.writes == [(1, len(entry.reward_rules))]
