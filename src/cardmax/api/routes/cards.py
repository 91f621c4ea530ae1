from fastapi import APIRouter, Depends, Response

from cardmax.api.deps import get_repository
from cardmax.domain.models import Card, RewardRule
from cardmax.repository.base import WalletRepository
from cardmax.schemas.requests import CardIn, RuleIn

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=list[Card])
def list_cards(repository: WalletRepository = Depends(get_repository)) -> list[Card]:
    return repository.list_cards()


@router.post("", response_model=Card, status_code=201)
def create_card(payload: CardIn, repository: WalletRepository = Depends(get_repository)) -> Card:
    return repository.add_card(payload.to_card())


@router.get("/{card_id}", response_model=Card)
def get_card(card_id: int, repository: WalletRepository = Depends(get_repository)) -> Card:
    return repository.get_card(card_id)


@router.put("/{card_id}", response_model=Card)
def update_card(
    card_id: int, payload: CardIn, repository: WalletRepository = Depends(get_repository)
) -> Card:
    # Catalog origin survives edits to the user-facing fields.
    current = repository.get_card(card_id)
    card = payload.to_card().model_copy(update={"catalog_key": current.catalog_key})
    return repository.update_card(card_id, card)


@router.delete("/{card_id}", status_code=204)
def delete_card(card_id: int, repository: WalletRepository = Depends(get_repository)) -> Response:
    repository.delete_card(card_id)
    return Response(status_code=204)


@router.get("/{card_id}/rewards", response_model=list[RewardRule])
def list_rules(card_id: int, repository: WalletRepository = Depends(get_repository)) -> list[RewardRule]:
    return repository.list_rules(card_id)


@router.post("/{card_id}/rewards", response_model=RewardRule, status_code=201)
def create_rule(
    card_id: int, payload: RuleIn, repository: WalletRepository = Depends(get_repository)
) -> RewardRule:
    return repository.add_rule(card_id, payload.to_rule())


@router.put("/{card_id}/rewards/{rule_id}", response_model=RewardRule)
def update_rule(
    card_id: int,
    rule_id: int,
    payload: RuleIn,
    repository: WalletRepository = Depends(get_repository),
) -> RewardRule:
    return repository.update_rule(card_id, rule_id, payload.to_rule())


@router.delete("/{card_id}/rewards/{rule_id}", status_code=204)
def delete_rule(
    card_id: int, rule_id: int, repository: WalletRepository = Depends(get_repository)
) -> Response:
    repository.delete_rule(card_id, rule_id)
    return Response(status_code=204)
