from fastapi import APIRouter, Depends

from cardmax.api.deps import get_catalog, get_repository
from cardmax.domain.models import Card, CatalogCard
from cardmax.repository.base import WalletRepository
from cardmax.repository.catalog import CardCatalog, add_to_wallet
from cardmax.schemas.requests import CatalogAddRequest

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=list[CatalogCard])
def list_catalog(catalog: CardCatalog = Depends(get_catalog)) -> list[CatalogCard]:
    return catalog.load_cards()


@router.get("/{key}", response_model=CatalogCard)
def get_catalog_card(key: str, catalog: CardCatalog = Depends(get_catalog)) -> CatalogCard:
    return catalog.get(key)


@router.post("/{key}/add", response_model=Card, status_code=201)
def add_catalog_card(
    key: str,
    payload: CatalogAddRequest | None = None,
    catalog: CardCatalog = Depends(get_catalog),
    repository: WalletRepository = Depends(get_repository),
) -> Card:
    payload = payload or CatalogAddRequest()
    card, _ = add_to_wallet(
        repository,
        catalog.get(key),
        last4_digits=payload.last4_digits,
        expiry_date=payload.expiry_date,
    )
    return card
