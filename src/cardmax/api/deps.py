"""
Shared FastAPI dependencies.

Routes receive the wallet repository, catalog and orchestrator through
Depends(); tests swap them with app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from cardmax.agents.orchestrator import RecommendationOrchestrator
from cardmax.config import settings
from cardmax.repository.base import WalletRepository
from cardmax.repository.catalog import CardCatalog
from cardmax.repository.json_store import JsonWalletRepository


@lru_cache(maxsize=1)
def get_repository() -> WalletRepository:
    return JsonWalletRepository(settings.data_file)


@lru_cache(maxsize=1)
def get_catalog() -> CardCatalog:
    return CardCatalog(settings.catalog_dir)


def get_orchestrator(
    repository: WalletRepository = Depends(get_repository),
) -> RecommendationOrchestrator:
    return RecommendationOrchestrator(repository)
