from cardmax.agents.orchestrator import RecommendationOrchestrator, summarize_transactions
from cardmax.domain.errors import CardMaxError, InternalError, InvalidInput, NotFound
from cardmax.domain.models import (
    DEFAULT_POINT_VALUE,
    Card,
    CatalogCard,
    MatchKind,
    RankedResult,
    RewardKind,
    RewardRule,
    Transaction,
    WalletSnapshot,
)
from cardmax.engine.evaluator import evaluate_card, find_best_rule
from cardmax.engine.selectors import recommend
from cardmax.repository.catalog import CardCatalog, add_to_wallet
from cardmax.repository.json_store import JsonWalletRepository
from cardmax.repository.memory import InMemoryWalletRepository
from cardmax.schemas.requests import RecommendRequest
from cardmax.schemas.responses import RankedResultOut, RecommendResponse

__all__ = [
    "DEFAULT_POINT_VALUE",
    "Card",
    "CardCatalog",
    "CardMaxError",
    "CatalogCard",
    "InMemoryWalletRepository",
    "InternalError",
    "InvalidInput",
    "JsonWalletRepository",
    "MatchKind",
    "NotFound",
    "RankedResult",
    "RankedResultOut",
    "RecommendRequest",
    "RecommendResponse",
    "RecommendationOrchestrator",
    "RewardKind",
    "RewardRule",
    "Transaction",
    "WalletSnapshot",
    "add_to_wallet",
    "evaluate_card",
    "find_best_rule",
    "recommend",
    "summarize_transactions",
]
