from datetime import date

from fastapi import APIRouter, Depends, Query, Response

from cardmax.agents.orchestrator import RecommendationOrchestrator, summarize_transactions
from cardmax.api.deps import get_orchestrator, get_repository
from cardmax.domain.models import Transaction
from cardmax.repository.base import WalletRepository
from cardmax.schemas.requests import TransactionIn
from cardmax.schemas.responses import TransactionSummary

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=list[Transaction])
def list_transactions(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    category: str | None = Query(None),
    card_id: int | None = Query(None),
    repository: WalletRepository = Depends(get_repository),
) -> list[Transaction]:
    return repository.list_transactions(
        date_from=date_from, date_to=date_to, category=category, card_id=card_id
    )


@router.post("", response_model=Transaction, status_code=201)
def record_transaction(
    payload: TransactionIn,
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> Transaction:
    return orchestrator.record_transaction(payload)


# Declared before /{transaction_id} so "summary" is not parsed as an id.
@router.get("/summary", response_model=TransactionSummary)
def transaction_summary(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    category: str | None = Query(None),
    card_id: int | None = Query(None),
    repository: WalletRepository = Depends(get_repository),
) -> TransactionSummary:
    transactions = repository.list_transactions(
        date_from=date_from, date_to=date_to, category=category, card_id=card_id
    )
    return summarize_transactions(transactions)


@router.get("/{transaction_id}", response_model=Transaction)
def get_transaction(
    transaction_id: int, repository: WalletRepository = Depends(get_repository)
) -> Transaction:
    return repository.get_transaction(transaction_id)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: int, repository: WalletRepository = Depends(get_repository)
) -> Response:
    repository.delete_transaction(transaction_id)
    return Response(status_code=204)
