from fastapi import APIRouter, Depends, HTTPException

from cardmax.agents.orchestrator import RecommendationOrchestrator
from cardmax.api.deps import get_orchestrator
from cardmax.domain.errors import CardMaxError
from cardmax.log import get_logger
from cardmax.schemas.requests import RecommendRequest
from cardmax.schemas.responses import RecommendResponse

router = APIRouter(tags=["recommend"])
logger = get_logger(__name__)

RECOMMENDATION_FAILED = "could not compute recommendations"


@router.post("/recommend", response_model=RecommendResponse)
def recommend(
    request: RecommendRequest,
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> RecommendResponse:
    try:
        return orchestrator.recommend(request)
    except CardMaxError:
        raise
    except Exception as exc:
        logger.exception("recommendation_failed", merchant=request.merchant, category=request.category)
        raise HTTPException(status_code=500, detail=RECOMMENDATION_FAILED) from exc
