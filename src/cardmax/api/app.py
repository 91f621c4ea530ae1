import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cardmax.api.routes.cards import router as cards_router
from cardmax.api.routes.catalog import router as catalog_router
from cardmax.api.routes.health import router as health_router
from cardmax.api.routes.recommend import RECOMMENDATION_FAILED, router as recommend_router
from cardmax.api.routes.transactions import router as transactions_router
from cardmax.config import settings
from cardmax.domain.errors import InternalError, InvalidInput, NotFound
from cardmax.log import configure_logging, get_logger

logger = get_logger(__name__)


async def _invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def _not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    logger.error("internal_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": RECOMMENDATION_FAILED})


def create_app() -> FastAPI:
    app = FastAPI(title="CardMax API", version="0.1.0")
    app.add_exception_handler(InvalidInput, _invalid_input_handler)
    app.add_exception_handler(NotFound, _not_found_handler)
    app.add_exception_handler(InternalError, _internal_error_handler)

    app.include_router(health_router)
    app.include_router(recommend_router)
    app.include_router(cards_router)
    app.include_router(catalog_router)
    app.include_router(transactions_router)
    return app


app = create_app()


def run() -> None:
    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run("cardmax.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
