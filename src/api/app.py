"""FastAPI application: routes plus the translation of scoreboard errors into tagged responses."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.models import ErrorDetail, ErrorResponse
from src.api.routes import router
from src.core.exceptions import ScoreboardError
from src.core.logger import get_logger
from src.core.shared_types import ErrorCategory
from src.db.database import init_db

logger = get_logger("api.app")

STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 422,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.AUTHORIZATION: 403,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.INTERNAL: 500,
}


async def handle_scoreboard_error(request: Request, exc: ScoreboardError) -> JSONResponse:
    if exc.category is ErrorCategory.INTERNAL:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    body = ErrorResponse(
        error=ErrorDetail(category=exc.category.value, code=exc.code, message=str(exc))
    )
    return JSONResponse(status_code=STATUS_CODES[exc.category], content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(*, create_tables: bool = True) -> FastAPI:
    app = FastAPI(
        title="Card game scoreboard",
        lifespan=lifespan if create_tables else None,
    )
    app.include_router(router)
    app.add_exception_handler(ScoreboardError, handle_scoreboard_error)
    return app
