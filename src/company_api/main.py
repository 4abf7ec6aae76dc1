"""FastAPIアプリケーションのメインエントリーポイント."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from company_api.common.errors import (
    CompanyNotFoundError,
    CompanyValidationError,
    IsinConflictError,
)
from company_api.company.router import router as company_router
from company_api.settings.settings import get_settings

API_V1_PREFIX = "/api/v1"

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Company API",
    description="Company registry with ISIN uniqueness and partial updates",
    version="1.0.0",
)

if settings.allows_any_origin:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(company_router, prefix=API_V1_PREFIX)


@app.exception_handler(CompanyNotFoundError)
async def handle_not_found(
    request: Request, exc: CompanyNotFoundError
) -> JSONResponse:
    """CompanyNotFoundError を404に変換."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.exception_handler(CompanyValidationError)
async def handle_validation_failed(
    request: Request, exc: CompanyValidationError
) -> JSONResponse:
    """CompanyValidationError を400に変換. キーはワイヤ上のフィールド名."""
    errors = {to_camel(name): messages for name, messages in exc.errors.items()}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(IsinConflictError)
async def handle_conflict(
    request: Request, exc: IsinConflictError
) -> JSONResponse:
    """IsinConflictError を409に変換."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "isin": exc.isin},
    )


@app.exception_handler(RequestValidationError)
async def handle_malformed_request(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """リクエスト形式エラーを400に変換.

    型不一致や必須キー欠落などFastAPIが検出したエラーを、
    業務検証エラーと同じ形式で返す。
    パス・クエリパラメータ名もボディと同じくキャメルケースで返す。
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[-1]) if len(loc) > 1 else str(loc[0]) if loc else "body"
        if len(loc) > 1 and loc[0] in ("path", "query"):
            field = to_camel(field)
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """想定外の例外を500に変換. 内部の詳細はレスポンスに含めない."""
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"},
    )
