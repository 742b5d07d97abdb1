"""
FastAPI application for the DART financial summary proxy.

Exposes GET /api/dart with auto-generated OpenAPI documentation at /docs.
Every outcome is returned as a JSON body:

- validation failures -> 400
- missing server credential -> 500
- DART status codes (including errors such as 013) -> 200 with status/message
- transport failures -> 500
"""

from fastapi import Depends, FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Iterator, Optional
import logging

from sources.dart.base import (
    SUCCESS_STATUS,
    ConfigurationError,
    InvalidRequestError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from sources.dart.provider import DartProvider
from sources.dart.summary import extract_summary
from sources.dart.validator import validate_request

from .config import Settings, settings
from .models import DartResponse, ErrorResponse, FinancialSummary, HealthResponse

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "정상 조회"
MISSING_PARAMS_MESSAGE = "필수 파라미터가 누락되었습니다."
MISSING_KEY_MESSAGE = "API 키가 설정되지 않았습니다."
SERVER_ERROR_MESSAGE = "서버 오류가 발생했습니다."

app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=["*"],
)


# ----------------------------------------------------------------
# Dependencies
# ----------------------------------------------------------------

def get_settings() -> Settings:
    return settings


def get_provider(cfg: Settings = Depends(get_settings)) -> Iterator[DartProvider]:
    provider = DartProvider(base_url=cfg.DART_BASE_URL, timeout=cfg.UPSTREAM_TIMEOUT)
    try:
        yield provider
    finally:
        provider.close()


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ----------------------------------------------------------------
# Health & Info
# ----------------------------------------------------------------

@app.get("/", response_model=HealthResponse, tags=["Health"])
def root(cfg: Settings = Depends(get_settings)):
    """API health check. Reports whether the DART credential is set, never its value."""
    return {
        "service": cfg.API_TITLE,
        "version": cfg.API_VERSION,
        "status": "healthy",
        "api_key_configured": bool(cfg.DART_API_KEY),
    }


# ----------------------------------------------------------------
# DART Endpoints
# ----------------------------------------------------------------

@app.options("/api/dart", include_in_schema=False)
def dart_preflight():
    return Response(status_code=200)


@app.get(
    "/api/dart",
    response_model=DartResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["DART"],
)
def get_dart_financials(
    company: Optional[str] = Query(None, description="DART corp_code (8 digits)"),
    year: Optional[str] = Query(None, description="Fiscal year (YYYY)"),
    reportType: Optional[str] = Query(None, description="Report code, default 11011 (annual report)"),
    fsDiv: Optional[str] = Query(None, description="CFS (consolidated, default) or OFS (separate)"),
    cfg: Settings = Depends(get_settings),
    provider: DartProvider = Depends(get_provider),
):
    """
    Fetch a company's financial statements from DART with a condensed summary.

    Args:
        company: DART corp_code
        year: Business year
        reportType: 11011 annual, 11012 half-year, 11013 Q1, 11014 Q3
        fsDiv: CFS consolidated or OFS separate statements

    Returns:
        Raw DART line items plus a FinancialSummary. When DART reports a
        non-success status the body carries that status and its message
        with an empty list and no summary.
    """
    params = {"company": company, "year": year, "reportType": reportType, "fsDiv": fsDiv}
    try:
        query = validate_request(params, api_key=cfg.DART_API_KEY)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return _error(500, MISSING_KEY_MESSAGE, str(e))
    except InvalidRequestError as e:
        logger.warning(f"Rejected request: {e}")
        return _error(400, MISSING_PARAMS_MESSAGE, str(e))

    try:
        items = provider.get_financial_statements(query)
        body = DartResponse(
            status=SUCCESS_STATUS,
            message=SUCCESS_MESSAGE,
            company_code=query.company,
            year=query.year,
            list=items,
            summary=FinancialSummary(**extract_summary(items)),
        )
    except UpstreamStatusError as e:
        logger.info(f"DART status {e.status} for {query.describe()}: {e.message}")
        body = DartResponse(
            status=e.status,
            message=e.message,
            company_code=query.company,
            year=query.year,
            list=[],
        )
        return JSONResponse(status_code=200, content=body.model_dump(exclude_unset=True))
    except UpstreamTransportError as e:
        logger.error(f"DART call failed for {query.describe()}: {e}")
        return _error(500, SERVER_ERROR_MESSAGE, str(e))
    except Exception as e:
        logger.exception(f"Unexpected error for {query.describe()}: {e}")
        return _error(500, SERVER_ERROR_MESSAGE, str(e))

    return JSONResponse(status_code=200, content=body.model_dump())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info"
    )
