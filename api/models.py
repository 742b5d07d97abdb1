"""
Pydantic models for API responses.
Auto-generates OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class FinancialSummary(BaseModel):
    """Condensed figures from one DART report. Any field may be null."""
    # Income statement
    sales: Optional[int] = None
    operatingProfit: Optional[int] = None
    netIncome: Optional[int] = None

    # Balance sheet
    totalAssets: Optional[int] = None
    currentAssets: Optional[int] = None
    nonCurrentAssets: Optional[int] = None
    totalLiabilities: Optional[int] = None
    currentLiabilities: Optional[int] = None
    nonCurrentLiabilities: Optional[int] = None
    totalEquity: Optional[int] = None

    # Cash flow statement
    operatingCashFlow: Optional[int] = None
    investingCashFlow: Optional[int] = None
    financingCashFlow: Optional[int] = None

    # Derived, percent with two decimals
    debtRatio: Optional[str] = Field(None, description="totalLiabilities / totalAssets * 100")
    roe: Optional[str] = Field(None, description="netIncome / totalEquity * 100")


class DartResponse(BaseModel):
    """
    DART proxy response.

    `summary` is only present when DART answered with status 000.
    """
    status: Optional[str]
    message: str
    company_code: str
    year: str
    list: List[Dict[str, Any]] = Field(default_factory=list)
    summary: Optional[FinancialSummary] = None


class ErrorResponse(BaseModel):
    """Error envelope for validation, configuration and transport failures."""
    error: bool = True
    message: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    """API health check response."""
    service: str
    version: str
    status: str
    api_key_configured: bool
