"""API 요청/응답 스키마 (Pydantic)"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime

from ..core.models import Currency


# ============================================================================
# 세금 계산 요청
# ============================================================================

class TaxCalculationRequest(BaseModel):
    """세금 계산 요청

    범위 검증(0 이상, 환율 0 초과)은 계산 라우터에서 수행합니다.
    """
    purchase_price: float = Field(0, description="매수 금액 (USD)")
    sale_price: float = Field(0, description="매도 금액 (USD)")
    dividends: float = Field(0, description="배당금 (USD)")
    exchange_rate: float = Field(1300, description="환율 (KRW/USD)")
    currency: Currency = Field(Currency.KRW, description="결과 표시 통화 (KRW 또는 USD)")

    class Config:
        json_schema_extra = {
            "example": {
                "purchase_price": 10000,
                "sale_price": 12000,
                "dividends": 500,
                "exchange_rate": 1300,
                "currency": "KRW"
            }
        }


# ============================================================================
# 세금 계산 응답
# ============================================================================

class BreakdownItemResponse(BaseModel):
    """결과 카드 항목"""
    label: str
    amount: float
    display: str
    description: str


class TraceItemResponse(BaseModel):
    """계산 단계 추적 항목"""
    step_name: str
    applied_rule: str
    input_values: Dict[str, Any]
    output_value: Any
    formula: Optional[str] = None
    legal_basis: Optional[str] = None
    notes: Optional[str] = None


class CalculationResponse(BaseModel):
    """세금 계산 응답 (금액은 원 단위, us_dividend_tax만 USD)"""
    calculation_id: str
    calculated_at: datetime
    currency: Currency
    exchange_rate: float

    # 미국 세금
    us_dividend_tax: float
    us_dividend_tax_krw: float

    # 한국 세금 (양도소득)
    krw_capital_gain: float
    basic_deduction: float
    taxable_capital_gain: float
    kr_capital_gain_tax: float

    # 한국 세금 (배당소득)
    krw_dividends: float
    kr_dividend_tax: float

    # 외국납부세액공제 / 최종 납부세액
    foreign_tax_credit: float
    total_kr_tax: float

    # 상세 내역
    breakdown: List[BreakdownItemResponse]
    traces: Optional[List[TraceItemResponse]] = None
    rule_version: str

    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "calculation_id": "3f6c2b1e-0d4a-4f57-9a51-2b8f9a0f6c11",
                "calculated_at": "2024-05-01T10:30:00",
                "currency": "KRW",
                "exchange_rate": 1300,
                "us_dividend_tax": 75,
                "us_dividend_tax_krw": 97500,
                "krw_capital_gain": 2600000,
                "basic_deduction": 50000000,
                "taxable_capital_gain": 0,
                "kr_capital_gain_tax": 0,
                "krw_dividends": 650000,
                "kr_dividend_tax": 157300,
                "foreign_tax_credit": 97500,
                "total_kr_tax": 59800,
                "breakdown": [],
                "traces": None,
                "rule_version": "2023.1",
                "message": "세금 계산이 완료되었습니다."
            }
        }


class RulesResponse(BaseModel):
    """적용 중인 세율 규칙"""
    version: str
    us_dividend_withholding_rate: float
    basic_deduction: float
    kr_capital_gain_tax_rate: float
    kr_dividend_tax_rate: float


# ============================================================================
# 에러 응답
# ============================================================================

class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str
    detail: Optional[str] = None
    field: Optional[str] = None
