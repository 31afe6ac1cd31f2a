"""세금 계산 API 라우터"""

from datetime import datetime
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from ...audit import AuditService, CalculationAuditor, audit_service
from ...core import TaxCalculator, InputValidationError, get_default_calculator, validate_tax_input
from ...display import build_breakdown
from ..schemas import (
    TaxCalculationRequest,
    CalculationResponse,
    BreakdownItemResponse,
    TraceItemResponse,
    RulesResponse,
    ErrorResponse
)

router = APIRouter()


def get_calculator() -> TaxCalculator:
    """계산기 의존성"""
    return get_default_calculator()


def get_audit_service() -> AuditService:
    """감사 서비스 의존성"""
    return audit_service


@router.post(
    "",
    response_model=CalculationResponse,
    responses={400: {"model": ErrorResponse}}
)
async def calculate_tax(
    request: TaxCalculationRequest,
    include_trace: bool = False,
    calculator: TaxCalculator = Depends(get_calculator),
    audit: AuditService = Depends(get_audit_service)
):
    """미국 주식 세금 계산

    매수/매도 금액, 배당금, 환율로 한국 납부세액을 계산합니다.
    """
    calculation_id = str(uuid4())
    auditor = CalculationAuditor(calculation_id, audit)

    try:
        tax_input = validate_tax_input(
            request.purchase_price,
            request.sale_price,
            request.dividends,
            request.exchange_rate
        )
    except InputValidationError as e:
        await auditor.log_validation_failure(
            e.field,
            e.message,
            raw_input=request.model_dump(mode="json")
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error="invalid_input",
                detail=e.message,
                field=e.field
            ).model_dump()
        )

    try:
        await auditor.log_calculation_start(tax_input)
        result, traces = calculator.calculate_with_trace(tax_input)
        await auditor.log_calculation_steps(traces)

        breakdown = build_breakdown(
            tax_input,
            result,
            request.currency,
            withholding_rate=calculator.us_dividend_withholding_rate,
            capital_gain_tax_rate=calculator.capital_gain_tax_rate,
            dividend_tax_rate=calculator.dividend_tax_rate
        )

        trace_items = None
        if include_trace:
            trace_items = [
                TraceItemResponse(
                    step_name=trace.step_name,
                    applied_rule=trace.applied_rule,
                    input_values=trace.input_values,
                    output_value=trace.output_value,
                    formula=trace.formula,
                    legal_basis=trace.legal_basis,
                    notes=trace.notes
                )
                for trace in traces
            ]

        response = CalculationResponse(
            calculation_id=calculation_id,
            calculated_at=datetime.now(),
            currency=request.currency,
            exchange_rate=tax_input.exchange_rate,
            breakdown=[BreakdownItemResponse(**item.to_dict()) for item in breakdown],
            traces=trace_items,
            rule_version=calculator.rule_version,
            message="세금 계산이 완료되었습니다.",
            **result.to_dict()
        )
    except Exception as e:
        await auditor.log_error(e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"세금 계산 중 오류가 발생했습니다: {str(e)}"
        )

    await auditor.log_calculation_complete(result, calculator.rule_version)
    return response


@router.get("/rules", response_model=RulesResponse)
async def get_rules(calculator: TaxCalculator = Depends(get_calculator)):
    """적용 중인 세율 및 공제 조회"""
    return RulesResponse(**calculator.rule_engine.to_dict())
