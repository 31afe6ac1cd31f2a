"""계산 과정 감사 추적"""

from datetime import datetime
from typing import Dict, Any, List, Optional

from .audit_service import AuditService, AuditEntry, AuditEventType, audit_service
from ..core import CalculationTrace, TaxInput, TaxResult


class CalculationAuditor:
    """세금 계산 한 건의 감사 추적

    입력값, 단계별 계산 추적, 최종 결과를 기록하여
    나중에 계산 과정을 재현할 수 있도록 합니다.
    """

    def __init__(
        self,
        calculation_id: str,
        audit_service: AuditService = audit_service
    ):
        """
        Args:
            calculation_id: 계산 ID
            audit_service: 감사 서비스
        """
        self.calculation_id = calculation_id
        self.audit_service = audit_service
        self.calculation_steps: List[Dict[str, Any]] = []

    async def log_calculation_start(self, tax_input: TaxInput):
        """계산 시작 로깅

        Args:
            tax_input: 검증된 입력값
        """
        entry = AuditEntry(
            event_type=AuditEventType.CALCULATION_STARTED,
            timestamp=datetime.now(),
            calculation_id=self.calculation_id,
            request_data={
                "purchase_price": tax_input.purchase_price,
                "sale_price": tax_input.sale_price,
                "dividends": tax_input.dividends,
                "exchange_rate": tax_input.exchange_rate,
            }
        )

        await self.audit_service.log_entry(entry)

    async def log_calculation_steps(self, traces: List[CalculationTrace]):
        """계산 단계 로깅

        Args:
            traces: 계산 추적 리스트
        """
        for trace in traces:
            step_data = trace.to_dict()
            self.calculation_steps.append(step_data)

            entry = AuditEntry(
                event_type=AuditEventType.CALCULATION_STEP,
                timestamp=datetime.now(),
                calculation_id=self.calculation_id,
                metadata=step_data
            )

            await self.audit_service.log_entry(entry)

    async def log_calculation_complete(
        self,
        result: TaxResult,
        rule_version: Optional[str] = None
    ):
        """계산 완료 로깅

        Args:
            result: 최종 계산 결과
            rule_version: 적용된 규칙 버전
        """
        entry = AuditEntry(
            event_type=AuditEventType.CALCULATION_COMPLETED,
            timestamp=datetime.now(),
            calculation_id=self.calculation_id,
            response_data={
                "final_result": result.to_dict(),
                "total_steps": len(self.calculation_steps),
            },
            metadata={"rule_version": rule_version} if rule_version else None
        )

        await self.audit_service.log_entry(entry)

    async def log_validation_failure(
        self,
        field: str,
        message: str,
        raw_input: Optional[Dict[str, Any]] = None
    ):
        """입력값 검증 실패 로깅"""
        entry = AuditEntry(
            event_type=AuditEventType.VALIDATION_FAILED,
            timestamp=datetime.now(),
            calculation_id=self.calculation_id,
            request_data=raw_input,
            error_data={"field": field, "message": message}
        )

        await self.audit_service.log_entry(entry)

    async def log_error(self, error: Exception):
        """예상하지 못한 오류 로깅"""
        entry = AuditEntry(
            event_type=AuditEventType.ERROR_OCCURRED,
            timestamp=datetime.now(),
            calculation_id=self.calculation_id,
            error_data={"type": type(error).__name__, "message": str(error)}
        )

        await self.audit_service.log_entry(entry)

    async def generate_calculation_report(self) -> Dict[str, Any]:
        """계산 보고서 생성

        Returns:
            전체 계산 과정 보고서
        """
        audit_trail = await self.audit_service.get_calculation_audit_trail(
            self.calculation_id
        )

        return {
            "calculation_id": self.calculation_id,
            "total_steps": len(self.calculation_steps),
            "calculation_steps": self.calculation_steps,
            "audit_events": [entry.to_dict() for entry in audit_trail],
            "generated_at": datetime.now().isoformat()
        }
