"""CalculationTrace: 계산 과정 추적"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class CalculationTrace:
    """계산 과정의 각 단계를 기록하는 클래스

    Attributes:
        step_name: 계산 단계 이름
        input_values: 단계 입력값
        applied_rule: 적용된 규칙 이름
        output_value: 계산 결과값
        calculation_time: 계산 수행 시각
        legal_basis: 근거 법조문
        formula: 사용된 계산 공식
        notes: 추가 메모
    """

    step_name: str
    input_values: Dict[str, Any]
    applied_rule: str
    output_value: Any
    calculation_time: datetime = field(default_factory=datetime.now)
    legal_basis: Optional[str] = None
    formula: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            'step_name': self.step_name,
            'input_values': dict(self.input_values),
            'applied_rule': self.applied_rule,
            'output_value': self.output_value,
            'calculation_time': self.calculation_time.isoformat(),
            'legal_basis': self.legal_basis,
            'formula': self.formula,
            'notes': self.notes,
        }

    def __str__(self) -> str:
        output_str = f"{self.output_value:,}" if isinstance(self.output_value, (int, float)) else str(self.output_value)
        return (
            f"[{self.step_name}] "
            f"규칙: {self.applied_rule}, "
            f"결과: {output_str}"
        )


def format_trace_summary(traces: List[CalculationTrace]) -> str:
    """계산 과정 요약

    Args:
        traces: 계산 추적 리스트

    Returns:
        각 단계별 계산 과정
    """
    lines = ["=== 계산 과정 추적 ===\n"]
    for i, trace in enumerate(traces, 1):
        lines.append(f"{i}. {trace}")
        if trace.legal_basis:
            lines.append(f"   근거: {trace.legal_basis}")
        if trace.formula:
            lines.append(f"   공식: {trace.formula}")
        lines.append("")

    return "\n".join(lines)
