"""감사 로그 서비스

최근 감사 이벤트는 메모리(고정 크기 버퍼)에 보관하고, 전체 이력은
USTAX_AUDIT_LOG로 지정한 JSON Lines 파일에 남깁니다.
"""

import asyncio
import json
import os
from collections import Counter, deque
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Deque, Dict, Any, List, Optional

from loguru import logger


DEFAULT_MAX_ENTRIES = 1000


class AuditEventType(Enum):
    """감사 이벤트 유형"""
    CALCULATION_STARTED = "CALCULATION_STARTED"
    CALCULATION_STEP = "CALCULATION_STEP"
    CALCULATION_COMPLETED = "CALCULATION_COMPLETED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    ERROR_OCCURRED = "ERROR_OCCURRED"


FAILURE_EVENTS = frozenset({
    AuditEventType.VALIDATION_FAILED,
    AuditEventType.ERROR_OCCURRED,
})


@dataclass
class AuditEntry:
    """감사 로그 엔트리"""
    event_type: AuditEventType
    timestamp: datetime
    calculation_id: Optional[str] = None
    request_data: Optional[Dict[str, Any]] = None
    response_data: Optional[Dict[str, Any]] = None
    error_data: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def is_failure(self) -> bool:
        return self.event_type in FAILURE_EVENTS

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        data = asdict(self)
        data['event_type'] = self.event_type.value
        data['timestamp'] = self.timestamp.isoformat()
        return data

    def to_json(self) -> str:
        """JSON 문자열로 변환 (한 줄)"""
        return json.dumps(self.to_dict(), ensure_ascii=False)


class AuditService:
    """감사 로그 서비스

    Attributes:
        log_file: JSON Lines 파일 경로 (None이면 파일 기록 없음)
        entries: 최근 감사 엔트리 (최대 max_entries개, 오래된 것부터 버림)
    """

    def __init__(
        self,
        log_file: Optional[str] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES
    ):
        self.log_file = Path(log_file) if log_file else None
        self.entries: Deque[AuditEntry] = deque(maxlen=max_entries)

    async def log_entry(self, entry: AuditEntry):
        """감사 엔트리 기록 (메모리 + 콘솔 + 파일)"""
        self.entries.append(entry)

        if entry.is_failure:
            logger.warning(
                "[AUDIT] {} calculation_id={} error={}",
                entry.event_type.value, entry.calculation_id, entry.error_data
            )
        else:
            logger.info("[AUDIT] {} calculation_id={}", entry.event_type.value, entry.calculation_id)

        if self.log_file:
            # 파일 쓰기는 이벤트 루프를 막지 않도록 스레드에서 수행
            await asyncio.to_thread(self._append_line, entry.to_json())

    def _append_line(self, line: str):
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(line + '\n')
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def clear(self):
        """메모리에 보관 중인 엔트리 삭제 (파일은 유지)"""
        self.entries.clear()

    async def get_calculation_audit_trail(
        self,
        calculation_id: str
    ) -> List[AuditEntry]:
        """특정 계산의 감사 추적 조회 (메모리에 남아 있는 범위)"""
        return [
            entry for entry in self.entries
            if entry.calculation_id == calculation_id
        ]

    async def generate_audit_report(
        self,
        calculation_id: str
    ) -> Dict[str, Any]:
        """감사 보고서 생성

        Args:
            calculation_id: 계산 ID

        Returns:
            이벤트 목록과 유형별 건수를 담은 보고서
        """
        trail = await self.get_calculation_audit_trail(calculation_id)

        if not trail:
            return {
                "calculation_id": calculation_id,
                "message": "No audit trail found"
            }

        return {
            "calculation_id": calculation_id,
            "total_events": len(trail),
            "start_time": trail[0].timestamp.isoformat(),
            "end_time": trail[-1].timestamp.isoformat(),
            "events": [entry.to_dict() for entry in trail],
            "summary": {
                "event_counts": dict(Counter(entry.event_type.value for entry in trail)),
                "has_errors": any(entry.is_failure for entry in trail)
            }
        }


# 전역 감사 서비스 인스턴스
audit_service = AuditService(
    log_file=os.getenv("USTAX_AUDIT_LOG"),
    max_entries=int(os.getenv("USTAX_AUDIT_MAX_ENTRIES", str(DEFAULT_MAX_ENTRIES)))
)
