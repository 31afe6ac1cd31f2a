"""결과 표시 모듈"""

from .formatting import (
    BreakdownItem,
    format_number,
    convert_currency,
    to_display_amount,
    format_currency,
    build_breakdown,
)

__all__ = [
    'BreakdownItem',
    'format_number',
    'convert_currency',
    'to_display_amount',
    'format_currency',
    'build_breakdown',
]
