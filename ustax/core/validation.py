"""입력값 검증 (계산 엔진 호출 전 단계)"""

import math
from typing import Any

from .models import TaxInput


INVALID_INPUT_MESSAGE = "모든 값은 0 이상이어야 하며, 환율은 0보다 커야 합니다."
AMOUNT_TOO_LARGE_MESSAGE = "금액이 너무 큽니다."


class InputValidationError(ValueError):
    """입력값 검증 실패

    Attributes:
        field: 문제가 된 필드명
        message: 사용자에게 보여줄 메시지
    """

    def __init__(self, field: str, message: str = INVALID_INPUT_MESSAGE):
        self.field = field
        self.message = message
        super().__init__(f"{message} (field={field})")


def _to_number(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InputValidationError(field, "숫자 값을 입력해주세요.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InputValidationError(field, "숫자 값을 입력해주세요.")
    if not math.isfinite(number):
        raise InputValidationError(field, "숫자 값을 입력해주세요.")
    return number


def validate_tax_input(
    purchase_price: Any,
    sale_price: Any,
    dividends: Any,
    exchange_rate: Any
) -> TaxInput:
    """원시 입력값을 검증하여 TaxInput 생성

    Args:
        purchase_price: 매수 금액 (USD)
        sale_price: 매도 금액 (USD)
        dividends: 배당금 (USD)
        exchange_rate: 환율 (KRW/USD)

    Returns:
        검증된 TaxInput

    Raises:
        InputValidationError: 숫자가 아니거나 음수 금액, 0 이하 환율, 원화 환산값 초과인 경우
    """
    amounts = {
        'purchase_price': _to_number('purchase_price', purchase_price),
        'sale_price': _to_number('sale_price', sale_price),
        'dividends': _to_number('dividends', dividends),
    }
    rate = _to_number('exchange_rate', exchange_rate)

    for field, value in amounts.items():
        if value < 0:
            raise InputValidationError(field)
    if rate <= 0:
        raise InputValidationError('exchange_rate')

    # 원화 환산값이 float 범위를 넘으면 결과를 표시할 수 없음
    for field, value in amounts.items():
        if not math.isfinite(value * rate):
            raise InputValidationError(field, AMOUNT_TOO_LARGE_MESSAGE)

    return TaxInput(exchange_rate=rate, **amounts)

