"""계산 결과 표시용 통화 변환 및 포맷

계산 엔진과 분리된 표시 계층입니다. 원화(KRW) 또는 달러(USD) 표시 통화에 따라
금액을 변환하고 결과 카드 목록을 만듭니다.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Union

from ..core.models import Currency, TaxInput, TaxResult
from ..core.rule_engine import (
    US_DIVIDEND_WITHHOLDING_RATE,
    KR_CAPITAL_GAIN_TAX_RATE,
    KR_DIVIDEND_TAX_RATE,
)


Number = Union[int, float, Decimal]

_FRACTION = Decimal('0.001')


@dataclass(frozen=True)
class BreakdownItem:
    """결과 카드 항목

    Attributes:
        label: 항목명
        amount: 표시 통화 기준 금액
        display: 포맷된 금액 문자열
        description: 계산식 설명
    """

    label: str
    amount: float
    display: str
    description: str

    def to_dict(self) -> dict:
        return {
            'label': self.label,
            'amount': self.amount,
            'display': self.display,
            'description': self.description,
        }


def format_number(value: Number) -> str:
    """한국 로케일 숫자 포맷 (천 단위 구분, 소수점 최대 3자리)

    >>> format_number(1234567.8912)
    '1,234,567.891'
    >>> format_number(59800.0)
    '59,800'
    """
    number = Decimal(str(value))
    if number.is_nan():
        return "NaN"
    if number.is_infinite():
        return "-∞" if number < 0 else "∞"

    # 기본 정밀도(28자리)로는 큰 금액을 소수점 3자리로 맞출 수 없음
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 5)
        quantized = number.quantize(_FRACTION, rounding=ROUND_HALF_UP)
    if quantized == 0:
        return "0"

    text = format(quantized, ',f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def convert_currency(amount: Number, exchange_rate: Number, to_usd: bool = False) -> float:
    """통화 변환

    Args:
        amount: 변환할 금액
        exchange_rate: 환율 (KRW/USD)
        to_usd: True면 KRW -> USD, False면 USD -> KRW
    """
    if to_usd:
        return float(amount) / float(exchange_rate)
    return float(amount) * float(exchange_rate)


def to_display_amount(
    amount: Number,
    currency: Currency,
    exchange_rate: Number,
    is_usd: bool = False
) -> float:
    """금액을 표시 통화 단위로 변환

    Args:
        amount: 금액
        currency: 표시 통화
        exchange_rate: 환율 (KRW/USD)
        is_usd: amount가 USD 금액이면 True (기본은 원화 금액)
    """
    currency = Currency(currency)
    if currency == Currency.USD:
        return float(amount) if is_usd else convert_currency(amount, exchange_rate, to_usd=True)
    return convert_currency(amount, exchange_rate) if is_usd else float(amount)


def format_currency(
    amount: Number,
    currency: Currency,
    exchange_rate: Number,
    is_usd: bool = False
) -> str:
    """표시 통화에 맞춰 금액 문자열 생성

    USD 표시는 '$1,234', KRW 표시는 '1,234원' 형태입니다.
    """
    currency = Currency(currency)
    value = format_number(to_display_amount(amount, currency, exchange_rate, is_usd))
    if currency == Currency.USD:
        return f"${value}"
    return f"{value}원"


def _percent(rate: float) -> str:
    return f"{rate * 100:g}%"


def build_breakdown(
    tax_input: TaxInput,
    result: TaxResult,
    currency: Currency = Currency.KRW,
    withholding_rate: float = US_DIVIDEND_WITHHOLDING_RATE,
    capital_gain_tax_rate: float = KR_CAPITAL_GAIN_TAX_RATE,
    dividend_tax_rate: float = KR_DIVIDEND_TAX_RATE
) -> List[BreakdownItem]:
    """결과 카드 목록 생성

    Args:
        tax_input: 계산에 사용한 입력값
        result: 계산 결과
        currency: 표시 통화
        withholding_rate: 미국 배당 원천징수세율 (설명 문구용)
        capital_gain_tax_rate: 양도소득세율 (설명 문구용)
        dividend_tax_rate: 배당소득세율 (설명 문구용)

    Returns:
        표시 순서대로 정렬된 BreakdownItem 리스트
    """
    currency = Currency(currency)
    rate = tax_input.exchange_rate
    is_krw = currency == Currency.KRW
    gain_usd = tax_input.capital_gain_usd
    dividends = tax_input.dividends

    def item(label: str, amount: Number, description: str, is_usd: bool = False) -> BreakdownItem:
        return BreakdownItem(
            label=label,
            amount=to_display_amount(amount, currency, rate, is_usd),
            display=format_currency(amount, currency, rate, is_usd),
            description=description,
        )

    if is_krw:
        gain_desc = f"${format_number(gain_usd)} × {format_number(rate)}원"
        dividend_desc = f"${format_number(dividends)} × {format_number(rate)}원"
        us_tax_desc = f"${format_number(result.us_dividend_tax)} × {format_number(rate)}원"
        kr_gain_tax_desc = (
            f"({format_number(result.krw_capital_gain)}원 - "
            f"{format_number(result.basic_deduction)}원) × {_percent(capital_gain_tax_rate)}"
        )
        kr_dividend_tax_desc = f"{format_number(result.krw_dividends)}원 × {_percent(dividend_tax_rate)}"
    else:
        gain_desc = f"{format_number(gain_usd * rate)}원 ÷ {format_number(rate)}"
        dividend_desc = f"{format_number(dividends * rate)}원 ÷ {format_number(rate)}"
        us_tax_desc = f"{format_number(dividends)} × {_percent(withholding_rate)}"
        kr_gain_tax_desc = (
            f"${format_number((result.krw_capital_gain - result.basic_deduction) / rate)} "
            f"× {_percent(capital_gain_tax_rate)}"
        )
        kr_dividend_tax_desc = f"${format_number(dividends)} × {_percent(dividend_tax_rate)}"

    # 원화 표시일 때 양도소득/배당소득/미국 배당세는 원화 환산값, 달러 표시일 때는 USD 원금
    if is_krw:
        gain_item = item("양도소득", result.krw_capital_gain, gain_desc)
        dividend_item = item("배당소득", result.krw_dividends, dividend_desc)
        us_tax_item = item(f"미국 배당세 ({_percent(withholding_rate)})", result.us_dividend_tax_krw, us_tax_desc)
    else:
        gain_item = item("양도소득", gain_usd, gain_desc, is_usd=True)
        dividend_item = item("배당소득", dividends, dividend_desc, is_usd=True)
        us_tax_item = item(f"미국 배당세 ({_percent(withholding_rate)})", result.us_dividend_tax, us_tax_desc, is_usd=True)

    return [
        gain_item,
        dividend_item,
        us_tax_item,
        item("한국 양도소득세", result.kr_capital_gain_tax, kr_gain_tax_desc),
        item("한국 배당소득세", result.kr_dividend_tax, kr_dividend_tax_desc),
        item("외국납부세액공제", result.foreign_tax_credit, "미국에서 납부한 세금에 대한 공제액"),
        item("최종 납부세액 (한국)", result.total_kr_tax, "양도소득세 + 배당소득세 - 외국납부세액공제"),
    ]
