"""세금 계산 입력/결과 모델"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict


class Currency(str, Enum):
    """결과 표시 통화"""
    KRW = "KRW"
    USD = "USD"


@dataclass(frozen=True)
class TaxInput:
    """세금 계산 입력값

    호출자가 검증을 마친 값만 담습니다. 금액은 USD, 환율은 KRW/USD 입니다.

    Attributes:
        purchase_price: 매수 금액 (USD, 0 이상)
        sale_price: 매도 금액 (USD, 0 이상)
        dividends: 배당금 (USD, 0 이상)
        exchange_rate: 환율 (KRW/USD, 0 초과)
    """

    purchase_price: float
    sale_price: float
    dividends: float
    exchange_rate: float

    @property
    def capital_gain_usd(self) -> float:
        """양도소득 (USD, 손실이면 음수)"""
        return self.sale_price - self.purchase_price


@dataclass(frozen=True)
class TaxResult:
    """세금 계산 결과

    하나의 TaxInput에서 결정적으로 계산된 불변 스냅샷입니다.
    반올림은 하지 않습니다 (표시용 반올림은 호출자 책임).

    Attributes:
        us_dividend_tax: 미국 배당 원천징수세 (USD)
        us_dividend_tax_krw: 미국 배당 원천징수세 (원)
        krw_capital_gain: 양도소득 (원)
        basic_deduction: 기본공제 (원)
        taxable_capital_gain: 과세 대상 양도소득 (원, 0 이상)
        kr_capital_gain_tax: 한국 양도소득세 (원)
        krw_dividends: 배당소득 (원)
        kr_dividend_tax: 한국 배당소득세 (원)
        foreign_tax_credit: 외국납부세액공제 (원)
        total_kr_tax: 최종 납부세액 (원, 하한 없음)
    """

    us_dividend_tax: float
    us_dividend_tax_krw: float
    krw_capital_gain: float
    basic_deduction: float
    taxable_capital_gain: float
    kr_capital_gain_tax: float
    krw_dividends: float
    kr_dividend_tax: float
    foreign_tax_credit: float
    total_kr_tax: float

    def to_dict(self) -> Dict[str, float]:
        """딕셔너리로 변환"""
        return asdict(self)

    def get_summary(self) -> str:
        """계산 결과 요약

        Returns:
            사람이 읽기 쉬운 형태의 요약 (원 단위)
        """
        return f"""
=== 미국 주식 세금 계산 결과 ===

미국 배당세:      {self.us_dividend_tax_krw:>18,.0f}원
양도소득:         {self.krw_capital_gain:>18,.0f}원
기본공제:         {self.basic_deduction:>18,.0f}원
과세 양도소득:    {self.taxable_capital_gain:>18,.0f}원
한국 양도소득세:  {self.kr_capital_gain_tax:>18,.0f}원
배당소득:         {self.krw_dividends:>18,.0f}원
한국 배당소득세:  {self.kr_dividend_tax:>18,.0f}원
외국납부세액공제: {self.foreign_tax_credit:>18,.0f}원
─────────────────────────────────────
최종납부세액:     {self.total_kr_tax:>18,.0f}원
""".strip()

    def __str__(self) -> str:
        return self.get_summary()
