"""미국 주식 세금 계산기 사용 예제"""

from ustax.core import Currency, TaxCalculator, format_trace_summary, validate_tax_input
from ustax.display import build_breakdown


def print_breakdown(tax_input, result, currency):
    for item in build_breakdown(tax_input, result, currency):
        print(f"{item.label:<16} {item.display:>18}   {item.description}")


def example_dividends_and_small_gain():
    """기본 케이스: 기본공제 이하 양도소득 + 배당"""
    print("=" * 60)
    print("예제 1: 매수 $10,000 / 매도 $12,000 / 배당 $500 / 환율 1,300원")
    print("=" * 60)

    tax_input = validate_tax_input(10000, 12000, 500, 1300)

    calculator = TaxCalculator()
    result, traces = calculator.calculate_with_trace(tax_input)

    print(result.get_summary())
    print("\n" + format_trace_summary(traces))


def example_large_gain():
    """기본공제 초과 양도소득 (원화/달러 표시 비교)"""
    print("\n" + "=" * 60)
    print("예제 2: 매수 $100,000 / 매도 $200,000 / 환율 1,300원")
    print("=" * 60)

    tax_input = validate_tax_input(100000, 200000, 0, 1300)
    result = TaxCalculator().compute(tax_input)

    print("[원화 표시]")
    print_breakdown(tax_input, result, Currency.KRW)
    print("\n[달러 표시]")
    print_breakdown(tax_input, result, Currency.USD)


if __name__ == "__main__":
    example_dividends_and_small_gain()
    example_large_gain()
