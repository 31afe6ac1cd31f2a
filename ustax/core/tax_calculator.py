"""TaxCalculator: 미국 주식 세금 계산기 (한국 거주자)"""

from typing import List, Optional, Tuple

from .models import TaxInput, TaxResult
from .calculation_trace import CalculationTrace
from .rule_engine import RuleEngine


class TaxCalculator:
    """미국 주식 양도소득세 및 배당소득세 계산기

    검증된 TaxInput을 받아 미국 원천징수세, 한국 양도소득세, 한국 배당소득세,
    외국납부세액공제, 최종 납부세액을 계산합니다. 상태를 갖지 않는 순수 계산이며
    입력값을 다시 검증하지 않습니다.

    Attributes:
        rule_engine: 세율 규칙 엔진
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        """TaxCalculator 초기화

        Args:
            rule_engine: 세율 규칙 엔진 (None이면 기본 규칙 파일 사용)
        """
        self.rule_engine = rule_engine or RuleEngine()
        self.us_dividend_withholding_rate = self.rule_engine.get_us_dividend_withholding_rate()
        self.basic_deduction = self.rule_engine.get_basic_deduction()
        self.capital_gain_tax_rate = self.rule_engine.get_capital_gain_tax_rate()
        self.dividend_tax_rate = self.rule_engine.get_dividend_tax_rate()

    @property
    def rule_version(self) -> str:
        return self.rule_engine.version

    def compute(self, tax_input: TaxInput) -> TaxResult:
        """세금 계산

        Args:
            tax_input: 검증된 입력값

        Returns:
            계산 결과 객체
        """
        rate = tax_input.exchange_rate

        # 미국 측 세금
        capital_gain_usd = tax_input.sale_price - tax_input.purchase_price
        us_dividend_tax = tax_input.dividends * self.us_dividend_withholding_rate

        # 한국 양도소득세: 기본공제 후 과세 (손실은 0으로)
        krw_capital_gain = capital_gain_usd * rate
        taxable_capital_gain = max(0.0, krw_capital_gain - self.basic_deduction)
        kr_capital_gain_tax = taxable_capital_gain * self.capital_gain_tax_rate

        # 한국 배당소득세 (단일세율 근사)
        krw_dividends = tax_input.dividends * rate
        kr_dividend_tax = krw_dividends * self.dividend_tax_rate

        # 외국납부세액공제는 배당소득세 한도 내에서만
        foreign_tax_credit = min(us_dividend_tax * rate, kr_dividend_tax)

        # 최종 납부세액 (하한 없음)
        total_kr_tax = kr_capital_gain_tax + kr_dividend_tax - foreign_tax_credit

        return TaxResult(
            us_dividend_tax=us_dividend_tax,
            us_dividend_tax_krw=us_dividend_tax * rate,
            krw_capital_gain=krw_capital_gain,
            basic_deduction=self.basic_deduction,
            taxable_capital_gain=taxable_capital_gain,
            kr_capital_gain_tax=kr_capital_gain_tax,
            krw_dividends=krw_dividends,
            kr_dividend_tax=kr_dividend_tax,
            foreign_tax_credit=foreign_tax_credit,
            total_kr_tax=total_kr_tax,
        )

    def calculate_with_trace(
        self,
        tax_input: TaxInput
    ) -> Tuple[TaxResult, List[CalculationTrace]]:
        """세금 계산 + 단계별 계산 추적

        Args:
            tax_input: 검증된 입력값

        Returns:
            (계산 결과, 계산 추적 리스트) 튜플
        """
        result = self.compute(tax_input)
        return result, self._build_traces(tax_input, result)

    def _build_traces(
        self,
        tax_input: TaxInput,
        result: TaxResult
    ) -> List[CalculationTrace]:
        """계산 결과로부터 단계별 추적 정보 생성"""
        rate = tax_input.exchange_rate
        withholding = self.rule_engine.get_rule_info('us_dividend_withholding')
        capital_gain = self.rule_engine.get_rule_info('capital_gain')
        dividend = self.rule_engine.get_rule_info('dividend')
        credit = self.rule_engine.get_rule_info('foreign_tax_credit')

        return [
            CalculationTrace(
                step_name="calculate_capital_gain",
                input_values={
                    'sale_price': tax_input.sale_price,
                    'purchase_price': tax_input.purchase_price,
                    'exchange_rate': rate,
                },
                applied_rule="basic_formula",
                output_value=result.krw_capital_gain,
                formula="(sale_price - purchase_price) × exchange_rate",
                notes=f"양도소득 ${tax_input.capital_gain_usd:,.2f}",
            ),
            CalculationTrace(
                step_name="calculate_us_dividend_tax",
                input_values={
                    'dividends': tax_input.dividends,
                    'withholding_rate': self.us_dividend_withholding_rate,
                },
                applied_rule=withholding['name'],
                output_value=result.us_dividend_tax,
                formula=f"dividends × {self.us_dividend_withholding_rate}",
                legal_basis=withholding['legal_basis'],
                notes=withholding['description'],
            ),
            CalculationTrace(
                step_name="apply_basic_deduction",
                input_values={
                    'krw_capital_gain': result.krw_capital_gain,
                    'basic_deduction': result.basic_deduction,
                },
                applied_rule="basic_deduction",
                output_value=result.taxable_capital_gain,
                formula="max(0, krw_capital_gain - basic_deduction)",
                legal_basis=capital_gain['legal_basis'],
            ),
            CalculationTrace(
                step_name="calculate_kr_capital_gain_tax",
                input_values={
                    'taxable_capital_gain': result.taxable_capital_gain,
                    'tax_rate': self.capital_gain_tax_rate,
                },
                applied_rule=capital_gain['name'],
                output_value=result.kr_capital_gain_tax,
                formula=f"taxable_capital_gain × {self.capital_gain_tax_rate}",
                legal_basis=capital_gain['legal_basis'],
                notes=capital_gain['description'],
            ),
            CalculationTrace(
                step_name="calculate_kr_dividend_tax",
                input_values={
                    'krw_dividends': result.krw_dividends,
                    'tax_rate': self.dividend_tax_rate,
                },
                applied_rule=dividend['name'],
                output_value=result.kr_dividend_tax,
                formula=f"dividends × exchange_rate × {self.dividend_tax_rate}",
                legal_basis=dividend['legal_basis'],
                notes=dividend['description'],
            ),
            CalculationTrace(
                step_name="calculate_foreign_tax_credit",
                input_values={
                    'us_dividend_tax_krw': result.us_dividend_tax_krw,
                    'kr_dividend_tax': result.kr_dividend_tax,
                },
                applied_rule=credit['name'],
                output_value=result.foreign_tax_credit,
                formula="min(us_dividend_tax × exchange_rate, kr_dividend_tax)",
                legal_basis=credit['legal_basis'],
                notes=credit['description'],
            ),
            CalculationTrace(
                step_name="calculate_total_kr_tax",
                input_values={
                    'kr_capital_gain_tax': result.kr_capital_gain_tax,
                    'kr_dividend_tax': result.kr_dividend_tax,
                    'foreign_tax_credit': result.foreign_tax_credit,
                },
                applied_rule="total_kr_tax",
                output_value=result.total_kr_tax,
                formula="kr_capital_gain_tax + kr_dividend_tax - foreign_tax_credit",
            ),
        ]


_default_calculator: Optional[TaxCalculator] = None


def get_default_calculator() -> TaxCalculator:
    """기본 규칙 파일을 사용하는 공용 계산기"""
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = TaxCalculator()
    return _default_calculator


def compute(
    tax_input: TaxInput,
    calculator: Optional[TaxCalculator] = None
) -> TaxResult:
    """세금 계산 (간편 함수)

    Args:
        tax_input: 검증된 입력값
        calculator: 사용할 계산기 (None이면 공용 계산기)

    Returns:
        계산 결과 객체
    """
    return (calculator or get_default_calculator()).compute(tax_input)
