"""핵심 비즈니스 로직"""

from .models import Currency, TaxInput, TaxResult
from .calculation_trace import CalculationTrace, format_trace_summary
from .rule_engine import (
    RuleEngine,
    US_DIVIDEND_WITHHOLDING_RATE,
    BASIC_DEDUCTION_KRW,
    KR_CAPITAL_GAIN_TAX_RATE,
    KR_DIVIDEND_TAX_RATE,
)
from .tax_calculator import TaxCalculator, compute, get_default_calculator
from .validation import InputValidationError, validate_tax_input

__all__ = [
    'Currency',
    'TaxInput',
    'TaxResult',
    'CalculationTrace',
    'format_trace_summary',
    'RuleEngine',
    'US_DIVIDEND_WITHHOLDING_RATE',
    'BASIC_DEDUCTION_KRW',
    'KR_CAPITAL_GAIN_TAX_RATE',
    'KR_DIVIDEND_TAX_RATE',
    'TaxCalculator',
    'compute',
    'get_default_calculator',
    'InputValidationError',
    'validate_tax_input',
]
