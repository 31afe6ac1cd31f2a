"""입력값 검증 테스트"""

import pytest

from ustax.core import TaxInput, InputValidationError, validate_tax_input
from ustax.core.validation import AMOUNT_TOO_LARGE_MESSAGE, INVALID_INPUT_MESSAGE


class TestValidateTaxInput:
    """validate_tax_input 테스트"""

    def test_valid_input(self):
        tax_input = validate_tax_input(10000, 12000, 500, 1300)

        assert tax_input == TaxInput(10000.0, 12000.0, 500.0, 1300.0)
        assert tax_input.capital_gain_usd == 2000

    def test_numeric_strings_are_coerced(self):
        """폼 입력 문자열도 숫자로 변환"""
        tax_input = validate_tax_input("10000", "12000.5", "0", "1300")

        assert tax_input.sale_price == 12000.5
        assert tax_input.dividends == 0.0

    def test_zero_amounts_are_allowed(self):
        tax_input = validate_tax_input(0, 0, 0, 0.01)

        assert tax_input.exchange_rate == 0.01

    @pytest.mark.parametrize("field,args", [
        ('purchase_price', (-1, 0, 0, 1300)),
        ('sale_price', (0, -0.01, 0, 1300)),
        ('dividends', (0, 0, -500, 1300)),
    ])
    def test_negative_amount(self, field, args):
        with pytest.raises(InputValidationError) as exc_info:
            validate_tax_input(*args)

        assert exc_info.value.field == field
        assert exc_info.value.message == INVALID_INPUT_MESSAGE

    @pytest.mark.parametrize("rate", [0, -1300])
    def test_non_positive_exchange_rate(self, rate):
        with pytest.raises(InputValidationError) as exc_info:
            validate_tax_input(0, 0, 0, rate)

        assert exc_info.value.field == 'exchange_rate'

    @pytest.mark.parametrize("value", ["abc", None, float('nan'), float('inf'), True])
    def test_not_a_number(self, value):
        with pytest.raises(InputValidationError) as exc_info:
            validate_tax_input(value, 0, 0, 1300)

        assert exc_info.value.field == 'purchase_price'
        assert exc_info.value.message == "숫자 값을 입력해주세요."

    @pytest.mark.parametrize("args,field", [
        ((1e306, 0, 0, 1300), 'purchase_price'),
        ((0, 1e306, 0, 1300), 'sale_price'),
        ((0, 0, 1e306, 1300), 'dividends'),
    ])
    def test_krw_amount_overflow(self, args, field):
        """원화 환산값이 float 범위를 넘는 경우"""
        with pytest.raises(InputValidationError) as exc_info:
            validate_tax_input(*args)

        assert exc_info.value.field == field
        assert exc_info.value.message == AMOUNT_TOO_LARGE_MESSAGE

    def test_is_value_error(self):
        """InputValidationError는 ValueError"""
        with pytest.raises(ValueError):
            validate_tax_input(0, 0, 0, 0)
