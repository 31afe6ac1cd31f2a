"""API 엔드포인트 통합 테스트"""

import pytest
from fastapi.testclient import TestClient

from ustax.api.main import app
from ustax.api.routers.calculate import get_audit_service, get_calculator
from ustax.audit import AuditService, AuditEventType
from ustax.core import TaxCalculator


# 테스트용 감사 서비스 (파일 기록 없음)
test_audit_service = AuditService()

client = TestClient(app)


@pytest.fixture(scope="function", autouse=True)
def audit_override():
    """테스트 동안만 감사 서비스 교체, 종료 후 원복 및 정리"""
    app.dependency_overrides[get_audit_service] = lambda: test_audit_service
    yield
    app.dependency_overrides.clear()
    test_audit_service.clear()


class FailingCalculator(TaxCalculator):
    """계산 중 예외를 던지는 계산기"""

    def calculate_with_trace(self, tax_input):
        raise RuntimeError("rule engine unavailable")


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    def test_root_endpoint(self):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert data["version"] == "0.1.0"

    def test_health_endpoint(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestCalculate:
    """세금 계산 엔드포인트 테스트"""

    def test_calculate_krw(self):
        """시나리오 A (원화 표시)"""
        response = client.post("/api/v1/calculate", json={
            "purchase_price": 10000,
            "sale_price": 12000,
            "dividends": 500,
            "exchange_rate": 1300,
            "currency": "KRW"
        })
        assert response.status_code == 200

        data = response.json()
        assert data["currency"] == "KRW"
        assert data["us_dividend_tax"] == pytest.approx(75)
        assert data["us_dividend_tax_krw"] == pytest.approx(97_500)
        assert data["krw_capital_gain"] == pytest.approx(2_600_000)
        assert data["basic_deduction"] == 50_000_000
        assert data["taxable_capital_gain"] == 0
        assert data["kr_capital_gain_tax"] == 0
        assert data["krw_dividends"] == pytest.approx(650_000)
        assert data["kr_dividend_tax"] == pytest.approx(157_300)
        assert data["foreign_tax_credit"] == pytest.approx(97_500)
        assert data["total_kr_tax"] == pytest.approx(59_800)
        assert data["rule_version"] == "2023.1"
        assert data["message"] == "세금 계산이 완료되었습니다."
        assert data["traces"] is None
        assert len(data["breakdown"]) == 7
        assert data["breakdown"][-1]["display"] == "59,800원"

    def test_calculate_usd(self):
        """달러 표시"""
        response = client.post("/api/v1/calculate", json={
            "purchase_price": 10000,
            "sale_price": 12000,
            "dividends": 500,
            "exchange_rate": 1300,
            "currency": "USD"
        })
        assert response.status_code == 200

        data = response.json()
        assert data["currency"] == "USD"
        # 결과 필드는 통화 선택과 무관하게 원 단위
        assert data["total_kr_tax"] == pytest.approx(59_800)
        assert data["breakdown"][-1]["display"] == "$46"

    def test_default_values(self):
        """기본값: 모든 금액 0, 환율 1,300원"""
        response = client.post("/api/v1/calculate", json={})
        assert response.status_code == 200

        data = response.json()
        assert data["exchange_rate"] == 1300
        assert data["currency"] == "KRW"
        assert data["total_kr_tax"] == 0

    def test_include_trace(self):
        response = client.post(
            "/api/v1/calculate?include_trace=true",
            json={"purchase_price": 100000, "sale_price": 200000}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total_kr_tax"] == pytest.approx(19_360_000)
        assert len(data["traces"]) == 7
        assert data["traces"][2]["step_name"] == "apply_basic_deduction"
        assert data["traces"][2]["output_value"] == pytest.approx(80_000_000)

    def test_calculation_is_audited(self):
        response = client.post("/api/v1/calculate", json={"dividends": 500})
        assert response.status_code == 200

        calculation_id = response.json()["calculation_id"]
        event_types = [
            entry.event_type for entry in test_audit_service.entries
            if entry.calculation_id == calculation_id
        ]
        assert event_types[0] == AuditEventType.CALCULATION_STARTED
        assert event_types[-1] == AuditEventType.CALCULATION_COMPLETED
        assert event_types.count(AuditEventType.CALCULATION_STEP) == 7

    @pytest.mark.parametrize("payload,field", [
        ({"purchase_price": -1}, "purchase_price"),
        ({"sale_price": -100}, "sale_price"),
        ({"dividends": -0.5}, "dividends"),
        ({"exchange_rate": 0}, "exchange_rate"),
        ({"exchange_rate": -1300}, "exchange_rate"),
    ])
    def test_out_of_range_input(self, payload, field):
        """범위를 벗어난 입력은 400"""
        response = client.post("/api/v1/calculate", json=payload)
        assert response.status_code == 400

        body = response.json()
        assert body["error"] == "invalid_input"
        assert body["field"] == field
        assert body["detail"] == "모든 값은 0 이상이어야 하며, 환율은 0보다 커야 합니다."

        assert [entry.event_type for entry in test_audit_service.entries] == [
            AuditEventType.VALIDATION_FAILED
        ]

    def test_amount_too_large(self):
        """원화 환산 시 float 범위를 넘는 금액은 400"""
        response = client.post("/api/v1/calculate", json={"sale_price": 1e306})
        assert response.status_code == 400

        body = response.json()
        assert body["field"] == "sale_price"
        assert body["detail"] == "금액이 너무 큽니다."

    def test_large_amount(self):
        """28자리를 넘는 원화 금액도 정상 계산 및 표시"""
        response = client.post("/api/v1/calculate", json={"sale_price": 1e22})
        assert response.status_code == 200

        data = response.json()
        assert data["krw_capital_gain"] == pytest.approx(1.3e25)
        assert data["breakdown"][0]["display"].endswith("원")

        event_types = [entry.event_type for entry in test_audit_service.entries]
        assert event_types[-1] == AuditEventType.CALCULATION_COMPLETED
        assert AuditEventType.ERROR_OCCURRED not in event_types

    def test_calculation_error(self):
        """계산 중 예외는 500으로 응답하고 ERROR_OCCURRED로 기록"""
        app.dependency_overrides[get_calculator] = lambda: FailingCalculator()

        response = client.post("/api/v1/calculate", json={"dividends": 500})
        assert response.status_code == 500
        assert "rule engine unavailable" in response.json()["detail"]

        event_types = [entry.event_type for entry in test_audit_service.entries]
        assert event_types == [
            AuditEventType.CALCULATION_STARTED,
            AuditEventType.ERROR_OCCURRED,
        ]
        error_entry = test_audit_service.entries[-1]
        assert error_entry.error_data == {
            "type": "RuntimeError",
            "message": "rule engine unavailable",
        }

    def test_non_numeric_input(self):
        response = client.post("/api/v1/calculate", json={"purchase_price": "abc"})
        assert response.status_code == 422

    def test_unknown_currency(self):
        response = client.post("/api/v1/calculate", json={"currency": "EUR"})
        assert response.status_code == 422


class TestRules:
    """세율 조회 엔드포인트 테스트"""

    def test_get_rules(self):
        response = client.get("/api/v1/calculate/rules")
        assert response.status_code == 200

        assert response.json() == {
            "version": "2023.1",
            "us_dividend_withholding_rate": 0.15,
            "basic_deduction": 50_000_000,
            "kr_capital_gain_tax_rate": 0.242,
            "kr_dividend_tax_rate": 0.242,
        }
