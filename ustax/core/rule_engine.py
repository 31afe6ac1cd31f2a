"""RuleEngine: 미국 주식 세금 규칙 로더"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


# 세율 및 공제 기본값 (2023년 기준)
US_DIVIDEND_WITHHOLDING_RATE = 0.15  # 한미 조세조약 제한세율
BASIC_DEDUCTION_KRW = 50_000_000  # 5천만원 기본공제
KR_CAPITAL_GAIN_TAX_RATE = 0.242  # 22% + 지방소득세 2.2%
KR_DIVIDEND_TAX_RATE = 0.242  # 22% + 지방소득세 2.2%

DEFAULT_RULES_FILE = Path(__file__).resolve().parent.parent / "rules" / "us_stock_tax_2023.yaml"


def default_rules_file() -> Path:
    """규칙 파일 경로 (USTAX_RULES_FILE 환경 변수 우선)"""
    return Path(os.getenv("USTAX_RULES_FILE", str(DEFAULT_RULES_FILE)))


class RuleEngine:
    """YAML 파일에서 세율 규칙을 로드하는 엔진

    규칙은 생성 시점에 한 번 로드되며 이후 변경되지 않습니다.

    Attributes:
        rules_file: 규칙 파일 경로
        rules: 로드된 규칙 딕셔너리
        version: 규칙 버전
    """

    def __init__(self, rules_file: Optional[str] = None):
        """RuleEngine 초기화

        Args:
            rules_file: 규칙 파일 경로 (None이면 기본 규칙 파일)
        """
        self.rules_file = Path(rules_file) if rules_file else default_rules_file()
        self.rules = self._load_rules()
        self.version = self.rules.get('version', 'unknown')

    def _load_rules(self) -> Dict[str, Any]:
        """YAML 파일에서 규칙 로드

        Raises:
            FileNotFoundError: 규칙 파일이 없는 경우
            yaml.YAMLError: YAML 파싱 오류
        """
        if not self.rules_file.exists():
            raise FileNotFoundError(f"규칙 파일을 찾을 수 없습니다: {self.rules_file}")

        with open(self.rules_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _section(self, name: str) -> Dict[str, Any]:
        return self.rules.get(name) or {}

    def get_us_dividend_withholding_rate(self) -> float:
        """미국 배당 원천징수세율"""
        return float(self._section('us_dividend_withholding').get('rate', US_DIVIDEND_WITHHOLDING_RATE))

    def get_basic_deduction(self) -> float:
        """양도소득 기본공제 (원)"""
        return float(self._section('capital_gain').get('basic_deduction', BASIC_DEDUCTION_KRW))

    def get_capital_gain_tax_rate(self) -> float:
        """양도소득세율 (지방소득세 포함)"""
        return float(self._section('capital_gain').get('rate', KR_CAPITAL_GAIN_TAX_RATE))

    def get_dividend_tax_rate(self) -> float:
        """배당소득세율 (지방소득세 포함)"""
        return float(self._section('dividend').get('rate', KR_DIVIDEND_TAX_RATE))

    def get_rule_info(self, name: str) -> Dict[str, str]:
        """규칙 이름, 설명, 법적 근거 조회

        Args:
            name: 규칙 섹션 이름 (예: 'capital_gain')

        Returns:
            {'name', 'description', 'legal_basis'} 딕셔너리
        """
        section = self._section(name)
        return {
            'name': section.get('name', name),
            'description': section.get('description', ''),
            'legal_basis': section.get('legal_basis', ''),
        }

    def to_dict(self) -> Dict[str, Any]:
        """적용 중인 세율 요약"""
        return {
            'version': self.version,
            'us_dividend_withholding_rate': self.get_us_dividend_withholding_rate(),
            'basic_deduction': self.get_basic_deduction(),
            'kr_capital_gain_tax_rate': self.get_capital_gain_tax_rate(),
            'kr_dividend_tax_rate': self.get_dividend_tax_rate(),
        }
