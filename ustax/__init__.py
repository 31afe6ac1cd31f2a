"""ustax: 한국 거주자를 위한 미국 주식 세금 계산기"""

__version__ = "0.1.0"
