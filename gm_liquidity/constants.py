"""
GM/GLV 유동성 계산 상수 정의

온체인 수준 정밀도를 위한 상수들:
- USD_DECIMALS: USD 값의 고정소수점 자릿수 (10^30)
- FLOAT_PRECISION: fee/impact factor 의 스케일 (10^30)
- ONE_USD: supply 가 0 인 market token 의 기본 가격
"""

# Fixed-point 인코딩 상수
USD_DECIMALS: int = 30
FLOAT_PRECISION: int = 10 ** 30

# 1 USD (가격 기본값, supply 가 0 인 market token)
ONE_USD: int = 10 ** USD_DECIMALS

# apply_exponent_factor 의 decimal 연산 정밀도 (uint256 자릿수)
EXPONENT_DECIMAL_DIGITS: int = 78

