"""
Big Math - 고정소수점 정수 연산

온체인 컨트랙트와 동일한 정밀도의 곱셈/나눗셈.
Python int 는 임의 정밀도이므로 10^30 스케일 값끼리의 곱도 오버플로우 없음.

주의: Solidity/BigInt 의 부호 있는 나눗셈은 0 방향으로 버림(truncation).
Python `//` 는 -inf 방향(floor) 이므로 음수 피연산자에서 결과가 다름.
이 모듈의 함수들은 모두 0 방향 버림을 따른다.
"""

from ..constants import FLOAT_PRECISION


def expand_decimals(value: int, decimals: int) -> int:
    """value * 10^decimals"""
    return value * 10 ** decimals


def div_toward_zero(numerator: int, denominator: int) -> int:
    """numerator / denominator, 0 방향 버림"""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def mul_div(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator, 0 방향 버림

    음이 아닌 피연산자에서는 floor 와 동일.

    Args:
        a: 피승수
        b: 승수
        denominator: 제수 (0 이 아니어야 함)

    Returns:
        중간값 전체 정밀도로 계산한 몫
    """
    return div_toward_zero(a * b, denominator)


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림 (음이 아닌 피연산자)"""
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result


def round_up_magnitude_division(numerator: int, denominator: int) -> int:
    """|numerator / denominator| 를 올림하고 부호 유지

    음수 impact 를 토큰 수량으로 바꿀 때 사용자에게 더 큰 크기를 부과한다.
    """
    magnitude = div_rounding_up(abs(numerator), abs(denominator))
    return -magnitude if (numerator < 0) != (denominator < 0) else magnitude


def apply_factor(value: int, factor: int) -> int:
    """value * factor / FLOAT_PRECISION"""
    return mul_div(value, factor, FLOAT_PRECISION)
