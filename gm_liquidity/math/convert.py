"""
Token 수량 ↔ USD 변환

가격은 "토큰 1 개당 USD" 를 10^30 스케일로 표현한 정수.
    usd    = amount * price / 10^decimals
    amount = usd * 10^decimals / price

가격이 0 또는 None 이면 해당 leg 는 가격을 매길 수 없으므로 None 반환.
호출자는 or_zero 로 명시적으로 0 기여로 처리한다.
"""

from typing import Optional

from .big_math import expand_decimals, div_toward_zero


def get_mid_price(prices) -> int:
    """(min_price + max_price) / 2

    Args:
        prices: min_price, max_price 속성을 가진 TokenPrices
    """
    return (prices.min_price + prices.max_price) // 2


def convert_to_usd(
    token_amount: Optional[int],
    token_decimals: int,
    price: Optional[int]
) -> Optional[int]:
    """토큰 수량 → USD

    Returns:
        USD (10^30 스케일), 수량이나 가격이 없으면 None
    """
    if token_amount is None or not price:
        return None

    return div_toward_zero(token_amount * price, expand_decimals(1, token_decimals))


def convert_to_token_amount(
    usd: Optional[int],
    token_decimals: int,
    price: Optional[int]
) -> Optional[int]:
    """USD → 토큰 수량

    Returns:
        토큰 수량 (최소 단위), USD 가 없거나 가격이 0 이하이면 None
    """
    if usd is None or price is None or price <= 0:
        return None

    return div_toward_zero(usd * expand_decimals(1, token_decimals), price)


def or_zero(value: Optional[int]) -> int:
    """가격을 매길 수 없는 leg(None)를 0 기여로"""
    return 0 if value is None else value
