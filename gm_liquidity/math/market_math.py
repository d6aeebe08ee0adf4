"""
Market Math - market token(GM) 가격 및 pool 가치

민트/소각 가격:
    supply == 0            → 1 USD
    otherwise              → pool_value_max * 10^decimals / supply

Vault(GLV) 래핑은 index token 가격을 이용한 순수 단위 변환이며,
사용할 가격 leg(min/max)를 호출자가 지정한다.
"""

import logging
from typing import Optional, Tuple

from ..constants import ONE_USD
from ..errors import UnknownTokenError
from .big_math import expand_decimals, mul_div
from .convert import convert_to_usd, convert_to_token_amount, get_mid_price, or_zero

logger = logging.getLogger(__name__)


def get_price(prices, kind: str) -> int:
    """가격 leg 선택 (min / max / mid)"""
    if kind == "min":
        return prices.min_price
    if kind == "max":
        return prices.max_price
    if kind == "mid":
        return get_mid_price(prices)
    raise ValueError(f"알 수 없는 price kind: {kind}")


def get_token_pool_type(market_info, token_address: str) -> str:
    """토큰이 속한 pool ("long" / "short")

    same-collateral 마켓에서는 항상 "long".
    """
    if token_address == market_info.long_token_address:
        return "long"
    if token_address == market_info.short_token_address:
        return "short"
    raise UnknownTokenError(token_address, market_info.market_token_address)


def get_pools_usd(market_info, long_token, short_token, price_kind: str = "max") -> Tuple[int, int]:
    """(long pool USD, short pool USD)

    가격을 매길 수 없는 쪽은 0.
    """
    long_pool_usd = convert_to_usd(
        market_info.long_pool_amount, long_token.decimals, get_price(long_token.prices, price_kind)
    )
    short_pool_usd = convert_to_usd(
        market_info.short_pool_amount, short_token.decimals, get_price(short_token.prices, price_kind)
    )
    return or_zero(long_pool_usd), or_zero(short_pool_usd)


def usd_to_market_token_amount(market_info, market_token, usd_value: int) -> int:
    """USD → 민트되는 market token 수량

    supply, pool value 가 모두 0 이면 1 USD 가격으로 민트.
    supply 만 0 이면 민트 후 가격이 1 USD 가 되도록 pool value 를 포함.
    """
    supply = market_token.total_supply or 0
    pool_value = market_info.pool_value_max

    if supply == 0 and pool_value == 0:
        return or_zero(convert_to_token_amount(usd_value, market_token.decimals, ONE_USD))

    if supply == 0 and pool_value > 0:
        return or_zero(convert_to_token_amount(usd_value + pool_value, market_token.decimals, ONE_USD))

    if pool_value == 0:
        return 0

    return mul_div(supply, usd_value, pool_value)


def get_market_token_price(market_info, market_token) -> int:
    """market token 1 개의 USD 가격 (pool 기준)"""
    supply = market_token.total_supply or 0
    if supply == 0:
        return ONE_USD

    return mul_div(market_info.pool_value_max, expand_decimals(1, market_token.decimals), supply)


def market_token_amount_to_usd(market_info, market_token, amount: int) -> int:
    """market token 수량 → USD"""
    price = get_market_token_price(market_info, market_token)
    return or_zero(convert_to_usd(amount, market_token.decimals, price))


def wrap_to_vault_token(usd: Optional[int], vault_info, use_max_price: bool) -> Optional[int]:
    """USD → vault(GLV) token 수량

    Returns:
        vault token 수량, index 가격이 없으면 None
    """
    prices = vault_info.index_token.prices
    price = prices.max_price if use_max_price else prices.min_price
    amount = convert_to_token_amount(usd, vault_info.index_token.decimals, price)
    if amount is None:
        logger.debug("vault %s index 가격 없음, 래핑 생략", vault_info.vault_address)
    return amount


def vault_token_to_usd(amount: int, vault_info, use_max_price: bool) -> int:
    """vault(GLV) token 수량 → USD"""
    prices = vault_info.index_token.prices
    price = prices.max_price if use_max_price else prices.min_price
    return or_zero(convert_to_usd(amount, vault_info.index_token.decimals, price))
