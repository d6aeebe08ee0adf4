"""
테스트 공용 마켓/토큰 스냅샷

기본 마켓: long 18 decimals $1, short 6 decimals $1,
pool 각 1,000,000 USD, GM supply 2,000,000 (GM 가격 $1).
"""

from ..constants import ONE_USD
from ..data.types import TokenPrices, TokenData, MarketInfo, VaultInfo

LONG = "0x0000000000000000000000000000000000000001"
SHORT = "0x0000000000000000000000000000000000000002"
GM = "0x00000000000000000000000000000000000000aa"
GLV = "0x00000000000000000000000000000000000000bb"

PERCENT = 10 ** 28  # 1% (FLOAT_PRECISION 스케일)


def usd(value: int) -> int:
    """달러 → 10^30 스케일"""
    return value * ONE_USD


def make_token(address: str, decimals: int, price: int = ONE_USD, spread: int = 0, total_supply=None) -> TokenData:
    return TokenData(
        address=address,
        decimals=decimals,
        prices=TokenPrices(min_price=price - spread, max_price=price + spread),
        total_supply=total_supply,
    )


def long_token(**kwargs) -> TokenData:
    return make_token(LONG, 18, **kwargs)


def short_token(**kwargs) -> TokenData:
    return make_token(SHORT, 6, **kwargs)


def market_token(total_supply: int = 2_000_000 * 10 ** 18, **kwargs) -> TokenData:
    return make_token(GM, 18, total_supply=total_supply, **kwargs)


def make_market(long_pool_usd: int = 1_000_000, short_pool_usd: int = 1_000_000, **overrides) -> MarketInfo:
    """$1 토큰 기준 pool 크기(달러)로 마켓 생성"""
    params = dict(
        market_token_address=GM,
        long_token_address=LONG,
        short_token_address=SHORT,
        long_pool_amount=long_pool_usd * 10 ** 18,
        short_pool_amount=short_pool_usd * 10 ** 6,
        pool_value_max=usd(long_pool_usd + short_pool_usd),
    )
    params.update(overrides)
    return MarketInfo(**params)


def make_vault(price: int = 2 * ONE_USD, decimals: int = 18) -> VaultInfo:
    return VaultInfo(vault_address=GLV, index_token=make_token(GLV, decimals, price=price))
