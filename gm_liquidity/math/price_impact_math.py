"""
Price Impact Math - swap price impact 계산

Swap 이 long/short pool 불균형을 얼마나 바꾸는지에 따라 USD impact 를 계산.
음수 = 사용자 비용, 양수 = rebate (swap impact pool 예산으로 cap).

핵심 공식:
    f(diff) = factor * diff^exponent                 # 모두 10^30 스케일

    same-side rebalance (불균형 부호 유지):
        impact = ±|f(currentDiff) - f(nextDiff)|     # diff 가 줄면 +, factor_positive
    crossover rebalance (불균형 부호 반전):
        impact = f+(currentDiff) - f-(nextDiff)
"""

import logging
from decimal import Decimal, localcontext, ROUND_FLOOR
from typing import NamedTuple

from ..constants import FLOAT_PRECISION, EXPONENT_DECIMAL_DIGITS
from ..errors import InvalidInputError, NegativePoolAmountError
from .big_math import apply_factor, expand_decimals, mul_div, round_up_magnitude_division
from .convert import convert_to_token_amount, convert_to_usd, get_mid_price, or_zero
from .market_math import get_token_pool_type

logger = logging.getLogger(__name__)


class ImpactAmount(NamedTuple):
    """impact 를 토큰 수량으로 변환한 결과"""
    impact_delta_amount: int  # 부호 있는 토큰 수량 (최소 단위)
    capped_diff_usd: int  # cap 으로 잘려나간 USD

    @property
    def was_capped(self) -> bool:
        return self.capped_diff_usd > 0


def apply_exponent_factor(float_value: int, exponent_factor: int) -> int:
    """float_value ^ exponent (둘 다 10^30 스케일)

    - 1 미만의 값은 0
    - 정수 exponent 는 정확한 정수 거듭제곱
    - 그 외에는 78 자리 decimal 거듭제곱 (binary float 사용 안 함)
    """
    if float_value < FLOAT_PRECISION:
        return 0

    if exponent_factor == FLOAT_PRECISION:
        return float_value

    if exponent_factor % FLOAT_PRECISION == 0:
        exponent = exponent_factor // FLOAT_PRECISION
        if exponent == 0:
            return FLOAT_PRECISION
        return float_value ** exponent // FLOAT_PRECISION ** (exponent - 1)

    with localcontext() as ctx:
        ctx.prec = EXPONENT_DECIMAL_DIGITS
        ctx.rounding = ROUND_FLOOR
        base = Decimal(float_value) / FLOAT_PRECISION
        exponent = Decimal(exponent_factor) / FLOAT_PRECISION
        return int(base ** exponent * FLOAT_PRECISION)


def apply_impact_factor(diff_usd: int, impact_factor: int, exponent_factor: int) -> int:
    """f(diff) = factor * diff^exponent"""
    return apply_factor(apply_exponent_factor(diff_usd, exponent_factor), impact_factor)


def _impact_for_same_side_rebalance(
    current_diff: int,
    next_diff: int,
    has_positive_impact: bool,
    factor: int,
    exponent_factor: int
) -> int:
    current_impact = apply_impact_factor(current_diff, factor, exponent_factor)
    next_impact = apply_impact_factor(next_diff, factor, exponent_factor)
    delta = abs(current_impact - next_impact)
    return delta if has_positive_impact else -delta


def _impact_for_crossover_rebalance(
    current_diff: int,
    next_diff: int,
    factor_positive: int,
    factor_negative: int,
    exponent_factor: int
) -> int:
    positive_impact = apply_impact_factor(current_diff, factor_positive, exponent_factor)
    negative_impact = apply_impact_factor(next_diff, factor_negative, exponent_factor)
    delta = abs(positive_impact - negative_impact)
    return delta if positive_impact > negative_impact else -delta


def get_price_impact_usd(
    current_long_usd: int,
    current_short_usd: int,
    next_long_usd: int,
    next_short_usd: int,
    factor_positive: int,
    factor_negative: int,
    exponent_factor: int,
    fallback_to_zero: bool = False
) -> int:
    """pool USD 변화에 따른 price impact (USD, 부호 있음)

    Args:
        current_long_usd, current_short_usd: 현재 pool USD
        next_long_usd, next_short_usd: swap 후 pool USD
        factor_positive, factor_negative: impact factor
        exponent_factor: impact exponent
        fallback_to_zero: next pool 이 음수일 때 예외 대신 0 반환

    Raises:
        NegativePoolAmountError: next pool USD 가 음수이고 fallback_to_zero 가 False
    """
    if next_long_usd < 0 or next_short_usd < 0:
        if fallback_to_zero:
            return 0
        raise NegativePoolAmountError(next_long_usd, next_short_usd)

    current_diff = abs(current_long_usd - current_short_usd)
    next_diff = abs(next_long_usd - next_short_usd)

    is_same_side_rebalance = (current_long_usd < current_short_usd) == (next_long_usd < next_short_usd)

    if is_same_side_rebalance:
        has_positive_impact = next_diff < current_diff
        factor = factor_positive if has_positive_impact else factor_negative
        return _impact_for_same_side_rebalance(
            current_diff, next_diff, has_positive_impact, factor, exponent_factor
        )

    return _impact_for_crossover_rebalance(
        current_diff, next_diff, factor_positive, factor_negative, exponent_factor
    )


def _next_pool_usd(long_token, short_token, long_pool_amount, short_pool_amount, long_delta_usd, short_delta_usd):
    # pool 가치는 mid price 기준
    long_pool_usd = or_zero(convert_to_usd(long_pool_amount, long_token.decimals, get_mid_price(long_token.prices)))
    short_pool_usd = or_zero(convert_to_usd(short_pool_amount, short_token.decimals, get_mid_price(short_token.prices)))
    return (
        long_pool_usd,
        short_pool_usd,
        long_pool_usd + long_delta_usd,
        short_pool_usd + short_delta_usd,
    )


def get_price_impact_for_swap(
    market_info,
    token_a,
    token_b,
    usd_delta_token_a: int,
    usd_delta_token_b: int,
    fallback_to_zero: bool = False
) -> int:
    """token_a/token_b 의 pool USD 변화에 대한 swap price impact

    impact 가 음수이고 마켓에 virtual inventory 가 있으면,
    virtual inventory 기준 impact 와 비교해 더 불리한 값을 반환.

    Args:
        market_info: MarketInfo
        token_a, token_b: TokenData (한쪽은 long, 한쪽은 short)
        usd_delta_token_a, usd_delta_token_b: 각 pool 의 USD 변화량

    Returns:
        price impact (USD, 부호 있음)
    """
    pool_type_a = get_token_pool_type(market_info, token_a.address)
    pool_type_b = get_token_pool_type(market_info, token_b.address)

    if pool_type_a == pool_type_b and not market_info.is_same_collaterals:
        raise InvalidInputError(
            f"같은 pool 의 토큰끼리 swap 불가: {token_a.address}, {token_b.address}"
        )

    if pool_type_a == "long":
        long_token, short_token = token_a, token_b
        long_delta_usd, short_delta_usd = usd_delta_token_a, usd_delta_token_b
    else:
        long_token, short_token = token_b, token_a
        long_delta_usd, short_delta_usd = usd_delta_token_b, usd_delta_token_a

    factors = (
        market_info.swap_impact_factor_positive,
        market_info.swap_impact_factor_negative,
        market_info.swap_impact_exponent_factor,
    )

    price_impact_usd = get_price_impact_usd(
        *_next_pool_usd(
            long_token, short_token,
            market_info.long_pool_amount, market_info.short_pool_amount,
            long_delta_usd, short_delta_usd,
        ),
        *factors,
        fallback_to_zero=fallback_to_zero,
    )

    if price_impact_usd > 0:
        return price_impact_usd

    virtual_long = market_info.virtual_pool_amount_for_long_token
    virtual_short = market_info.virtual_pool_amount_for_short_token
    if virtual_long <= 0 or virtual_short <= 0:
        return price_impact_usd

    price_impact_usd_for_virtual_inventory = get_price_impact_usd(
        *_next_pool_usd(
            long_token, short_token,
            virtual_long, virtual_short,
            long_delta_usd, short_delta_usd,
        ),
        *factors,
        fallback_to_zero=True,
    )

    return min(price_impact_usd, price_impact_usd_for_virtual_inventory)


def apply_swap_impact_with_cap(market_info, token, price_impact_delta_usd: int) -> ImpactAmount:
    """price impact (USD) → token 수량, positive impact 는 swap impact pool 로 cap

    - 양수: max price 로 변환 후 내림, impact pool 예산 초과분은 잘라냄
    - 음수: min price 로 변환, 크기를 올림 (사용자에게 더 큰 비용)

    가격이 없으면 0 수량 반환.
    """
    is_long_collateral = get_token_pool_type(market_info, token.address) == "long"
    price = token.prices.max_price if price_impact_delta_usd > 0 else token.prices.min_price

    if price <= 0:
        logger.debug("토큰 %s 가격 없음, impact 0 처리", token.address)
        return ImpactAmount(0, 0)

    if price_impact_delta_usd > 0:
        impact_delta_amount = or_zero(convert_to_token_amount(price_impact_delta_usd, token.decimals, price))
        max_impact_amount = (
            market_info.swap_impact_pool_amount_long
            if is_long_collateral
            else market_info.swap_impact_pool_amount_short
        )

        if impact_delta_amount > max_impact_amount:
            capped_diff_usd = mul_div(
                impact_delta_amount - max_impact_amount, price, expand_decimals(1, token.decimals)
            )
            logger.debug(
                "positive impact cap: token=%s amount=%d max=%d capped_usd=%d",
                token.address, impact_delta_amount, max_impact_amount, capped_diff_usd,
            )
            return ImpactAmount(max_impact_amount, capped_diff_usd)

        return ImpactAmount(impact_delta_amount, 0)

    impact_delta_amount = round_up_magnitude_division(
        price_impact_delta_usd * expand_decimals(1, token.decimals), price
    )
    return ImpactAmount(impact_delta_amount, 0)
