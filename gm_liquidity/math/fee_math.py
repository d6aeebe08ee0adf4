"""
Fee Math - swap fee / UI fee 계산

    swap_fee_usd = notional_usd * fee_factor / 10^30
    ui_fee_usd   = notional_usd * ui_fee_factor / 10^30

swap fee factor 는 swap 이 pool 불균형을 줄이는지(positive impact) 늘리는지
(negative impact)에 따라 다르다.
"""

from .big_math import apply_factor


def get_swap_fee(market_info, swap_amount_usd: int, for_positive_impact: bool) -> int:
    """swap fee (USD)

    Args:
        market_info: MarketInfo
        swap_amount_usd: swap notional (USD)
        for_positive_impact: price impact 가 양수인 swap 이면 True

    Returns:
        swap fee (USD, 10^30 스케일)
    """
    factor = (
        market_info.swap_fee_factor_for_positive_impact
        if for_positive_impact
        else market_info.swap_fee_factor_for_negative_impact
    )
    return apply_factor(swap_amount_usd, factor)


def get_ui_fee(amount_usd: int, ui_fee_factor: int) -> int:
    """UI fee (USD)"""
    return apply_factor(amount_usd, ui_fee_factor)
