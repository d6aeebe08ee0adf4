"""
Math layer for GM/GLV amounts

온체인 수준 정밀도의 수학 함수들:
- big_math: mulDiv, 올림 나눗셈, applyFactor
- convert: 토큰 수량 ↔ USD, mid price
- fee_math: swap fee / UI fee
- price_impact_math: swap price impact 및 cap
- market_math: market token 가격, pool USD, vault 래핑
"""

from .big_math import (
    mul_div,
    div_rounding_up,
    round_up_magnitude_division,
    apply_factor,
    expand_decimals,
)
from .convert import (
    get_mid_price,
    convert_to_usd,
    convert_to_token_amount,
    or_zero,
)
from .fee_math import get_swap_fee, get_ui_fee
from .price_impact_math import (
    ImpactAmount,
    apply_exponent_factor,
    apply_impact_factor,
    get_price_impact_usd,
    get_price_impact_for_swap,
    apply_swap_impact_with_cap,
)
from .market_math import (
    get_token_pool_type,
    get_pools_usd,
    usd_to_market_token_amount,
    market_token_amount_to_usd,
    get_market_token_price,
    wrap_to_vault_token,
    vault_token_to_usd,
)
