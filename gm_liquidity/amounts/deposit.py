"""
Deposit Amounts - GM/GLV 입금 수량 계산

온체인 ExecuteDeposit 정산과 동일한 순서/반올림으로 견적을 계산한다.

전략:
- byCollaterals: long/short 입력 → 민트되는 market token 수량
- byMarketToken: 원하는 market token 수량 → 필요한 long/short 수량

가격 leg:
- 입금 notional 평가: mid price
- fee 차감 및 민트: token_in min price
- positive impact 보너스: token_out max price

결과는 frozen DepositAmounts 이며 단계마다 replace() 로 새로 만든다.
"""

import logging
from dataclasses import replace
from typing import NamedTuple, Tuple

from ..data.types import DepositAmounts
from ..math.big_math import mul_div
from ..math.convert import convert_to_token_amount, convert_to_usd, get_mid_price, or_zero
from ..math.fee_math import get_swap_fee, get_ui_fee
from ..math.market_math import (
    get_pools_usd,
    market_token_amount_to_usd,
    usd_to_market_token_amount,
    vault_token_to_usd,
    wrap_to_vault_token,
)
from ..math.price_impact_math import apply_swap_impact_with_cap, get_price_impact_for_swap
from .schemas import ByCollaterals, ByMarketToken, DepositAmountsRequest

logger = logging.getLogger(__name__)


class _SideMint(NamedTuple):
    """collateral 한쪽의 민트 기여"""
    swap_fee_usd: int
    ui_fee_usd: int
    market_token_amount: int
    impact_capped: bool


def compute_deposit_amounts(request: DepositAmountsRequest) -> DepositAmounts:
    """Deposit 수량 계산

    Args:
        request: DepositAmountsRequest (strategy 는 request.amounts 로 구분)

    Returns:
        DepositAmounts (모든 필드 기본값 0)
    """
    if isinstance(request.amounts, ByCollaterals):
        return _deposit_by_collaterals(request)
    return _deposit_by_market_token(request)


def get_deposit_amounts(strategy: str = "byCollaterals", **params) -> DepositAmounts:
    """키워드 인자로 요청을 만들어 계산

    Example:
        get_deposit_amounts(
            market_info=market, market_token=gm, long_token=eth, short_token=usdc,
            long_token_amount=10**18, short_token_amount=0,
        )
    """
    amount_keys = ("long_token_amount", "short_token_amount", "market_token_amount")
    amounts = {key: params.pop(key) for key in amount_keys if key in params}
    amounts["strategy"] = strategy
    return compute_deposit_amounts(DepositAmountsRequest(amounts=amounts, **params))


def _deposit_by_collaterals(request: DepositAmountsRequest) -> DepositAmounts:
    amounts: ByCollaterals = request.amounts
    market_info = request.market_info
    market_token = request.market_token
    long_token = request.long_token
    short_token = request.short_token

    values = DepositAmounts()

    if amounts.long_token_amount == 0 and amounts.short_token_amount == 0:
        return values

    values = replace(
        values,
        long_token_amount=amounts.long_token_amount,
        long_token_usd=or_zero(
            convert_to_usd(amounts.long_token_amount, long_token.decimals, get_mid_price(long_token.prices))
        ),
    )

    # GM → GLV: fee/impact 없이 GM 을 GLV 로 단위 변환만
    if request.is_market_token_deposit and request.vault_info:
        glv_token_amount = or_zero(wrap_to_vault_token(values.long_token_usd, request.vault_info, use_max_price=False))
        return replace(
            values,
            market_token_amount=glv_token_amount,
            market_token_usd=vault_token_to_usd(glv_token_amount, request.vault_info, use_max_price=False),
        )

    values = replace(
        values,
        short_token_amount=amounts.short_token_amount,
        short_token_usd=or_zero(
            convert_to_usd(amounts.short_token_amount, short_token.decimals, get_mid_price(short_token.prices))
        ),
    )

    price_impact_usd = get_price_impact_for_swap(
        market_info, long_token, short_token, values.long_token_usd, values.short_token_usd
    )
    values = replace(values, swap_price_impact_delta_usd=price_impact_usd)

    total_deposit_usd = values.long_token_usd + values.short_token_usd

    sides = (
        (long_token, short_token, values.long_token_amount, values.long_token_usd),
        (short_token, long_token, values.short_token_amount, values.short_token_usd),
    )
    for token_in, token_out, amount, amount_usd in sides:
        if amount_usd <= 0:
            logger.debug("토큰 %s 입금 USD 0, 건너뜀", token_in.address)
            continue

        side = _mint_for_side(
            request,
            token_in,
            token_out,
            amount,
            amount_usd,
            mul_div(price_impact_usd, amount_usd, total_deposit_usd),
            price_impact_usd > 0,
        )
        values = replace(
            values,
            swap_fee_usd=values.swap_fee_usd + side.swap_fee_usd,
            ui_fee_usd=values.ui_fee_usd + side.ui_fee_usd,
            market_token_amount=values.market_token_amount + side.market_token_amount,
            price_impact_capped=values.price_impact_capped or side.impact_capped,
        )

    values = replace(
        values,
        market_token_usd=or_zero(
            convert_to_usd(values.market_token_amount, market_token.decimals, market_token.prices.min_price)
        ),
    )

    if request.vault_info:
        glv_token_amount = wrap_to_vault_token(values.market_token_usd, request.vault_info, use_max_price=True)
        if glv_token_amount is not None and glv_token_amount > 0:
            values = replace(values, market_token_amount=glv_token_amount)

    return values


def _mint_for_side(
    request: DepositAmountsRequest,
    token_in,
    token_out,
    amount: int,
    amount_usd: int,
    price_impact_share_usd: int,
    for_positive_impact: bool
) -> _SideMint:
    """한쪽 collateral 의 fee 계산 후 민트 수량"""
    swap_fee_usd = 0 if request.for_shift else get_swap_fee(request.market_info, amount_usd, for_positive_impact)
    ui_fee_usd = get_ui_fee(amount_usd, request.ui_fee_factor)

    market_token_amount, impact_capped = _market_token_amount_by_collateral(
        request,
        token_in,
        token_out,
        amount,
        price_impact_share_usd,
        swap_fee_usd,
        ui_fee_usd,
    )
    return _SideMint(swap_fee_usd, ui_fee_usd, market_token_amount, impact_capped)


def _market_token_amount_by_collateral(
    request: DepositAmountsRequest,
    token_in,
    token_out,
    amount: int,
    price_impact_delta_usd: int,
    swap_fee_usd: int,
    ui_fee_usd: int
) -> Tuple[int, bool]:
    """token_in 입금으로 민트되는 market token 수량과 impact cap 여부

    positive impact 는 token_out 보너스로 추가 민트 (입금분 민트는 그대로).
    negative impact 는 토큰 수량(음수)으로 바꿔 입금분에 더한다.
    """
    market_info = request.market_info
    market_token = request.market_token

    swap_fee_amount = or_zero(convert_to_token_amount(swap_fee_usd, token_in.decimals, token_in.prices.min_price))
    ui_fee_amount = or_zero(convert_to_token_amount(ui_fee_usd, token_in.decimals, token_in.prices.min_price))

    amount_in_after_fees = amount - swap_fee_amount - ui_fee_amount
    mint_amount = 0

    if price_impact_delta_usd > 0:
        impact = apply_swap_impact_with_cap(market_info, token_out, price_impact_delta_usd)
        bonus_usd = or_zero(
            convert_to_usd(impact.impact_delta_amount, token_out.decimals, token_out.prices.max_price)
        )
        mint_amount += usd_to_market_token_amount(market_info, market_token, bonus_usd)
    else:
        impact = apply_swap_impact_with_cap(market_info, token_in, price_impact_delta_usd)
        amount_in_after_fees += impact.impact_delta_amount

    if amount_in_after_fees < 0:
        logger.debug("토큰 %s fee/impact 가 입금액 초과, 0 으로 처리", token_in.address)
        amount_in_after_fees = 0

    amount_in_usd = or_zero(convert_to_usd(amount_in_after_fees, token_in.decimals, token_in.prices.min_price))
    mint_amount += usd_to_market_token_amount(market_info, market_token, amount_in_usd)

    return mint_amount, impact.was_capped


def _deposit_by_market_token(request: DepositAmountsRequest) -> DepositAmounts:
    amounts: ByMarketToken = request.amounts
    market_info = request.market_info
    market_token = request.market_token
    long_token = request.long_token
    short_token = request.short_token
    vault_info = request.vault_info

    values = DepositAmounts()

    if amounts.market_token_amount == 0:
        return values

    if vault_info:
        market_token_usd = vault_token_to_usd(amounts.market_token_amount, vault_info, use_max_price=False)
    else:
        market_token_usd = market_token_amount_to_usd(market_info, market_token, amounts.market_token_amount)

    values = replace(values, market_token_amount=amounts.market_token_amount, market_token_usd=market_token_usd)

    # GM → GLV: 필요한 GM 수량만 계산
    if request.is_market_token_deposit and vault_info:
        return replace(
            values,
            long_token_amount=or_zero(
                convert_to_token_amount(market_token_usd, market_token.decimals, market_token.prices.min_price)
            ),
        )

    long_token_usd, short_token_usd = _split_market_token_usd(request, market_token_usd)

    price_impact_usd = get_price_impact_for_swap(
        market_info, long_token, short_token, long_token_usd, short_token_usd
    )

    swap_fee_usd = 0 if request.for_shift else get_swap_fee(market_info, market_token_usd, price_impact_usd > 0)
    ui_fee_usd = get_ui_fee(market_token_usd, request.ui_fee_factor)
    total_fee_usd = swap_fee_usd + ui_fee_usd

    total_deposit_usd = long_token_usd + short_token_usd

    # fee 와 negative impact 만큼 필요한 입금액을 늘림 (positive impact 는 무시)
    if total_deposit_usd > 0:
        long_token_usd, short_token_usd = (
            long_token_usd + mul_div(total_fee_usd, long_token_usd, total_deposit_usd),
            short_token_usd + mul_div(total_fee_usd, short_token_usd, total_deposit_usd),
        )
        total_deposit_usd = long_token_usd + short_token_usd

        if price_impact_usd < 0 and total_deposit_usd > 0:
            long_token_usd, short_token_usd = (
                long_token_usd + mul_div(-price_impact_usd, long_token_usd, total_deposit_usd),
                short_token_usd + mul_div(-price_impact_usd, short_token_usd, total_deposit_usd),
            )
    else:
        logger.debug("입금 USD 합계 0, fee/impact 분배 생략")

    return replace(
        values,
        long_token_usd=long_token_usd,
        short_token_usd=short_token_usd,
        long_token_amount=or_zero(
            convert_to_token_amount(long_token_usd, long_token.decimals, get_mid_price(long_token.prices))
        ),
        short_token_amount=or_zero(
            convert_to_token_amount(short_token_usd, short_token.decimals, get_mid_price(short_token.prices))
        ),
        swap_fee_usd=swap_fee_usd,
        ui_fee_usd=ui_fee_usd,
        swap_price_impact_delta_usd=price_impact_usd,
    )


def _split_market_token_usd(request: DepositAmountsRequest, market_token_usd: int) -> Tuple[int, int]:
    """market token USD 를 (long USD, short USD) 로 분배

    - shift: 현재 pool 구성 비율 (max price)
    - 양쪽 포함 + 이전 입력 있음: 이전 입력 비율
    - 한쪽만 포함: 100% 그쪽
    """
    amounts: ByMarketToken = request.amounts
    long_token = request.long_token
    short_token = request.short_token

    if request.for_shift:
        long_pool_usd, short_pool_usd = get_pools_usd(request.market_info, long_token, short_token, "max")
        total_pool_usd = long_pool_usd + short_pool_usd
        if total_pool_usd == 0:
            logger.debug("마켓 %s pool USD 0, shift 분배 생략", request.market_info.market_token_address)
            return 0, 0
        return (
            mul_div(market_token_usd, long_pool_usd, total_pool_usd),
            mul_div(market_token_usd, short_pool_usd, total_pool_usd),
        )

    prev_long_token_usd = or_zero(
        convert_to_usd(amounts.long_token_amount, long_token.decimals, get_mid_price(long_token.prices))
    )
    prev_short_token_usd = or_zero(
        convert_to_usd(amounts.short_token_amount, short_token.decimals, get_mid_price(short_token.prices))
    )
    prev_sum_usd = prev_long_token_usd + prev_short_token_usd

    if request.include_long_token and request.include_short_token and prev_sum_usd > 0:
        long_token_usd = mul_div(market_token_usd, prev_long_token_usd, prev_sum_usd)
        return long_token_usd, market_token_usd - long_token_usd

    if request.include_long_token:
        return market_token_usd, 0

    if request.include_short_token:
        return 0, market_token_usd

    return 0, 0
