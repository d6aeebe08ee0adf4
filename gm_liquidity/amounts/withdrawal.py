"""
Withdrawal Amounts - GM/GLV 출금 수량 계산

Deposit 계산의 역방향. 출금은 항상 pool 구성 비율대로 소각되므로
pool 불균형이 변하지 않고 swap price impact 는 0 이다.

전략:
- byMarketToken: 소각할 market(또는 vault) token → long/short 수령액
- byLongCollateral / byShortCollateral: 한쪽 수령액 → 반대쪽은 pool 비율
- byCollaterals: 양쪽 수령액 → 소각할 market token

pool 및 수령 토큰은 max price 로 평가한다.
"""

import logging
from dataclasses import replace
from typing import Tuple

from ..data.types import WithdrawalAmounts
from ..math.big_math import mul_div
from ..math.convert import convert_to_token_amount, convert_to_usd, or_zero
from ..math.fee_math import get_swap_fee, get_ui_fee
from ..math.market_math import (
    get_pools_usd,
    market_token_amount_to_usd,
    usd_to_market_token_amount,
    vault_token_to_usd,
    wrap_to_vault_token,
)
from .schemas import (
    BurnByLongCollateral,
    BurnByMarketToken,
    BurnByShortCollateral,
    WithdrawalAmountsRequest,
)

logger = logging.getLogger(__name__)


def compute_withdrawal_amounts(request: WithdrawalAmountsRequest) -> WithdrawalAmounts:
    """Withdrawal 수량 계산

    Args:
        request: WithdrawalAmountsRequest (strategy 는 request.amounts 로 구분)

    Returns:
        WithdrawalAmounts (모든 필드 기본값 0)
    """
    if isinstance(request.amounts, BurnByMarketToken):
        return _withdrawal_by_market_token(request)
    return _withdrawal_by_collaterals(request)


def get_withdrawal_amounts(strategy: str = "byMarketToken", **params) -> WithdrawalAmounts:
    """키워드 인자로 요청을 만들어 계산"""
    amount_keys = ("long_token_amount", "short_token_amount", "market_token_amount")
    amounts = {key: params.pop(key) for key in amount_keys if key in params}
    amounts["strategy"] = strategy
    return compute_withdrawal_amounts(WithdrawalAmountsRequest(amounts=amounts, **params))


def _withdrawal_by_market_token(request: WithdrawalAmountsRequest) -> WithdrawalAmounts:
    amounts: BurnByMarketToken = request.amounts
    market_info = request.market_info
    market_token = request.market_token
    long_token = request.long_token
    short_token = request.short_token
    vault_info = request.vault_info

    values = WithdrawalAmounts()

    if vault_info:
        glv_token_usd = vault_token_to_usd(amounts.market_token_amount, vault_info, use_max_price=False)
        market_token_amount = or_zero(
            convert_to_token_amount(glv_token_usd, market_token.decimals, market_token.prices.min_price)
        )
        values = replace(values, glv_token_amount=amounts.market_token_amount, glv_token_usd=glv_token_usd)
    else:
        market_token_amount = amounts.market_token_amount

    values = replace(
        values,
        market_token_amount=market_token_amount,
        market_token_usd=market_token_amount_to_usd(market_info, market_token, market_token_amount),
    )

    long_pool_usd, short_pool_usd = get_pools_usd(market_info, long_token, short_token, "max")
    total_pool_usd = long_pool_usd + short_pool_usd

    if total_pool_usd == 0:
        logger.debug("마켓 %s pool USD 0, 분배 생략", market_info.market_token_address)
        return values

    long_token_usd = mul_div(values.market_token_usd, long_pool_usd, total_pool_usd)
    short_token_usd = mul_div(values.market_token_usd, short_pool_usd, total_pool_usd)

    long_swap_fee_usd, long_ui_fee_usd = _withdrawal_fees(request, long_token_usd)
    short_swap_fee_usd, short_ui_fee_usd = _withdrawal_fees(request, short_token_usd)

    long_token_usd = max(long_token_usd - long_swap_fee_usd - long_ui_fee_usd, 0)
    short_token_usd = max(short_token_usd - short_swap_fee_usd - short_ui_fee_usd, 0)

    return replace(
        values,
        long_token_usd=long_token_usd,
        short_token_usd=short_token_usd,
        long_token_amount=or_zero(
            convert_to_token_amount(long_token_usd, long_token.decimals, long_token.prices.max_price)
        ),
        short_token_amount=or_zero(
            convert_to_token_amount(short_token_usd, short_token.decimals, short_token.prices.max_price)
        ),
        swap_fee_usd=long_swap_fee_usd + short_swap_fee_usd,
        ui_fee_usd=long_ui_fee_usd + short_ui_fee_usd,
    )


def _withdrawal_fees(request: WithdrawalAmountsRequest, amount_usd: int) -> Tuple[int, int]:
    """(swap fee, UI fee), 출금은 negative impact fee factor 사용"""
    swap_fee_usd = 0 if request.for_shift else get_swap_fee(request.market_info, amount_usd, False)
    return swap_fee_usd, get_ui_fee(amount_usd, request.ui_fee_factor)


def _withdrawal_by_collaterals(request: WithdrawalAmountsRequest) -> WithdrawalAmounts:
    amounts = request.amounts
    market_info = request.market_info
    market_token = request.market_token
    long_token = request.long_token
    short_token = request.short_token

    values = WithdrawalAmounts()

    long_pool_usd, short_pool_usd = get_pools_usd(market_info, long_token, short_token, "max")

    if isinstance(amounts, BurnByLongCollateral):
        if long_pool_usd == 0:
            logger.debug("마켓 %s long pool USD 0, 계산 생략", market_info.market_token_address)
            return values
        long_token_amount = amounts.long_token_amount
        long_token_usd = or_zero(convert_to_usd(long_token_amount, long_token.decimals, long_token.prices.max_price))
        short_token_usd = mul_div(long_token_usd, short_pool_usd, long_pool_usd)
        short_token_amount = or_zero(
            convert_to_token_amount(short_token_usd, short_token.decimals, short_token.prices.max_price)
        )
    elif isinstance(amounts, BurnByShortCollateral):
        if short_pool_usd == 0:
            logger.debug("마켓 %s short pool USD 0, 계산 생략", market_info.market_token_address)
            return values
        short_token_amount = amounts.short_token_amount
        short_token_usd = or_zero(
            convert_to_usd(short_token_amount, short_token.decimals, short_token.prices.max_price)
        )
        long_token_usd = mul_div(short_token_usd, long_pool_usd, short_pool_usd)
        long_token_amount = or_zero(
            convert_to_token_amount(long_token_usd, long_token.decimals, long_token.prices.max_price)
        )
    else:
        long_token_amount = amounts.long_token_amount
        short_token_amount = amounts.short_token_amount
        long_token_usd = or_zero(convert_to_usd(long_token_amount, long_token.decimals, long_token.prices.max_price))
        short_token_usd = or_zero(
            convert_to_usd(short_token_amount, short_token.decimals, short_token.prices.max_price)
        )

    legs_usd = long_token_usd + short_token_usd
    swap_fee_usd = 0 if request.for_shift else get_swap_fee(market_info, legs_usd, False)
    ui_fee_usd = get_ui_fee(legs_usd, request.ui_fee_factor)
    market_token_usd = legs_usd + swap_fee_usd + ui_fee_usd

    values = replace(
        values,
        long_token_amount=long_token_amount,
        long_token_usd=long_token_usd,
        short_token_amount=short_token_amount,
        short_token_usd=short_token_usd,
        market_token_usd=market_token_usd,
        market_token_amount=usd_to_market_token_amount(market_info, market_token, market_token_usd),
        swap_fee_usd=swap_fee_usd,
        ui_fee_usd=ui_fee_usd,
    )

    if request.vault_info:
        values = replace(
            values,
            glv_token_usd=market_token_usd,
            glv_token_amount=or_zero(wrap_to_vault_token(market_token_usd, request.vault_info, use_max_price=True)),
        )

    return values
