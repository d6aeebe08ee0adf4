"""
Deposit Amounts 테스트

byCollaterals / byMarketToken 전략, vault(GLV) shortcut, fee/impact 분배를 테스트합니다.
"""

from dataclasses import astuple, fields

import pytest

from ..amounts.deposit import compute_deposit_amounts, get_deposit_amounts
from ..amounts.schemas import ByCollaterals, ByMarketToken, DepositAmountsRequest
from ..constants import FLOAT_PRECISION
from ..data.types import DepositAmounts
from .helpers import (
    long_token, short_token, market_token, make_token, make_market, make_vault, usd, PERCENT, GM,
)


def deposit_request(amounts, market=None, **overrides) -> DepositAmountsRequest:
    params = dict(
        market_info=market or make_market(),
        market_token=market_token(),
        long_token=long_token(),
        short_token=short_token(),
        amounts=amounts,
        ui_fee_factor=0,
    )
    params.update(overrides)
    return DepositAmountsRequest(**params)


def by_collaterals(long_usd: int = 0, short_usd: int = 0) -> ByCollaterals:
    """$1 토큰 기준 달러 입력"""
    return ByCollaterals(long_token_amount=long_usd * 10 ** 18, short_token_amount=short_usd * 10 ** 6)


def assert_non_negative(result):
    for field in fields(result):
        if field.name == "swap_price_impact_delta_usd":
            continue
        assert getattr(result, field.name) >= 0, field.name


class TestDepositByCollaterals:
    """byCollaterals 전략 테스트"""

    def test_zero_inputs_short_circuit(self):
        """입력이 모두 0 이면 모두 0"""
        result = compute_deposit_amounts(deposit_request(by_collaterals(0, 0)))
        assert result == DepositAmounts()
        assert all(value == 0 for value in astuple(result))

    def test_balanced_deposit_no_fees(self):
        """1000 long + 1000 short, fee/impact 0 → 2000 USD 만큼 민트"""
        result = compute_deposit_amounts(deposit_request(by_collaterals(1000, 1000)))

        assert result.long_token_amount == 1000 * 10 ** 18
        assert result.short_token_amount == 1000 * 10 ** 6
        assert result.long_token_usd == usd(1000)
        assert result.short_token_usd == usd(1000)
        assert result.market_token_amount == 2000 * 10 ** 18
        assert result.market_token_usd == usd(2000)
        assert result.swap_fee_usd == 0
        assert result.ui_fee_usd == 0
        assert result.swap_price_impact_delta_usd == 0

    def test_mid_price_for_notional(self):
        """입금 USD 는 mid price, 민트는 min price"""
        spread = usd(1) // 100
        result = compute_deposit_amounts(
            deposit_request(by_collaterals(1000, 0), long_token=long_token(spread=spread))
        )
        assert result.long_token_usd == usd(1000)
        # min price 0.99 로 민트
        assert result.market_token_amount == 990 * 10 ** 18

    def test_swap_fee_negative_impact_factor(self):
        """한쪽 입금, impact factor 0: negative fee factor 0.1% 적용"""
        market = make_market(swap_fee_factor_for_negative_impact=PERCENT // 10)
        result = compute_deposit_amounts(deposit_request(by_collaterals(1000, 0), market))

        assert result.swap_fee_usd == usd(1)
        assert result.market_token_amount == 999 * 10 ** 18

    def test_shift_skips_swap_fee(self):
        market = make_market(swap_fee_factor_for_negative_impact=PERCENT // 10)
        result = compute_deposit_amounts(deposit_request(by_collaterals(1000, 0), market, for_shift=True))

        assert result.swap_fee_usd == 0
        assert result.market_token_amount == 1000 * 10 ** 18

    def test_ui_fee(self):
        result = compute_deposit_amounts(deposit_request(by_collaterals(1000, 1000), ui_fee_factor=PERCENT))

        assert result.ui_fee_usd == usd(20)
        assert result.market_token_amount == 1980 * 10 ** 18

    def test_ui_fee_monotonic(self):
        """UI fee factor 증가 → ui_fee_usd 증가, market token 감소 또는 동일"""
        results = [
            compute_deposit_amounts(deposit_request(by_collaterals(1000, 500), ui_fee_factor=factor))
            for factor in (0, PERCENT // 100, PERCENT // 10, PERCENT, 5 * PERCENT)
        ]
        for prev, curr in zip(results, results[1:]):
            assert curr.ui_fee_usd > prev.ui_fee_usd
            assert curr.market_token_amount <= prev.market_token_amount

    def test_negative_impact_reduces_input(self):
        """negative impact 는 입금 수량에서 차감 (크기 올림)"""
        market = make_market(
            swap_impact_factor_negative=10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
        )
        result = compute_deposit_amounts(deposit_request(by_collaterals(1000, 0), market))

        assert result.swap_price_impact_delta_usd == -(10 ** 28)
        assert result.market_token_amount == 1000 * 10 ** 18 - 10 ** 16

    def test_positive_impact_bonus(self):
        """positive impact 는 token_out 보너스로 추가 민트"""
        market = make_market(
            long_pool_usd=1_100_000,
            swap_impact_factor_positive=10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
            swap_impact_pool_amount_long=10 * 10 ** 18,
        )
        request = deposit_request(
            by_collaterals(0, 1000), market, market_token=market_token(total_supply=2_100_000 * 10 ** 18)
        )
        result = compute_deposit_amounts(request)

        assert result.swap_price_impact_delta_usd == 199 * 10 ** 28
        assert result.market_token_amount == 1000 * 10 ** 18 + 199 * 10 ** 16
        assert not result.price_impact_capped

    def test_positive_impact_capped_by_pool(self):
        market = make_market(
            long_pool_usd=1_100_000,
            swap_impact_factor_positive=10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
            swap_impact_pool_amount_long=10 ** 18,
        )
        request = deposit_request(
            by_collaterals(0, 1000), market, market_token=market_token(total_supply=2_100_000 * 10 ** 18)
        )
        result = compute_deposit_amounts(request)

        assert result.swap_price_impact_delta_usd == 199 * 10 ** 28
        assert result.market_token_amount == 1001 * 10 ** 18
        assert result.price_impact_capped

    def test_missing_price_leg_is_zero(self):
        """가격 없는 쪽은 0 기여, 나머지 leg 는 계산"""
        result = compute_deposit_amounts(
            deposit_request(by_collaterals(1000, 1000), short_token=short_token(price=0))
        )
        assert result.short_token_usd == 0
        assert result.long_token_usd == usd(1000)
        assert result.market_token_amount == 1000 * 10 ** 18

    def test_vault_wraps_market_token_amount(self):
        """vault 가 있으면 market token USD 를 GLV max price 로 변환"""
        result = compute_deposit_amounts(
            deposit_request(by_collaterals(1000, 1000), vault_info=make_vault(price=usd(2)))
        )
        assert result.market_token_usd == usd(2000)
        assert result.market_token_amount == 1000 * 10 ** 18

    def test_vault_unpriced_keeps_market_token_amount(self):
        result = compute_deposit_amounts(
            deposit_request(by_collaterals(1000, 1000), vault_info=make_vault(price=0))
        )
        assert result.market_token_amount == 2000 * 10 ** 18

    def test_market_token_deposit_into_vault(self):
        """GM 100 개($1) → GLV($2) 50 개, fee 없음"""
        gm = make_token(GM, 18)
        request = deposit_request(
            ByCollaterals(long_token_amount=100 * 10 ** 18),
            long_token=gm,
            is_market_token_deposit=True,
            vault_info=make_vault(price=usd(2), decimals=18),
            ui_fee_factor=PERCENT,
        )
        result = compute_deposit_amounts(request)

        assert result.market_token_amount == 50 * 10 ** 18
        assert result.market_token_usd == usd(100)
        assert result.swap_fee_usd == 0
        assert result.ui_fee_usd == 0
        assert result.swap_price_impact_delta_usd == 0

    def test_market_token_deposit_vault_decimals(self):
        gm = make_token(GM, 18)
        request = deposit_request(
            ByCollaterals(long_token_amount=100 * 10 ** 18),
            long_token=gm,
            is_market_token_deposit=True,
            vault_info=make_vault(price=usd(2), decimals=6),
        )
        assert compute_deposit_amounts(request).market_token_amount == 50 * 10 ** 6


class TestDepositByMarketToken:
    """byMarketToken 전략 테스트"""

    def test_zero_market_token(self):
        result = compute_deposit_amounts(deposit_request(ByMarketToken(market_token_amount=0)))
        assert result == DepositAmounts()

    def test_proportional_split(self):
        """이전 입력 3:1 비율로 분배"""
        amounts = ByMarketToken(
            market_token_amount=4000 * 10 ** 18,
            long_token_amount=3000 * 10 ** 18,
            short_token_amount=1000 * 10 ** 6,
        )
        result = compute_deposit_amounts(deposit_request(amounts))

        assert result.market_token_usd == usd(4000)
        assert result.long_token_usd == usd(3000)
        assert result.short_token_usd == usd(1000)
        assert result.long_token_amount == 3000 * 10 ** 18
        assert result.short_token_amount == 1000 * 10 ** 6

    def test_no_previous_amounts_goes_long(self):
        result = compute_deposit_amounts(deposit_request(ByMarketToken(market_token_amount=100 * 10 ** 18)))
        assert result.long_token_usd == usd(100)
        assert result.short_token_usd == 0

    def test_short_only(self):
        result = compute_deposit_amounts(
            deposit_request(
                ByMarketToken(market_token_amount=100 * 10 ** 18, long_token_amount=10 ** 18),
                include_long_token=False,
            )
        )
        assert result.long_token_usd == 0
        assert result.short_token_usd == usd(100)
        assert result.short_token_amount == 100 * 10 ** 6

    def test_fees_added_proportionally(self):
        """fee 만큼 필요한 입금액 증가"""
        market = make_market(swap_fee_factor_for_negative_impact=PERCENT // 10)
        amounts = ByMarketToken(
            market_token_amount=4000 * 10 ** 18,
            long_token_amount=3 * 10 ** 18,
            short_token_amount=1 * 10 ** 6,
        )
        result = compute_deposit_amounts(deposit_request(amounts, market))

        assert result.swap_fee_usd == usd(4)
        assert result.long_token_usd == usd(3003)
        assert result.short_token_usd == usd(1001)

    def test_negative_impact_added(self):
        """negative impact 크기만큼 입금액 증가"""
        market = make_market(
            swap_impact_factor_negative=10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
        )
        result = compute_deposit_amounts(
            deposit_request(ByMarketToken(market_token_amount=1000 * 10 ** 18), market)
        )
        assert result.swap_price_impact_delta_usd == -(10 ** 28)
        assert result.long_token_usd == usd(1000) + 10 ** 28
        assert result.long_token_amount == 1000 * 10 ** 18 + 10 ** 16

    def test_positive_impact_ignored(self):
        """positive impact 는 입금액을 줄이지 않음"""
        market = make_market(
            long_pool_usd=1_100_000,
            swap_impact_factor_positive=10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
        )
        request = deposit_request(
            ByMarketToken(market_token_amount=1000 * 10 ** 18),
            market,
            market_token=market_token(total_supply=2_100_000 * 10 ** 18),
            include_long_token=False,
        )
        result = compute_deposit_amounts(request)

        assert result.swap_price_impact_delta_usd > 0
        assert result.short_token_usd == usd(1000)

    def test_shift_uses_pool_composition(self):
        """shift 는 이전 입력이 아니라 pool 비율로 분배, swap fee 없음"""
        market = make_market(
            long_pool_usd=1_500_000,
            short_pool_usd=500_000,
            swap_fee_factor_for_negative_impact=PERCENT,
        )
        amounts = ByMarketToken(
            market_token_amount=400 * 10 ** 18,
            long_token_amount=10 ** 18,
            short_token_amount=10 ** 6,
        )
        result = compute_deposit_amounts(deposit_request(amounts, market, for_shift=True))

        assert result.swap_fee_usd == 0
        assert result.long_token_usd == usd(300)
        assert result.short_token_usd == usd(100)

    def test_shift_with_empty_pool(self):
        market = make_market(long_pool_usd=0, short_pool_usd=0, pool_value_max=usd(2_000_000))
        result = compute_deposit_amounts(
            deposit_request(ByMarketToken(market_token_amount=10 ** 18), market, for_shift=True)
        )
        assert result.long_token_usd == 0
        assert result.short_token_usd == 0
        assert result.market_token_usd == usd(1)

    def test_vault_market_token_valued_at_vault_min_price(self):
        result = compute_deposit_amounts(
            deposit_request(ByMarketToken(market_token_amount=50 * 10 ** 18), vault_info=make_vault(price=usd(2)))
        )
        assert result.market_token_usd == usd(100)
        assert result.long_token_usd == usd(100)

    def test_market_token_deposit_into_vault(self):
        """GLV 50 개($2) 에 필요한 GM($1) = 100 개"""
        result = compute_deposit_amounts(
            deposit_request(
                ByMarketToken(market_token_amount=50 * 10 ** 18),
                vault_info=make_vault(price=usd(2)),
                is_market_token_deposit=True,
            )
        )
        assert result.long_token_amount == 100 * 10 ** 18
        assert result.swap_fee_usd == 0


class TestDepositInvariants:
    """결과 불변식 테스트"""

    @pytest.mark.parametrize("long_usd,short_usd", [(1000, 0), (0, 1000), (1000, 1000), (1, 999_999), (50_000, 3)])
    def test_no_negative_outputs(self, long_usd, short_usd):
        market = make_market(
            long_pool_usd=1_200_000,
            swap_fee_factor_for_positive_impact=PERCENT // 20,
            swap_fee_factor_for_negative_impact=PERCENT // 10,
            swap_impact_factor_positive=10 ** 22,
            swap_impact_factor_negative=2 * 10 ** 22,
            swap_impact_exponent_factor=2 * FLOAT_PRECISION,
            swap_impact_pool_amount_long=10 ** 18,
            swap_impact_pool_amount_short=10 ** 6,
        )
        for request in (
            deposit_request(by_collaterals(long_usd, short_usd), market, ui_fee_factor=PERCENT),
            deposit_request(
                ByMarketToken(
                    market_token_amount=(long_usd + short_usd) * 10 ** 18,
                    long_token_amount=long_usd * 10 ** 18,
                    short_token_amount=short_usd * 10 ** 6,
                ),
                market,
                ui_fee_factor=PERCENT,
            ),
        ):
            assert_non_negative(compute_deposit_amounts(request))

    def test_market_token_usd_recomputable(self):
        market = make_market(swap_fee_factor_for_negative_impact=PERCENT // 10)
        gm = market_token(price=usd(1) * 11 // 10)
        result = compute_deposit_amounts(deposit_request(by_collaterals(700, 300), market, market_token=gm))
        assert result.market_token_usd == result.market_token_amount * gm.prices.min_price // 10 ** 18

    def test_negative_amount_rejected(self):
        """음수 입력은 계산 전에 거부"""
        with pytest.raises(ValueError):
            deposit_request(ByCollaterals(long_token_amount=-1))

    def test_keyword_entry_point(self):
        result = get_deposit_amounts(
            market_info=make_market(),
            market_token=market_token(),
            long_token=long_token(),
            short_token=short_token(),
            long_token_amount=1000 * 10 ** 18,
            short_token_amount=1000 * 10 ** 6,
            ui_fee_factor=0,
        )
        assert result.market_token_amount == 2000 * 10 ** 18


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
