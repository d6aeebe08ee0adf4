"""
Amounts Request Schemas using Pydantic

Deposit/Withdrawal 계산 입력 모델.
strategy 는 `strategy` literal 로 구분되는 tagged union 이며, 진입점에서 한 번만 분기한다.
음수 수량/factor 는 계산 전에 ValidationError 로 거부된다.
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..data.types import MarketInfo, TokenData, VaultInfo


class ByCollaterals(BaseModel):
    """Deposit: collateral 수량을 입력, market token 수량을 계산"""
    strategy: Literal["byCollaterals"] = "byCollaterals"
    long_token_amount: int = Field(default=0, description="입금할 long token 수량", ge=0)
    short_token_amount: int = Field(default=0, description="입금할 short token 수량", ge=0)


class ByMarketToken(BaseModel):
    """Deposit: 원하는 market(또는 vault) token 수량을 입력, 필요한 collateral 을 계산

    long/short 수량은 사용자의 이전 입력값이며 분배 비율로만 사용된다.
    """
    strategy: Literal["byMarketToken"] = "byMarketToken"
    market_token_amount: int = Field(default=0, description="market token (vault 가 있으면 vault token) 수량", ge=0)
    long_token_amount: int = Field(default=0, description="이전 long token 수량 (비율용)", ge=0)
    short_token_amount: int = Field(default=0, description="이전 short token 수량 (비율용)", ge=0)


class BurnByMarketToken(BaseModel):
    """Withdrawal: 소각할 market(또는 vault) token 수량을 입력"""
    strategy: Literal["byMarketToken"] = "byMarketToken"
    market_token_amount: int = Field(default=0, description="market token (vault 가 있으면 vault token) 수량", ge=0)


class BurnByLongCollateral(BaseModel):
    """Withdrawal: 받을 long token 수량을 입력, short 는 pool 비율로 계산"""
    strategy: Literal["byLongCollateral"] = "byLongCollateral"
    long_token_amount: int = Field(default=0, ge=0)


class BurnByShortCollateral(BaseModel):
    """Withdrawal: 받을 short token 수량을 입력, long 은 pool 비율로 계산"""
    strategy: Literal["byShortCollateral"] = "byShortCollateral"
    short_token_amount: int = Field(default=0, ge=0)


class BurnByCollaterals(BaseModel):
    """Withdrawal: 받을 long/short 수량을 모두 입력"""
    strategy: Literal["byCollaterals"] = "byCollaterals"
    long_token_amount: int = Field(default=0, ge=0)
    short_token_amount: int = Field(default=0, ge=0)


DepositStrategy = Annotated[
    Union[ByCollaterals, ByMarketToken],
    Field(discriminator="strategy"),
]

WithdrawalStrategy = Annotated[
    Union[BurnByMarketToken, BurnByLongCollateral, BurnByShortCollateral, BurnByCollaterals],
    Field(discriminator="strategy"),
]


class _AmountsRequestBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    market_info: MarketInfo
    market_token: TokenData
    long_token: TokenData
    short_token: TokenData
    ui_fee_factor: int = Field(
        default_factory=settings.get_ui_fee_factor,
        description="UI fee factor (10^30 == 100%)",
        ge=0,
    )
    for_shift: bool = Field(default=False, description="market 간 이동 (swap fee 없음)")
    vault_info: Optional[VaultInfo] = None


class DepositAmountsRequest(_AmountsRequestBase):
    """Deposit 계산 요청"""
    amounts: DepositStrategy
    include_long_token: bool = True
    include_short_token: bool = True
    is_market_token_deposit: bool = Field(
        default=False,
        description="GM → GLV 입금 (long_token 이 입금되는 GM token)",
    )


class WithdrawalAmountsRequest(_AmountsRequestBase):
    """Withdrawal 계산 요청"""
    amounts: WithdrawalStrategy
