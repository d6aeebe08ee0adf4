"""
GM/GLV Liquidity Amounts Calculator

온체인 정산과 동일한 정밀도로 GM market token / GLV vault token 의
입금(deposit)·출금(withdrawal) 수량, fee, price impact 를 계산하는 라이브러리.
"""

__version__ = "0.1.0"

from .constants import USD_DECIMALS, FLOAT_PRECISION
from .data.types import TokenPrices, TokenData, MarketInfo, VaultInfo, DepositAmounts, WithdrawalAmounts
from .amounts import (
    DepositAmountsRequest,
    WithdrawalAmountsRequest,
    compute_deposit_amounts,
    compute_withdrawal_amounts,
    get_deposit_amounts,
    get_withdrawal_amounts,
)
