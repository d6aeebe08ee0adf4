"""
Amounts layer for GM/GLV

Deposit/Withdrawal 견적 계산 진입점
"""

from .schemas import (
    ByCollaterals,
    ByMarketToken,
    BurnByMarketToken,
    BurnByLongCollateral,
    BurnByShortCollateral,
    BurnByCollaterals,
    DepositAmountsRequest,
    WithdrawalAmountsRequest,
)
from .deposit import compute_deposit_amounts, get_deposit_amounts
from .withdrawal import compute_withdrawal_amounts, get_withdrawal_amounts
