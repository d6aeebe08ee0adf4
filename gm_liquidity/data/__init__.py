"""
Data layer for GM/GLV amounts

마켓/토큰 스냅샷 및 계산 결과 타입 정의
"""

from .types import TokenPrices, TokenData, MarketInfo, VaultInfo, DepositAmounts, WithdrawalAmounts
