"""
GM/GLV 데이터 타입 정의

마켓 데이터 제공자(SDK/API JSON)가 반환하는 스냅샷을 Python dataclass로 정의.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
스냅샷과 결과는 모두 frozen: 계산 한 번마다 새로 만들어진다.
"""

from dataclasses import dataclass, fields
from typing import Optional

from ..errors import InvalidInputError


def _int(value, default: int = 0) -> int:
    """JSON 숫자/문자열 → int (bigint 는 보통 문자열로 직렬화됨)"""
    if value is None:
        return default
    return int(value)


def _require_non_negative(snapshot, *names: str) -> None:
    """음수 스냅샷 필드는 계산 전에 InvalidInputError"""
    for name in names:
        value = getattr(snapshot, name)
        if value is not None and value < 0:
            raise InvalidInputError(f"{type(snapshot).__name__}.{name} 음수: {value}")


@dataclass(frozen=True)
class TokenPrices:
    """bid/ask 가격 (USD per whole token, 10^30 스케일)"""
    min_price: int
    max_price: int

    def __post_init__(self):
        _require_non_negative(self, "min_price", "max_price")

    @classmethod
    def from_dict(cls, data: dict) -> "TokenPrices":
        return cls(
            min_price=_int(data["minPrice"]),
            max_price=_int(data["maxPrice"]),
        )


@dataclass(frozen=True)
class TokenData:
    """토큰 스냅샷

    - decimals: 토큰 소수점 자릿수 (보통 6~18)
    - prices: min/max 가격
    - total_supply: market token / vault token 에서만 사용
    """
    address: str
    decimals: int
    prices: TokenPrices
    symbol: str = ""
    total_supply: Optional[int] = None

    def __post_init__(self):
        _require_non_negative(self, "decimals", "total_supply")

    @classmethod
    def from_dict(cls, data: dict) -> "TokenData":
        return cls(
            address=data["address"],
            decimals=int(data["decimals"]),
            prices=TokenPrices.from_dict(data["prices"]),
            symbol=data.get("symbol", ""),
            total_supply=_int(data["totalSupply"]) if data.get("totalSupply") is not None else None,
        )


@dataclass(frozen=True)
class MarketInfo:
    """GM 마켓 상태

    Pool State:
    - long_pool_amount / short_pool_amount: collateral 토큰 최소 단위
    - pool_value_max: market token 민트/소각 가격 계산에 사용하는 pool 가치 (USD)
    - swap_impact_pool_amount_*: positive impact 로 지급 가능한 토큰 예산

    Factors (FLOAT_PRECISION 스케일):
    - swap_fee_factor_for_positive_impact / _negative_impact
    - swap_impact_factor_positive / _negative, swap_impact_exponent_factor

    Virtual inventory (선택): 두 값이 모두 양수일 때만 impact 계산에 반영.
    """
    market_token_address: str
    long_token_address: str
    short_token_address: str
    long_pool_amount: int = 0
    short_pool_amount: int = 0
    pool_value_max: int = 0
    swap_impact_pool_amount_long: int = 0
    swap_impact_pool_amount_short: int = 0
    swap_fee_factor_for_positive_impact: int = 0
    swap_fee_factor_for_negative_impact: int = 0
    swap_impact_factor_positive: int = 0
    swap_impact_factor_negative: int = 0
    swap_impact_exponent_factor: int = 0
    virtual_pool_amount_for_long_token: int = 0
    virtual_pool_amount_for_short_token: int = 0

    def __post_init__(self):
        _require_non_negative(self, *(f.name for f in fields(self) if not f.name.endswith("_address")))

    @property
    def is_same_collaterals(self) -> bool:
        return self.long_token_address == self.short_token_address

    @classmethod
    def from_dict(cls, data: dict) -> "MarketInfo":
        return cls(
            market_token_address=data["marketTokenAddress"],
            long_token_address=data["longTokenAddress"],
            short_token_address=data["shortTokenAddress"],
            long_pool_amount=_int(data.get("longPoolAmount")),
            short_pool_amount=_int(data.get("shortPoolAmount")),
            pool_value_max=_int(data.get("poolValueMax")),
            swap_impact_pool_amount_long=_int(data.get("swapImpactPoolAmountLong")),
            swap_impact_pool_amount_short=_int(data.get("swapImpactPoolAmountShort")),
            swap_fee_factor_for_positive_impact=_int(data.get("swapFeeFactorForPositiveImpact")),
            swap_fee_factor_for_negative_impact=_int(data.get("swapFeeFactorForNegativeImpact")),
            swap_impact_factor_positive=_int(data.get("swapImpactFactorPositive")),
            swap_impact_factor_negative=_int(data.get("swapImpactFactorNegative")),
            swap_impact_exponent_factor=_int(data.get("swapImpactExponentFactor")),
            virtual_pool_amount_for_long_token=_int(data.get("virtualPoolAmountForLongToken")),
            virtual_pool_amount_for_short_token=_int(data.get("virtualPoolAmountForShortToken")),
        )


@dataclass(frozen=True)
class VaultInfo:
    """GLV vault 정보

    vault token 가격은 index_token 의 가격을 사용한다.
    """
    vault_address: str
    index_token: TokenData

    @classmethod
    def from_dict(cls, data: dict) -> "VaultInfo":
        return cls(
            vault_address=data["glvTokenAddress"],
            index_token=TokenData.from_dict(data["indexToken"]),
        )


@dataclass(frozen=True)
class DepositAmounts:
    """Deposit 계산 결과

    swap_price_impact_delta_usd 만 부호 있음 (음수 = 사용자 비용).
    price_impact_capped: impact 가 swap impact pool 예산으로 잘렸는지.
    vault 가 있으면 market_token_amount 는 vault token 수량.
    """
    long_token_amount: int = 0
    long_token_usd: int = 0
    short_token_amount: int = 0
    short_token_usd: int = 0
    market_token_amount: int = 0
    market_token_usd: int = 0
    swap_fee_usd: int = 0
    ui_fee_usd: int = 0
    swap_price_impact_delta_usd: int = 0
    price_impact_capped: bool = False


@dataclass(frozen=True)
class WithdrawalAmounts:
    """Withdrawal 계산 결과"""
    long_token_amount: int = 0
    long_token_usd: int = 0
    short_token_amount: int = 0
    short_token_usd: int = 0
    market_token_amount: int = 0
    market_token_usd: int = 0
    glv_token_amount: int = 0
    glv_token_usd: int = 0
    swap_fee_usd: int = 0
    ui_fee_usd: int = 0
    swap_price_impact_delta_usd: int = 0
