"""
예외 정의

계산 중 발생하는 시장 상황(가격 없음, 0 으로 나누기, impact cap)은 예외가 아니다.
여기 정의된 예외는 호출자 버그(잘못된 입력 구조)만 나타낸다.
"""


class GmLiquidityError(Exception):
    """패키지 공통 예외"""


class InvalidInputError(GmLiquidityError, ValueError):
    """잘못된 입력 (음수 수량 등)"""


class UnknownTokenError(InvalidInputError):
    """마켓의 long/short 어느 쪽에도 속하지 않는 토큰"""

    def __init__(self, address: str, market_address: str = ""):
        self.address = address
        self.market_address = market_address
        super().__init__(f"토큰 {address} 은(는) 마켓 {market_address} 의 collateral 이 아님")


class NegativePoolAmountError(GmLiquidityError):
    """next pool USD 가 음수가 되는 swap"""

    def __init__(self, next_long_usd: int, next_short_usd: int):
        self.next_long_usd = next_long_usd
        self.next_short_usd = next_short_usd
        super().__init__(
            f"음수 pool 수량: long={next_long_usd}, short={next_short_usd}"
        )
