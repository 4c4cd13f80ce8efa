"""
결제 게이트웨이 인터페이스 및 시뮬레이션 구현
"""

import asyncio
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional
from config.settings import (
    PAYMENT_SUCCESS_RATE,
    PAYMENT_VERIFY_SUCCESS_RATE,
    PAYMENT_DELAY_SECONDS,
    PAYMENT_VERIFY_DELAY_SECONDS,
    PAYMENT_REFUND_DELAY_SECONDS,
)
from logs.logging_util import LoggerSingleton
from utils.codes import generate_code

logger = LoggerSingleton.get_logger(logger_name="gateway")


@dataclass
class PaymentRequest:
    booking_id: int
    amount: int
    currency: str
    payment_method: str
    payment_details: dict = field(default_factory=dict)


@dataclass
class PaymentResult:
    success: bool
    transaction_id: Optional[str] = None
    error: Optional[str] = None


class PaymentGateway(ABC):
    """외부 결제 게이트웨이가 제공해야 하는 기능"""

    @abstractmethod
    async def process_payment(self, request: PaymentRequest) -> PaymentResult:
        ...

    @abstractmethod
    async def verify_payment(self, transaction_id: str) -> bool:
        ...

    @abstractmethod
    async def process_refund(self, transaction_id: str, amount: int) -> PaymentResult:
        ...


class SimulatedPaymentGateway(PaymentGateway):
    """샌드박스용 게이트웨이: 지연 후 설정된 확률로 성공/실패

    실제 PG 연동이 없는 동안 사용하는 구현으로, 재시도나 웹훅 검증은 하지 않는다.
    """

    def __init__(
        self,
        *,
        success_rate: float = PAYMENT_SUCCESS_RATE,
        verify_success_rate: float = PAYMENT_VERIFY_SUCCESS_RATE,
        delay: float = PAYMENT_DELAY_SECONDS,
        verify_delay: float = PAYMENT_VERIFY_DELAY_SECONDS,
        refund_delay: float = PAYMENT_REFUND_DELAY_SECONDS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.success_rate = success_rate
        self.verify_success_rate = verify_success_rate
        self.delay = delay
        self.verify_delay = verify_delay
        self.refund_delay = refund_delay
        self._rng = rng or random.Random()

    async def process_payment(self, request: PaymentRequest) -> PaymentResult:
        await asyncio.sleep(self.delay)

        if self._rng.random() < self.success_rate:
            transaction_id = generate_code("TXN", suffix_length=6)
            logger.info(f"Simulated charge succeeded: booking_id={request.booking_id}, txn={transaction_id}")
            return PaymentResult(success=True, transaction_id=transaction_id)

        logger.warning(f"Simulated charge failed: booking_id={request.booking_id}")
        return PaymentResult(success=False, error="Payment failed. Please try again.")

    async def verify_payment(self, transaction_id: str) -> bool:
        await asyncio.sleep(self.verify_delay)
        return self._rng.random() < self.verify_success_rate

    async def process_refund(self, transaction_id: str, amount: int) -> PaymentResult:
        await asyncio.sleep(self.refund_delay)
        refund_id = generate_code("REF", suffix_length=6)
        logger.info(f"Simulated refund issued: txn={transaction_id}, amount={amount}, refund={refund_id}")
        return PaymentResult(success=True, transaction_id=refund_id)
