"""
결제 API 라우터 (결제, 결제 확인, 환불)
"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from database import get_db
from models.booking import Booking
from models.earning import Earning
from models.enums import PaymentStatus, EarningStatus, SessionStatus
from schemas.payment import (
    PaymentCharge,
    PaymentReceipt,
    PaymentChargeResponse,
    PaymentVerifyResponse,
    BookingPaymentInfo,
    BookingPaymentEnvelope,
    RefundRequest,
    RefundInfo,
    RefundResponse,
)
from schemas.common import UserSummary
from booking import state
from booking.router import get_booking_or_404, to_booking_response
from gateways.payment import PaymentGateway, PaymentRequest
from config.dependencies import get_payment_gateway
from config.settings import CURRENCY, PLATFORM_COMMISSION_PERCENT
from config.exception import BadRequest, NotFound, InternalError
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="payment")

router = APIRouter(prefix="/api/payments", tags=["Payments"])

DEFAULT_REFUND_REASON = "Customer requested refund"


def split_commission(total_amount: int) -> tuple[int, int]:
    """결제 금액을 (상담사 몫, 플랫폼 수수료)로 분할. 수수료는 내림"""
    commission = total_amount * PLATFORM_COMMISSION_PERCENT // 100
    return total_amount - commission, commission


@router.post("", response_model=PaymentChargeResponse)
async def charge_payment(
    data: PaymentCharge,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """예약 결제

    금액 검증 후 예약을 PROCESSING 으로 선점하고 게이트웨이를 호출한다.
    성공 시 예약 확정과 수익 기록은 하나의 트랜잭션으로 커밋한다.
    """
    logger.info(f"Charge requested: booking_id={data.booking_id}, amount={data.amount}, method={data.payment_method}")

    booking = get_booking_or_404(db, data.booking_id, for_update=True)

    if booking.payment_status == PaymentStatus.COMPLETED:
        raise BadRequest("Payment already completed for this booking", code="PAYMENT_ALREADY_COMPLETED")

    if booking.payment_status == PaymentStatus.PROCESSING:
        raise BadRequest("Payment is already being processed for this booking", code="PAYMENT_IN_PROGRESS")

    if data.amount != booking.price:
        raise BadRequest(
            "Payment amount does not match booking price",
            code="PAYMENT_AMOUNT_MISMATCH",
            details={"expected": booking.price, "received": data.amount},
        )

    state.start_payment(booking)
    db.commit()

    try:
        result = await gateway.process_payment(
            PaymentRequest(
                booking_id=booking.id,
                amount=data.amount,
                currency=CURRENCY,
                payment_method=data.payment_method,
                payment_details=data.payment_details.model_dump(exclude_none=True),
            )
        )
    except Exception:
        logger.exception(f"Payment gateway error: booking_id={data.booking_id}")
        state.payment_failed(booking)
        db.commit()
        raise InternalError("Payment processing failed", code="PAYMENT_GATEWAY_ERROR")

    if not result.success:
        state.payment_failed(booking)
        db.commit()
        logger.warning(f"Payment failed: booking_id={booking.id}, error={result.error}")
        raise BadRequest(result.error or "Payment processing failed", code="PAYMENT_FAILED")

    amount, commission = split_commission(data.amount)
    try:
        state.payment_succeeded(booking, result.transaction_id)
        db.add(
            Earning(
                consultant_id=booking.consultant_id,
                booking_id=booking.id,
                amount=amount,
                commission=commission,
                total_amount=data.amount,
                status=EarningStatus.PENDING,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        # 게이트웨이 결제는 이미 성공했으므로 PROCESSING 상태로 남겨 수동 정산 대상으로 둔다
        logger.exception(
            f"Failed to record payment: booking_id={data.booking_id}, txn={result.transaction_id}"
        )
        raise InternalError("Payment processing failed", code="PAYMENT_RECORD_FAILED")

    db.refresh(booking)
    logger.info(
        f"Payment completed: booking_id={booking.id}, txn={result.transaction_id}, "
        f"earning={amount}, commission={commission}"
    )

    return PaymentChargeResponse(
        message="Payment processed successfully",
        payment=PaymentReceipt(transaction_id=result.transaction_id, amount=data.amount, currency=CURRENCY),
        booking=to_booking_response(booking),
    )


@router.get("", response_model=PaymentVerifyResponse | BookingPaymentEnvelope)
async def get_payment(
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    booking_id: Optional[int] = Query(None, alias="bookingId"),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """거래 ID 로 결제 확인, 또는 예약 ID 로 결제 정보 조회"""
    if transaction_id:
        is_valid = await gateway.verify_payment(transaction_id)
        logger.info(f"Payment verification: txn={transaction_id}, verified={is_valid}")
        return PaymentVerifyResponse(
            transaction_id=transaction_id,
            status="verified" if is_valid else "pending",
            verified_at=datetime.utcnow() if is_valid else None,
        )

    if booking_id is not None:
        booking = get_booking_or_404(db, booking_id)
        return BookingPaymentEnvelope(
            booking=BookingPaymentInfo(
                id=booking.id,
                booking_number=booking.booking_number,
                amount=booking.price,
                status=booking.payment_status,
                transaction_id=booking.payment_id,
                client=UserSummary.model_validate(booking.client) if booking.client else None,
                created_at=booking.created_at,
            )
        )

    raise BadRequest("Transaction ID or Booking ID is required", code="PAYMENT_LOOKUP_REQUIRED")


@router.put("", response_model=RefundResponse)
async def refund_payment(
    data: RefundRequest,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """환불: 예약 취소 + 수익 보류를 하나의 트랜잭션으로 처리"""
    if not data.transaction_id and data.booking_id is None:
        raise BadRequest("Transaction ID or Booking ID is required", code="PAYMENT_LOOKUP_REQUIRED")

    logger.info(f"Refund requested: booking_id={data.booking_id}, txn={data.transaction_id}")

    if data.booking_id is not None:
        booking = db.query(Booking).filter(Booking.id == data.booking_id).first()
    else:
        booking = db.query(Booking).filter(Booking.payment_id == data.transaction_id).first()

    if booking is None:
        raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")

    if not state.can_refund(booking):
        raise BadRequest("Cannot refund a payment that was not completed", code="PAYMENT_NOT_COMPLETED")

    result = await gateway.process_refund(booking.payment_id, booking.price)
    if not result.success:
        logger.warning(f"Refund failed: booking_id={booking.id}, error={result.error}")
        raise BadRequest("Refund processing failed", code="REFUND_FAILED")

    try:
        # 게이트웨이 호출 동안 다른 요청이 상태를 바꿨을 수 있으므로 다시 읽는다
        db.refresh(booking, with_for_update=True)
        now = datetime.utcnow()
        state.refund(booking, now)

        # 환불된 예약의 세션은 더 이상 입장/종료할 수 없음
        session = booking.live_session
        if session is not None and session.status in (SessionStatus.SCHEDULED, SessionStatus.ACTIVE):
            session.status = SessionStatus.CANCELLED
            session.ended_at = now

        earning = db.query(Earning).filter(Earning.booking_id == booking.id).first()
        if earning is not None:
            earning.status = EarningStatus.HELD

        db.commit()
    except Exception:
        db.rollback()
        raise

    reason = data.reason or DEFAULT_REFUND_REASON
    logger.info(f"Refund completed: booking_id={booking.id}, refund_txn={result.transaction_id}, reason={reason}")

    return RefundResponse(
        message="Refund processed successfully",
        refund=RefundInfo(
            transaction_id=result.transaction_id,
            amount=booking.price,
            reason=reason,
            processed_at=datetime.utcnow(),
        ),
    )
