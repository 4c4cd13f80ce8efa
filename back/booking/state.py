"""
예약 상태 머신

예약의 진행 상태(status)와 결제 상태(payment_status)는 이 모듈의 전이 함수로만 바꾼다.
결제 상태는 진행 상태에 종속된 하위 상태이며, CONFIRMED/COMPLETED 는 결제 완료 상태에서만 가능하다.
"""

from datetime import datetime
from models.booking import Booking
from models.enums import BookingStatus, PaymentStatus
from config.exception import BadRequest, InternalError

# 진행 상태별 허용되는 결제 상태
ALLOWED_PAYMENT_STATES = {
    BookingStatus.PENDING: {PaymentStatus.PENDING, PaymentStatus.PROCESSING, PaymentStatus.FAILED},
    BookingStatus.CONFIRMED: {PaymentStatus.COMPLETED},
    BookingStatus.COMPLETED: {PaymentStatus.COMPLETED},
    BookingStatus.CANCELLED: {PaymentStatus.PENDING, PaymentStatus.FAILED, PaymentStatus.REFUNDED},
}


def is_consistent(status: BookingStatus, payment_status: PaymentStatus) -> bool:
    return payment_status in ALLOWED_PAYMENT_STATES[status]


def _invalid(booking: Booking, event: str):
    return BadRequest(
        f"Cannot {event} a booking in status {booking.status.value} with payment {booking.payment_status.value}",
        code="INVALID_BOOKING_TRANSITION",
        details={"bookingId": booking.id, "event": event},
    )


def _apply(booking: Booking, status: BookingStatus, payment_status: PaymentStatus) -> Booking:
    if not is_consistent(status, payment_status):
        raise InternalError(
            f"Inconsistent booking state {status.value}/{payment_status.value}",
            code="INCONSISTENT_BOOKING_STATE",
            details={"bookingId": booking.id},
        )
    booking.status = status
    booking.payment_status = payment_status
    return booking


def can_charge(booking: Booking) -> bool:
    return booking.status == BookingStatus.PENDING and booking.payment_status in (
        PaymentStatus.PENDING,
        PaymentStatus.FAILED,
    )


def start_payment(booking: Booking) -> Booking:
    """결제 진행 중으로 선점 (동시 결제 요청 차단)"""
    if not can_charge(booking):
        raise _invalid(booking, "charge")
    return _apply(booking, BookingStatus.PENDING, PaymentStatus.PROCESSING)


def payment_succeeded(booking: Booking, transaction_id: str) -> Booking:
    if booking.payment_status != PaymentStatus.PROCESSING:
        raise _invalid(booking, "confirm payment for")
    booking.payment_id = transaction_id
    return _apply(booking, BookingStatus.CONFIRMED, PaymentStatus.COMPLETED)


def payment_failed(booking: Booking) -> Booking:
    if booking.payment_status != PaymentStatus.PROCESSING:
        raise _invalid(booking, "fail payment for")
    return _apply(booking, BookingStatus.PENDING, PaymentStatus.FAILED)


def can_refund(booking: Booking) -> bool:
    return booking.payment_status == PaymentStatus.COMPLETED and booking.status in (
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
    )


def refund(booking: Booking, now: datetime) -> Booking:
    if not can_refund(booking):
        raise _invalid(booking, "refund")
    booking.cancelled_at = now
    return _apply(booking, BookingStatus.CANCELLED, PaymentStatus.REFUNDED)


def cancel_unpaid(booking: Booking, now: datetime) -> Booking:
    if booking.status != BookingStatus.PENDING or booking.payment_status == PaymentStatus.PROCESSING:
        raise _invalid(booking, "cancel")
    booking.cancelled_at = now
    return _apply(booking, BookingStatus.CANCELLED, booking.payment_status)


def complete(booking: Booking) -> Booking:
    """세션 종료 시 호출"""
    if booking.status != BookingStatus.CONFIRMED:
        raise _invalid(booking, "complete")
    return _apply(booking, BookingStatus.COMPLETED, PaymentStatus.COMPLETED)
