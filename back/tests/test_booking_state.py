"""
Booking state machine transitions (no database).
"""

from datetime import datetime

import pytest

from booking import state
from config.exception import AppException
from models.booking import Booking
from models.enums import BookingStatus, PaymentStatus


def make(status=BookingStatus.PENDING, payment_status=PaymentStatus.PENDING) -> Booking:
    return Booking(id=1, status=status, payment_status=payment_status, price=99)


class TestPaymentTransitions:

    def test_happy_path(self):
        booking = make()

        state.start_payment(booking)
        assert (booking.status, booking.payment_status) == (BookingStatus.PENDING, PaymentStatus.PROCESSING)

        state.payment_succeeded(booking, "TXN1")
        assert (booking.status, booking.payment_status) == (BookingStatus.CONFIRMED, PaymentStatus.COMPLETED)
        assert booking.payment_id == "TXN1"

        state.complete(booking)
        assert (booking.status, booking.payment_status) == (BookingStatus.COMPLETED, PaymentStatus.COMPLETED)

    def test_failed_payment_can_be_retried(self):
        booking = make()
        state.start_payment(booking)
        state.payment_failed(booking)

        assert booking.payment_status == PaymentStatus.FAILED
        assert state.can_charge(booking)

    def test_cannot_charge_while_processing(self):
        booking = make(payment_status=PaymentStatus.PROCESSING)

        with pytest.raises(AppException) as exc_info:
            state.start_payment(booking)

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_BOOKING_TRANSITION"

    @pytest.mark.parametrize(
        "status,payment_status",
        [
            (BookingStatus.CONFIRMED, PaymentStatus.COMPLETED),
            (BookingStatus.COMPLETED, PaymentStatus.COMPLETED),
            (BookingStatus.CANCELLED, PaymentStatus.REFUNDED),
            (BookingStatus.CANCELLED, PaymentStatus.PENDING),
        ],
    )
    def test_cannot_charge_settled_booking(self, status, payment_status):
        with pytest.raises(AppException):
            state.start_payment(make(status, payment_status))

    def test_success_requires_processing_claim(self):
        with pytest.raises(AppException):
            state.payment_succeeded(make(), "TXN1")

    def test_complete_requires_confirmed(self):
        with pytest.raises(AppException):
            state.complete(make())


class TestCancelAndRefund:

    @pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.COMPLETED])
    def test_refund_paid_booking(self, status):
        booking = make(status, PaymentStatus.COMPLETED)
        now = datetime(2024, 1, 1, 12, 0)

        state.refund(booking, now)

        assert (booking.status, booking.payment_status) == (BookingStatus.CANCELLED, PaymentStatus.REFUNDED)
        assert booking.cancelled_at == now

    @pytest.mark.parametrize(
        "payment_status", [PaymentStatus.PENDING, PaymentStatus.PROCESSING, PaymentStatus.FAILED]
    )
    def test_refund_requires_completed_payment(self, payment_status):
        booking = make(BookingStatus.PENDING, payment_status)

        assert not state.can_refund(booking)
        with pytest.raises(AppException):
            state.refund(booking, datetime.utcnow())

    def test_cancel_unpaid_keeps_payment_status(self):
        booking = make(payment_status=PaymentStatus.FAILED)

        state.cancel_unpaid(booking, datetime.utcnow())

        assert (booking.status, booking.payment_status) == (BookingStatus.CANCELLED, PaymentStatus.FAILED)

    def test_cancel_rejected_while_processing(self):
        with pytest.raises(AppException):
            state.cancel_unpaid(make(payment_status=PaymentStatus.PROCESSING), datetime.utcnow())


def test_every_reachable_pair_is_consistent():
    allowed = {
        (status, payment_status)
        for status, payment_states in state.ALLOWED_PAYMENT_STATES.items()
        for payment_status in payment_states
    }

    assert (BookingStatus.CONFIRMED, PaymentStatus.PENDING) not in allowed
    assert (BookingStatus.COMPLETED, PaymentStatus.REFUNDED) not in allowed
    assert all(state.is_consistent(s, p) for s, p in allowed)


def test_inconsistent_pair_is_rejected_at_runtime():
    booking = make()

    with pytest.raises(AppException) as exc_info:
        state._apply(booking, BookingStatus.CONFIRMED, PaymentStatus.PENDING)

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "INCONSISTENT_BOOKING_STATE"
    assert booking.status == BookingStatus.PENDING
