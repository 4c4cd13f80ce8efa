"""
Live session lifecycle: create, join, end.
"""

from models.booking import Booking
from models.earning import Earning
from models.enums import BookingStatus, PaymentStatus, SessionStatus, UserRole
from models.live_session import LiveSession


def create_session(client, booking, **overrides):
    payload = {
        "bookingId": booking["id"],
        "clientId": booking["clientId"],
        "consultantId": booking["consultantId"],
    }
    payload.update(overrides)
    return client.post("/api/sessions", json=payload)


class TestCreateSession:
    """POST /api/sessions"""

    def test_confirmed_booking_gets_scheduled_session(self, client, paid_booking, fetch):
        response = create_session(client, paid_booking)

        session = response.json()["session"]
        assert response.status_code == 201
        assert session["status"] == "SCHEDULED"
        assert session["sessionId"].startswith("SS")
        assert session["sessionUrl"] == f"https://video.test/{session['sessionId']}"
        assert session["startedAt"] is None
        # 예약은 세션 종료 시점에 완료된다
        assert fetch(Booking, paid_booking["id"]).status == BookingStatus.CONFIRMED

    def test_booking_must_be_confirmed(self, client, create_booking):
        booking = create_booking()

        response = create_session(client, booking)

        assert response.status_code == 400
        assert response.json()["error"] == "Booking is not confirmed"

    def test_participants_must_match_booking(self, client, paid_booking, make_user):
        stranger = make_user(UserRole.CLIENT)

        response = create_session(client, paid_booking, clientId=stranger.id)

        assert response.status_code == 403
        assert response.json()["code"] == "BOOKING_PARTICIPANT_MISMATCH"

    def test_one_session_per_booking(self, client, paid_booking):
        assert create_session(client, paid_booking).status_code == 201

        response = create_session(client, paid_booking)

        assert response.status_code == 400
        assert response.json()["error"] == "Session already exists for this booking"

    def test_booking_response_carries_session_code(self, client, paid_booking):
        session = create_session(client, paid_booking).json()["session"]

        booking = client.get(f"/api/bookings/{paid_booking['id']}").json()["booking"]

        assert booking["sessionCode"] == session["sessionId"]

    def test_concurrent_create_hits_unique_constraint(self, client, paid_booking, commit_before_flush, db):
        commit_before_flush(
            lambda: LiveSession(
                session_code="SSCOMPETING",
                booking_id=paid_booking["id"],
                client_id=paid_booking["clientId"],
                consultant_id=paid_booking["consultantId"],
                status=SessionStatus.SCHEDULED,
            )
        )

        response = create_session(client, paid_booking)

        assert response.status_code == 400
        assert response.json()["code"] == "SESSION_ALREADY_EXISTS"
        codes = [s.session_code for s in db.query(LiveSession).filter(LiveSession.booking_id == paid_booking["id"])]
        assert codes == ["SSCOMPETING"]

    def test_unknown_booking(self, client, client_user, consultant_user):
        response = client.post(
            "/api/sessions",
            json={"bookingId": 777, "clientId": client_user.id, "consultantId": consultant_user.id},
        )

        assert response.status_code == 404


class TestJoinSession:
    """PUT /api/sessions"""

    def test_first_join_activates(self, active_session):
        assert active_session["status"] == "ACTIVE"
        assert active_session["startedAt"] is not None

    def test_second_join_keeps_start_time(self, client, active_session):
        response = client.put(
            "/api/sessions",
            json={
                "sessionId": active_session["sessionId"],
                "userId": active_session["consultantId"],
                "role": "consultant",
            },
        )

        session = response.json()["session"]
        assert response.status_code == 200
        assert session["status"] == "ACTIVE"
        assert session["startedAt"] == active_session["startedAt"]

    def test_non_participant_rejected(self, client, paid_booking, make_user):
        session = create_session(client, paid_booking).json()["session"]
        stranger = make_user(UserRole.CLIENT)

        response = client.put(
            "/api/sessions",
            json={"sessionId": session["sessionId"], "userId": stranger.id, "role": "client"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized: You are not the client for this session"

    def test_role_mismatch_rejected(self, client, paid_booking):
        session = create_session(client, paid_booking).json()["session"]

        response = client.put(
            "/api/sessions",
            json={"sessionId": session["sessionId"], "userId": paid_booking["clientId"], "role": "consultant"},
        )

        assert response.status_code == 403

    def test_unknown_session(self, client, client_user):
        response = client.put(
            "/api/sessions", json={"sessionId": "SSNOPE", "userId": client_user.id, "role": "client"}
        )

        assert response.status_code == 404
        assert response.json()["code"] == "SESSION_NOT_FOUND"

    def test_join_requires_confirmed_booking(self, client, paid_booking, db):
        session = create_session(client, paid_booking).json()["session"]
        booking = db.get(Booking, paid_booking["id"])
        booking.status = BookingStatus.CANCELLED
        booking.payment_status = PaymentStatus.REFUNDED
        db.commit()

        response = client.put(
            "/api/sessions",
            json={"sessionId": session["sessionId"], "userId": paid_booking["clientId"], "role": "client"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "BOOKING_NOT_CONFIRMED"

    def test_completed_session_cannot_be_joined(self, client, completed_booking):
        response = client.put(
            "/api/sessions",
            json={
                "sessionId": completed_booking["sessionCode"],
                "userId": completed_booking["clientId"],
                "role": "client",
            },
        )

        assert response.status_code == 400
        assert response.json()["code"] == "SESSION_CLOSED"


class TestEndSession:
    """POST /api/sessions/{sessionId}/end"""

    def test_end_completes_session_and_booking(self, client, active_session, db):
        response = client.post(
            f"/api/sessions/{active_session['sessionId']}/end",
            json={"userId": active_session["clientId"], "role": "client"},
        )

        session = response.json()["session"]
        assert response.status_code == 200
        assert session["status"] == "COMPLETED"
        assert session["endedAt"] is not None
        assert session["duration"] >= 1

        booking = db.get(Booking, active_session["bookingId"])
        assert booking.status == BookingStatus.COMPLETED
        earning = db.query(Earning).filter(Earning.booking_id == booking.id).one()
        assert earning.session_id == session["id"]

    def test_scheduled_session_cannot_be_ended(self, client, paid_booking):
        session = create_session(client, paid_booking).json()["session"]

        response = client.post(
            f"/api/sessions/{session['sessionId']}/end",
            json={"userId": paid_booking["clientId"], "role": "client"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "SESSION_NOT_ACTIVE"

    def test_non_participant_cannot_end(self, client, active_session, make_user):
        stranger = make_user(UserRole.CONSULTANT)

        response = client.post(
            f"/api/sessions/{active_session['sessionId']}/end",
            json={"userId": stranger.id, "role": "consultant"},
        )

        assert response.status_code == 403

    def test_completed_booking_can_still_be_refunded(self, client, completed_booking, fetch):
        response = client.put("/api/payments", json={"bookingId": completed_booking["id"]})

        assert response.status_code == 200
        assert fetch(Booking, completed_booking["id"]).status == BookingStatus.CANCELLED


class TestListSessions:
    """GET /api/sessions"""

    def test_filter_by_participant_and_status(self, client, active_session, make_user):
        response = client.get(
            "/api/sessions",
            params={"userId": active_session["consultantId"], "role": "consultant", "status": "ACTIVE"},
        )

        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["items"][0]["sessionId"] == active_session["sessionId"]

        other = make_user(UserRole.CLIENT)
        response = client.get("/api/sessions", params={"userId": other.id, "role": "client"})
        assert response.json()["items"] == []
