"""
Reviews on completed bookings.
"""

from models.enums import UserRole
from models.review import Review


def review_payload(booking, **overrides):
    payload = {
        "bookingId": booking["id"],
        "clientId": booking["clientId"],
        "consultantId": booking["consultantId"],
        "rating": 5,
        "review": "Very helpful session",
    }
    payload.update(overrides)
    return payload


class TestCreateReview:
    """POST /api/reviews"""

    def test_client_reviews_completed_booking(self, client, completed_booking):
        response = client.post("/api/reviews", json=review_payload(completed_booking))

        review = response.json()["review"]
        assert response.status_code == 201
        assert review["rating"] == 5
        assert review["isPublic"] is True
        assert review["sessionId"] is not None
        assert review["bookingNumber"] == completed_booking["bookingNumber"]

        booking = client.get(f"/api/bookings/{completed_booking['id']}").json()["booking"]
        assert booking["hasReview"] is True

    def test_second_review_rejected(self, client, completed_booking):
        assert client.post("/api/reviews", json=review_payload(completed_booking)).status_code == 201

        response = client.post("/api/reviews", json=review_payload(completed_booking, rating=1))

        assert response.status_code == 400
        assert response.json()["error"] == "Review already exists for this booking"

    def test_only_booking_owner_can_review(self, client, completed_booking, make_user):
        stranger = make_user(UserRole.CLIENT)

        response = client.post("/api/reviews", json=review_payload(completed_booking, clientId=stranger.id))

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized: This booking does not belong to you"

    def test_consultant_must_match(self, client, completed_booking, make_consultant):
        other = make_consultant()

        response = client.post("/api/reviews", json=review_payload(completed_booking, consultantId=other.id))

        assert response.status_code == 400
        assert response.json()["code"] == "BOOKING_CONSULTANT_MISMATCH"

    def test_booking_must_be_completed(self, client, paid_booking):
        response = client.post("/api/reviews", json=review_payload(paid_booking))

        assert response.status_code == 400
        assert response.json()["error"] == "Can only review completed bookings"

    def test_rating_out_of_range(self, client, completed_booking):
        for rating in (0, 6):
            response = client.post("/api/reviews", json=review_payload(completed_booking, rating=rating))

            assert response.status_code == 400
            assert response.json()["code"] == "REQUEST_VALIDATION_ERROR"

    def test_session_must_belong_to_booking(self, client, completed_booking, create_booking):
        other = create_booking()
        client.post(
            "/api/payments",
            json={"bookingId": other["id"], "amount": other["price"], "paymentMethod": "upi", "paymentDetails": {}},
        )
        other_session = client.post(
            "/api/sessions",
            json={"bookingId": other["id"], "clientId": other["clientId"], "consultantId": other["consultantId"]},
        ).json()["session"]

        response = client.post(
            "/api/reviews", json=review_payload(completed_booking, sessionId=other_session["id"])
        )

        assert response.status_code == 400
        assert response.json()["code"] == "SESSION_BOOKING_MISMATCH"

    def test_concurrent_duplicate_hits_unique_constraint(self, client, completed_booking, commit_before_flush, db):
        commit_before_flush(
            lambda: Review(
                booking_id=completed_booking["id"],
                client_id=completed_booking["clientId"],
                consultant_id=completed_booking["consultantId"],
                rating=3,
            )
        )

        response = client.post("/api/reviews", json=review_payload(completed_booking))

        assert response.status_code == 400
        assert response.json() == {
            "error": "Review already exists for this booking",
            "code": "REVIEW_ALREADY_EXISTS",
        }
        assert [r.rating for r in db.query(Review).all()] == [3]

    def test_unknown_booking(self, client, completed_booking):
        response = client.post("/api/reviews", json=review_payload(completed_booking, bookingId=9999))

        assert response.status_code == 404


class TestListReviews:
    """GET /api/reviews"""

    def test_private_reviews_are_hidden(self, client, completed_booking):
        client.post("/api/reviews", json=review_payload(completed_booking, isPublic=False))

        response = client.get("/api/reviews", params={"consultantId": completed_booking["consultantId"]})

        assert response.json()["items"] == []

    def test_public_reviews_listed_and_rated(self, client, completed_booking):
        client.post("/api/reviews", json=review_payload(completed_booking, rating=4))

        body = client.get("/api/reviews", params={"consultantId": completed_booking["consultantId"]}).json()
        consultants = client.get("/api/consultants").json()["items"]

        assert body["pagination"]["total"] == 1
        assert body["items"][0]["client"]["name"] == "Asha Client"
        assert consultants[0]["averageRating"] == 4.0
        assert consultants[0]["totalReviews"] == 1
        assert consultants[0]["recentReviews"][0]["clientName"] == "Asha Client"
