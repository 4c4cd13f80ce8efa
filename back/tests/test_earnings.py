"""
Consultant earnings listing and summary.
"""


class TestEarnings:
    """GET /api/earnings"""

    def test_paid_booking_creates_pending_earning(self, client, paid_booking):
        response = client.get("/api/earnings", params={"consultantId": paid_booking["consultantId"]})

        body = response.json()
        assert response.status_code == 200
        assert len(body["items"]) == 1
        item = body["items"][0]
        assert item["bookingId"] == paid_booking["id"]
        assert (item["amount"], item["commission"], item["totalAmount"]) == (80, 19, 99)
        assert item["status"] == "PENDING"
        assert body["summary"] == {
            "totalAmount": 99,
            "totalCommission": 19,
            "pending": 80,
            "held": 0,
            "paid": 0,
        }

    def test_refund_moves_earning_to_held(self, client, paid_booking):
        client.put("/api/payments", json={"bookingId": paid_booking["id"]})

        body = client.get("/api/earnings", params={"status": "HELD"}).json()

        assert [item["bookingId"] for item in body["items"]] == [paid_booking["id"]]
        assert body["summary"]["pending"] == 0
        assert body["summary"]["held"] == 80

    def test_unpaid_bookings_have_no_earnings(self, client, create_booking):
        create_booking()

        body = client.get("/api/earnings").json()

        assert body["items"] == []
        assert body["summary"]["totalAmount"] == 0

    def test_other_consultants_excluded(self, client, paid_booking, make_consultant):
        other = make_consultant()

        body = client.get("/api/earnings", params={"consultantId": other.id}).json()

        assert body["items"] == []
        assert body["pagination"]["total"] == 0
