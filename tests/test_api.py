import httpx
import pytest

from conftest import CANDIDATE_ID, INTERVIEWER_ID
from interview_navigator.core.payment_client import PaymentClient

MONDAY = "2024-01-08"
SATURDAY = "2024-01-13"


@pytest.fixture
def interviewer(client):
    response = client.post("/api/interviewers", json={
        "id": INTERVIEWER_ID,
        "name": "Ivy Interviewer",
        "hourly_rate": 50,
        "availability": [
            {"day_of_week": day, "start_time": "09:00", "end_time": "17:00"}
            for day in range(1, 6)
        ],
    })
    assert response.status_code == 201
    return response.json()


def book(client, scheduled_time: str = "10:00", candidate_id: str = CANDIDATE_ID):
    return client.post("/api/bookings", json={
        "candidate_id": candidate_id,
        "candidate_name": "Casey Candidate",
        "candidate_email": "casey@example.com",
        "interviewer_id": INTERVIEWER_ID,
        "scheduled_date": MONDAY,
        "scheduled_time": scheduled_time,
        "duration_minutes": 45,
    })


def complete(client, booking_id: str):
    assert client.post(f"/api/bookings/{booking_id}/confirm").status_code == 200
    assert client.post(f"/api/bookings/{booking_id}/complete").status_code == 200


def review(client, booking_id: str, rating: int = 5, would_recommend: bool = True):
    return client.post("/api/reviews", json={
        "interviewer_id": INTERVIEWER_ID,
        "candidate_id": CANDIDATE_ID,
        "booking_id": booking_id,
        "rating": rating,
        "would_recommend": would_recommend,
        "categories": {"technical": 4},
    })


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_quote_from_rate(client):
    response = client.get("/api/pricing/quote", params={"hourly_rate": 50, "duration_minutes": 45})

    assert response.status_code == 200
    data = response.json()
    assert data["breakdown"] == {
        "subtotal": 37.5,
        "platform_fee": 5.63,
        "total": 43.13,
        "interviewer_earnings": 37.5,
        "currency": "USD",
    }
    assert data["display_total"] == "$43.13"


def test_quote_from_interviewer(client, interviewer):
    response = client.get(
        "/api/pricing/quote",
        params={"interviewer_id": INTERVIEWER_ID, "duration_minutes": 60},
    )

    assert response.status_code == 200
    assert response.json()["breakdown"]["total"] == 57.5


def test_quote_requires_rate_or_interviewer(client):
    response = client.get("/api/pricing/quote", params={"duration_minutes": 45})
    assert response.status_code == 400


@pytest.mark.parametrize("rate", ["inf", "-inf", "nan"])
def test_quote_rejects_non_finite_rate(client, rate):
    response = client.get("/api/pricing/quote", params={"hourly_rate": rate, "duration_minutes": 45})
    assert response.status_code == 422


def test_non_finite_rates_are_rejected_on_profiles(client, interviewer):
    headers = {"Content-Type": "application/json"}

    created = client.post(
        "/api/interviewers",
        content='{"name": "Infinite Ivan", "hourly_rate": Infinity}',
        headers=headers,
    )
    assert created.status_code == 422

    updated = client.put(
        f"/api/interviewers/{INTERVIEWER_ID}/rate",
        content='{"hourly_rate": Infinity}',
        headers=headers,
    )
    assert updated.status_code == 422
    assert client.get(f"/api/interviewers/{INTERVIEWER_ID}").json()["hourly_rate"] == 50


def test_interviewer_profile(client, interviewer):
    response = client.get(f"/api/interviewers/{INTERVIEWER_ID}")
    assert response.status_code == 200
    assert response.json()["name"] == "Ivy Interviewer"

    assert client.get("/api/interviewers/nobody").status_code == 404
    assert client.post("/api/interviewers", json={"id": INTERVIEWER_ID, "name": "Dup"}).status_code == 409


def test_invalid_availability_is_rejected(client, interviewer):
    response = client.put(
        f"/api/interviewers/{INTERVIEWER_ID}/availability",
        json={"availability": [{"day_of_week": 1, "start_time": "17:00", "end_time": "09:00"}]},
    )
    assert response.status_code == 400


def test_update_rate(client, interviewer):
    response = client.put(f"/api/interviewers/{INTERVIEWER_ID}/rate", json={"hourly_rate": 80})

    assert response.status_code == 200
    assert response.json()["hourly_rate"] == 80


def test_slots(client, interviewer):
    monday = client.get(f"/api/interviewers/{INTERVIEWER_ID}/slots", params={"date": MONDAY}).json()
    assert monday["available"] is True
    assert monday["slots"][:3] == ["09:00", "09:15", "09:30"]

    saturday = client.get(f"/api/interviewers/{INTERVIEWER_ID}/slots", params={"date": SATURDAY}).json()
    assert saturday["available"] is False
    assert saturday["slots"] == []
    assert saturday["message"] == "Saturday - Not available"


def test_booking_flow(client, interviewer):
    response = book(client)
    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "pending"
    assert booking["total"] == 43.13

    conflict = book(client, "10:30", candidate_id="candidate-2")
    assert conflict.status_code == 409
    assert conflict.json()["detail"]["conflicting_booking_ids"] == [booking["id"]]

    assert book(client, "18:00").status_code == 400

    complete(client, booking["id"])
    assert client.post(f"/api/bookings/{booking['id']}/confirm").status_code == 409

    listed = client.get("/api/bookings", params={"user_id": CANDIDATE_ID}).json()
    assert [b["id"] for b in listed] == [booking["id"]]

    completed = client.get("/api/bookings", params={"user_id": INTERVIEWER_ID, "status": "completed"}).json()
    assert [b["status"] for b in completed] == ["completed"]


def test_cancel_and_reschedule(client, interviewer):
    first = book(client).json()
    second = book(client, "13:00").json()

    moved = client.post(
        f"/api/bookings/{first['id']}/reschedule",
        json={"scheduled_date": "2024-01-09", "scheduled_time": "11:00"},
    )
    assert moved.status_code == 200
    assert moved.json()["scheduled_date"] == "2024-01-09"

    cancelled = client.post(
        f"/api/bookings/{second['id']}/cancel",
        json={"cancelled_by": "candidate", "reason": "Found a job"},
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancelled_by"] == "candidate"

    assert client.post(f"/api/bookings/{second['id']}/no-show").status_code == 409
    assert client.get("/api/bookings/missing").status_code == 404


def test_review_flow(client, interviewer):
    booking = book(client).json()

    assert review(client, booking["id"]).status_code == 400

    complete(client, booking["id"])
    created = review(client, booking["id"], rating=5)
    assert created.status_code == 201

    duplicate = review(client, booking["id"], rating=1)
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "A review has already been submitted for this booking"

    rating = client.get(f"/api/interviewers/{INTERVIEWER_ID}/rating").json()
    assert rating["has_reviews"] is True
    assert rating["summary"]["average_rating"] == 5.0
    assert rating["summary"]["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 1}
    assert rating["summary"]["category_averages"] == {"technical": 4.0}

    reviews = client.get(f"/api/interviewers/{INTERVIEWER_ID}/reviews").json()
    assert len(reviews) == 1
    assert client.get(f"/api/reviews/booking/{booking['id']}").json()["rating"] == 5
    assert len(client.get(f"/api/reviews/candidate/{CANDIDATE_ID}").json()) == 1

    assert client.delete(f"/api/reviews/{created.json()['id']}").status_code == 204
    assert client.delete(f"/api/reviews/{created.json()['id']}").status_code == 404

    rating = client.get(f"/api/interviewers/{INTERVIEWER_ID}/rating").json()
    assert rating == {"interviewer_id": INTERVIEWER_ID, "has_reviews": False, "summary": None}
    assert client.get(f"/api/reviews/booking/{booking['id']}").status_code == 404


def test_review_validation(client, interviewer):
    booking = book(client).json()
    complete(client, booking["id"])

    assert review(client, booking["id"], rating=6).status_code == 422


def test_payments_disabled(client, interviewer):
    booking = book(client).json()

    response = client.post(f"/api/bookings/{booking['id']}/payment-intent")
    assert response.status_code == 503


def test_payment_intent_and_refund(client, app, interviewer):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/payments/create-intent":
            return httpx.Response(200, json={
                "id": "pi_1",
                "clientSecret": "secret",
                "amount": 4313,
                "currency": "usd",
                "status": "requires_payment_method",
            })
        return httpx.Response(200, json={"refundId": "re_1"})

    app.state.services.payments = PaymentClient(
        "https://payments.test", transport=httpx.MockTransport(handler)
    )
    booking = book(client).json()

    assert client.post(f"/api/bookings/{booking['id']}/refund", json={}).status_code == 409

    intent = client.post(f"/api/bookings/{booking['id']}/payment-intent")
    assert intent.status_code == 200
    assert intent.json()["amount"] == 43.13
    assert intent.json()["currency"] == "USD"

    stored = client.get(f"/api/bookings/{booking['id']}").json()
    assert stored["payment_intent_id"] == "pi_1"

    refund = client.post(f"/api/bookings/{booking['id']}/refund", json={"amount": 10})
    assert refund.json() == {"booking_id": booking["id"], "refund_id": "re_1"}


def test_payment_backend_failure(client, app, interviewer):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(402, json={"message": "Card declined"})

    app.state.services.payments = PaymentClient(
        "https://payments.test", transport=httpx.MockTransport(handler)
    )
    booking = book(client).json()

    response = client.post(f"/api/bookings/{booking['id']}/payment-intent")
    assert response.status_code == 502
    assert response.json()["detail"] == "Card declined"


def test_list_interviewers(client, interviewer):
    client.post("/api/interviewers", json={
        "id": "interviewer-2",
        "name": "Pat Python",
        "specializations": ["Python", "Data"],
        "hourly_rate": 90,
    })
    booking = book(client).json()
    complete(client, booking["id"])
    assert review(client, booking["id"], rating=4).status_code == 201

    listed = client.get("/api/interviewers").json()
    assert [i["profile"]["id"] for i in listed["interviewers"]] == [INTERVIEWER_ID, "interviewer-2"]
    assert listed["interviewers"][0]["average_rating"] == 4.0
    assert listed["has_more"] is False

    by_rate = client.get("/api/interviewers", params={"max_hourly_rate": 60}).json()
    assert [i["profile"]["id"] for i in by_rate["interviewers"]] == [INTERVIEWER_ID]

    by_skill = client.get("/api/interviewers", params={"specializations": ["python"]}).json()
    assert [i["profile"]["id"] for i in by_skill["interviewers"]] == ["interviewer-2"]

    page = client.get("/api/interviewers", params={"min_rating": 0, "limit": 1}).json()
    assert len(page["interviewers"]) == 1
    assert page["next_offset"] == 1

    assert client.get("/api/interviewers", params={"min_rating": 6}).status_code == 422
    assert client.get("/api/interviewers", params={"max_hourly_rate": "inf"}).status_code == 422


def test_stats_and_earnings(client, interviewer):
    done = book(client).json()
    complete(client, done["id"])
    book(client, "13:00")

    stats = client.get(f"/api/interviewers/{INTERVIEWER_ID}/stats").json()
    assert stats["total_bookings"] == 2
    assert stats["completed_bookings"] == 1

    earnings = client.get(f"/api/interviewers/{INTERVIEWER_ID}/earnings")
    assert earnings.status_code == 200
    assert earnings.json() == {
        "interviewer_id": INTERVIEWER_ID,
        "total_earnings": 75.0,
        "pending_earnings": 37.5,
        "paid_earnings": 37.5,
        "total_interviews": 1,
        "currency": "USD",
    }

    later = client.get(
        f"/api/interviewers/{INTERVIEWER_ID}/earnings", params={"start_date": "2024-01-09"}
    ).json()
    assert later["total_earnings"] == 0.0

    assert client.get("/api/interviewers/nobody/earnings").status_code == 404
    assert client.get("/api/interviewers/nobody/stats").status_code == 404
