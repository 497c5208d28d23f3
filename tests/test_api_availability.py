from datetime import date, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient


def days_from_today(days: int) -> date:
    return date.today() + timedelta(days=days)


def test_quote(client: TestClient):
    response = client.post("/quotes", json={
        "price_per_night": 100,
        "check_in": "2024-01-01",
        "check_out": "2024-01-04",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["number_of_nights"] == 3
    assert Decimal(data["subtotal"]) == Decimal("300.00")
    assert Decimal(data["service_fee"]) == Decimal("30.00")
    assert Decimal(data["total_price"]) == Decimal("330.00")


def test_quote_same_day_checkout(client: TestClient):
    response = client.post("/quotes", json={
        "price_per_night": 100,
        "check_in": "2024-01-04",
        "check_out": "2024-01-04",
    })
    assert response.status_code == 400


def test_quote_negative_rate(client: TestClient):
    response = client.post("/quotes", json={
        "price_per_night": -5,
        "check_in": "2024-01-01",
        "check_out": "2024-01-04",
    })
    assert response.status_code == 400
    assert "negative" in response.json()["detail"]


def test_availability(client: TestClient, add_booking):
    add_booking(check_in=days_from_today(2), check_out=days_from_today(7), status="pending")

    taken = client.post("/properties/prop-1/availability", json={
        "check_in": str(days_from_today(1)),
        "check_out": str(days_from_today(3)),
    })
    free = client.post("/properties/prop-1/availability", json={
        "check_in": str(days_from_today(7)),
        "check_out": str(days_from_today(9)),
    })
    other_property = client.post("/properties/prop-2/availability", json={
        "check_in": str(days_from_today(1)),
        "check_out": str(days_from_today(3)),
    })

    assert taken.status_code == 200
    assert taken.json()["available"] is False
    assert free.json()["available"] is True
    assert other_property.json()["available"] is True


def test_availability_invalid_range(client: TestClient):
    response = client.post("/properties/prop-1/availability", json={
        "check_in": "2024-01-05",
        "check_out": "2024-01-01",
    })
    assert response.status_code == 400


def test_blocked_dates(client: TestClient, add_booking):
    add_booking(check_in=days_from_today(2), check_out=days_from_today(4))
    add_booking(check_in=days_from_today(5), check_out=days_from_today(7), status="cancelled")
    add_booking(check_in=days_from_today(-10), check_out=days_from_today(-8))

    response = client.get("/properties/prop-1/blocked-dates")

    assert response.status_code == 200
    assert response.json() == {
        "property_id": "prop-1",
        "dates": [str(days_from_today(2)), str(days_from_today(3))],
    }
