"""End-to-end API tests over the in-memory Supabase fake."""

import json

import pytest
from fastapi.testclient import TestClient

from backend.app.config import get_pdf_renderer, get_settings, get_supabase
from backend.app.main import app
from tests.conftest import (
    FakeRenderer,
    FakeSupabase,
    make_booking,
    make_booking_service,
    make_car,
    make_deal,
    make_provider,
)

CAR_METADATA = {"title": "Mazda 3", "year": 2019, "brand": "Mazda", "status": "used", "sale_price": 62000}


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase(
        {
            "cars": [
                make_car(id="c1", title="Corolla", sale_price=100, created_at="2024-03-02T08:00:00"),
                make_car(id="c2", title="Golf", brand="VW", sale_price=200, created_at="2024-02-12T08:00:00"),
            ],
            "deals": [make_deal(amount=1000, created_at="2024-03-05T10:00:00")],
            "customers": [],
            "providers": [],
            "guides": [make_provider(id="g1", name="Dana", user_id="u1", daily_rate=900)],
            "paramedics": [],
            "security_companies": [],
            "external_entertainment_companies": [],
            "travel_companies": [],
            "education_programs": [],
            "destinations_with_details": [],
            "zones": [],
            "bookings": [make_booking(id="b1", status="confirmed")],
            "booking_services": [make_booking_service("b1", "g1", id="bs1", booked_price=500, quantity=2)],
            "payouts": [],
            "user_roles": [{"id": 3, "name": "trip_planner"}],
        }
    )


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def client(supabase, renderer):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_pdf_renderer] = lambda: renderer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "api_key", "secret")
    assert client.get("/api/cars").status_code == 401
    assert client.get("/api/cars", headers={"X-API-Key": "secret"}).status_code == 200
    assert client.get("/health").status_code == 200


def test_dashboard_metrics(client):
    response = client.post(
        "/api/dashboard/metrics", json={"granularity": "month", "now": "2024-03-15T12:00:00"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["currentPeriod"]["start"] == "2024-03-01T00:00:00"
    assert body["current"]["cars"] == 1
    assert body["previous"]["cars"] == 1
    assert body["current"]["revenue"] == 1000
    assert body["current"]["inventoryValue"] == 100
    assert body["growth"]["carsGrowth"] == 0
    assert body["growth"]["dealsGrowth"] == 100
    assert len(body["monthly"]) == 6


def test_dashboard_read_failure_is_bad_gateway(client, supabase):
    supabase.failing_tables.add("deals")
    response = client.post("/api/dashboard/metrics", json={"granularity": "week"})
    assert response.status_code == 502
    assert response.json()["code"] == "data_fetch_failed"


def test_booking_overview(client):
    response = client.post("/api/dashboard/bookings", json={"now": "2024-03-15T12:00:00"})
    assert response.status_code == 200
    body = response.json()
    assert body["totalBookings"] == 1
    assert body["totalDebt"] == 500
    assert body["recentBookings"][0]["id"] == "b1"
    assert body["topServices"] == [
        {"serviceType": "guides", "serviceId": "g1", "name": "Dana", "bookingsCount": 1, "total": 500}
    ]
    assert body["entityCounts"]["guides"] == 1
    assert body["entityCounts"]["paramedics"] == 0


def test_list_cars_with_filters(client):
    response = client.get("/api/cars", params={"search": "golf"})
    assert response.json()["total"] == 1
    assert response.json()["cars"][0]["id"] == "c2"

    response = client.get("/api/cars", params={"sortBy": "title", "descending": "false"})
    assert [car["id"] for car in response.json()["cars"]] == ["c1", "c2"]


def test_add_car_multipart(client, supabase):
    response = client.post(
        "/api/cars",
        data={"metadata": json.dumps(CAR_METADATA)},
        files=[("images", ("front.jpg", b"jpeg-bytes", "image/jpeg"))],
    )
    assert response.status_code == 201
    car = response.json()["car"]
    assert car["images"] == ["Mazda_3/image_1.jpg"]
    assert ("cars", "Mazda_3/image_1.jpg") in supabase.storage.objects
    assert supabase.rows("logs")[0]["type"] == "car_added"


def test_invalid_car_is_localized(client):
    metadata = json.dumps({**CAR_METADATA, "year": 1800})

    response = client.post("/api/cars", data={"metadata": metadata})
    assert response.status_code == 422
    assert response.json()["detail"] == "חלק מהשדות אינם תקינים"
    assert "year" in response.json()["errors"]

    response = client.post(
        "/api/cars", data={"metadata": metadata}, headers={"Accept-Language": "en-US,en;q=0.9"}
    )
    assert response.json()["detail"] == "Some fields are invalid"


def test_edit_missing_car(client):
    response = client.patch("/api/cars/nope", json={"sale_price": 5}, headers={"Accept-Language": "en"})
    assert response.status_code == 404
    assert response.json() == {"detail": "The requested record was not found", "code": "not_found"}


def test_add_shop_with_gallery(client):
    metadata = json.dumps({"shop_name": "Bakery", "owner": "Noa"})
    response = client.post(
        "/api/shops",
        data={"metadata": metadata},
        files=[("gallery", ("a.png", b"png-bytes", "image/png"))],
    )
    assert response.status_code == 201
    gallery = response.json()["shop"]["gallery"]
    assert len(gallery) == 1
    assert gallery[0].startswith("https://storage.test/shop-gallery/")


def test_payout_flow(client):
    balances = client.get("/api/payouts/balances", params={"serviceType": "guides"}).json()
    assert balances["totalOwed"] == 1000
    assert balances["byServiceType"]["guides"] == {"totalOwed": 1000, "providerCount": 1}
    assert balances["balances"][0]["providerName"] == "Dana"

    created = client.post("/api/payouts/bookings/b1", json={"userId": "admin", "bookingReference": "BK-1"})
    assert created.json()["created"] == 1
    record_id = created.json()["records"][0]["id"]

    details = {"userId": "admin", "details": {"payment_method": "cash", "payment_date": "2024-03-25"}}
    paid = client.post(f"/api/payouts/{record_id}/pay", json=details)
    assert paid.status_code == 200
    assert paid.json()["payout"]["amount"] == 1000
    assert client.post(f"/api/payouts/{record_id}/pay", json=details).status_code == 409

    balances = client.get("/api/payouts/balances").json()
    assert balances["balances"][0]["netBalance"] == 0
    assert balances["totalOwed"] == 0
    assert balances["byServiceType"]["guides"] == {"totalOwed": 0, "providerCount": 0}

    history = client.get("/api/payouts/guides/g1/history").json()
    assert history["totalPaid"] == 1000
    assert [entry["paymentMethod"] for entry in history["payouts"]] == ["cash"]
    assert client.get("/api/payouts/plumbers/x/history").status_code == 422


def test_manual_payout(client):
    payload = {
        "userId": "admin",
        "payout": {
            "service_type": "guides",
            "service_id": "g1",
            "amount": 300,
            "payment_method": "bank_transfer",
            "payment_date": "2024-03-25",
        },
    }
    response = client.post("/api/payouts", json=payload)
    assert response.status_code == 201
    assert response.json()["payout"]["service_provider_name"] == "Dana"


def test_explore_search(client):
    response = client.post("/api/explore/search", json={"category": "guides", "max_price": 1000})
    body = response.json()
    assert response.status_code == 200
    assert [item["name"] for item in body["items"]] == ["Dana"]
    assert body["counts"]["all"] == 1
    assert body["facets"] == {"zones": [], "properties": [], "suitableFor": []}


def test_quote(client):
    payload = {
        "destinationPricing": {"student": 50, "crew": 20},
        "numberOfStudents": 30,
        "numberOfCrew": 4,
        "services": [{"id": "g1", "name": "Guide", "type": "guides", "quantity": 2, "days": 3, "unitPrice": 400}],
    }
    response = client.post("/api/bookings/quote", json=payload)
    assert response.status_code == 200
    assert response.json()["total_price"] == 3980


def test_quote_rejects_bad_services(client):
    payload = {"services": [{"id": "g1", "name": "Guide", "type": "guides", "quantity": 0}]}
    response = client.post("/api/bookings/quote", json=payload)
    assert response.status_code == 422
    assert "quantity" in response.json()["errors"]["services"]


def test_booking_summary_pdf(client, renderer):
    payload = {
        "booking": {
            "booking_reference": "BK-77",
            "trip_date": "2024-03-20",
            "customer": {"full_name": "Noa"},
            "services": [{"name": "Guide", "type": "guides", "quantity": 2, "unit_price": 400}],
        },
        "language": "he",
    }
    response = client.post("/api/documents/booking-summary", json=payload)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="booking-BK-77.pdf"'
    assert response.content.startswith(b"%PDF")
    assert 'dir="rtl"' in renderer.rendered[0]
    assert "School Trips Company" in renderer.rendered[0]


def test_booking_summary_language_from_header(client, renderer):
    payload = {"booking": {"booking_reference": "BK-78"}}
    client.post("/api/documents/booking-summary", json=payload, headers={"Accept-Language": "en"})
    assert 'dir="ltr"' in renderer.rendered[0]


def test_car_contract_pdf(client, renderer):
    payload = {
        "contract": {
            "deal_date": "2024-03-20",
            "seller": {"name": "Avi"},
            "vehicle": {"make": "Mazda", "model": "3", "year": 2019, "plate_number": "12 345 67"},
            "deal_amount": 62000,
        },
        "language": "en",
    }
    response = client.post("/api/documents/car-contract", json=payload)
    assert response.status_code == 200
    assert 'filename="car-contract-12_345_67.pdf"' in response.headers["content-disposition"]
    assert "Car Dealership" in renderer.rendered[0]


def test_activity_log_pdf(client, supabase, renderer):
    supabase.tables["logs"] = [
        {"id": "l1", "type": "car_added", "created_at": "2024-03-05T10:00:00", "car": {"title": "Corolla"}},
        {"id": "l2", "type": "shop_added", "created_at": "2024-01-05T10:00:00"},
    ]
    response = client.post(
        "/api/documents/activity-log",
        json={"startDate": "2024-03-01", "endDate": "2024-03-31"},
        headers={"Accept-Language": "he"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="activity-logs-' in response.headers["content-disposition"]
    assert "יומן פעילות" in renderer.rendered[0]
    assert "סך רשומות: 1" in renderer.rendered[0]
    assert renderer.options[0].landscape is True

    response = client.post("/api/documents/activity-log", json={"type": "car_painted"})
    assert response.status_code == 422


def test_render_failure(client, renderer):
    renderer.fail = True
    response = client.post(
        "/api/documents/booking-summary",
        json={"booking": {"booking_reference": "BK-1"}},
        headers={"Accept-Language": "en"},
    )
    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to generate PDF", "code": "render_failed"}


def test_signup_and_login(client):
    signup = {
        "email": "planner@example.com",
        "password": "secret1",
        "confirm_password": "secret1",
        "full_name": "Dana Levi",
    }
    response = client.post("/api/auth/signup", json=signup)
    assert response.status_code == 201
    user_id = response.json()["userId"]

    assert client.post("/api/auth/signup", json=signup).status_code == 409

    login = client.post("/api/auth/login", json={"email": "planner@example.com", "password": "secret1"})
    assert login.json() == {
        "id": user_id,
        "email": "planner@example.com",
        "fullName": "Dana Levi",
        "role": "trip_planner",
    }


def test_login_with_wrong_password(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "wrong"},
        headers={"Accept-Language": "en"},
    )
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid email or password", "code": "authentication_failed"}
