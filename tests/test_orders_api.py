"""Order API flow tests."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from bakery.core.config import settings
from bakery.core.security import get_password_hash
from bakery.db import session as db_session
from bakery.db.base import Base
from bakery.main import app
from bakery.models import ClosingPeriodRecord, OrderRecord, ProductRecord

EASTERN = ZoneInfo("Canada/Eastern")
A_MONDAY = datetime(2030, 4, 1, 10, 0, tzinfo=EASTERN)


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch, now: datetime = A_MONDAY) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_orders_api.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr("bakery.api.v1.endpoints.orders.now_in_business_timezone", lambda: now)
    monkeypatch.setattr(settings, "admin_username", "admin")
    monkeypatch.setattr(settings, "admin_password_hash", get_password_hash("secret123"))

    with testing_session_local() as db:
        db.add(ProductRecord(id=42, name="Croissant", description="Butter", price=Decimal("2.50"), status="ACTIVE"))
        db.add(ProductRecord(id=43, name="Old cake", description=None, price=Decimal("9.00"), status="ARCHIVED"))
        db.commit()
    return testing_session_local


def _admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/v1/authentication/login", json={"username": "admin", "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _pick_up_payload(pick_up_date: str, **overrides) -> dict:
    payload = {
        "client_name": "John Doe",
        "client_phone_number": "514-123-4567",
        "client_email_address": "test@example.org",
        "products": [{"product_id": 42, "quantity": 2}],
        "type": "PICK_UP",
        "pick_up_date": pick_up_date,
        "note": "no nuts",
    }
    payload.update(overrides)
    return payload


def test_anonymous_customer_can_place_a_pick_up_order(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_pick_up_payload("2030-04-04T12:00:00"))

    assert response.status_code == 201
    order_id = response.json()["id"]
    assert response.headers["location"] == f"/api/v1/orders/{order_id}"
    with testing_session_local() as db:
        record = db.get(OrderRecord, order_id)
        assert record is not None
        assert record.type == "PICK_UP"
        assert record.delivery_date is None
        assert [(item.product_id, item.name, item.qty) for item in record.items] == [(42, "Croissant", 2)]


def test_lead_time_violation_returns_400_with_message(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=_pick_up_payload("2030-04-02T12:00:00"))

    assert response.status_code == 400
    assert response.json()["detail"] == "pick-up date 2030-04-02T16:00:00.000Z has to be at least 3 days after now"
    with testing_session_local() as db:
        assert db.query(OrderRecord).count() == 0


def test_archived_product_cannot_be_ordered(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/orders",
            json=_pick_up_payload("2030-04-04T12:00:00", products=[{"product_id": 43, "quantity": 1}]),
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "product with id 43 not found"


def test_reservation_requires_admin_token(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    payload = _pick_up_payload(None, type="RESERVATION", reservation_date="2030-04-02T12:00:00")

    with TestClient(app) as client:
        anonymous_response = client.post("/api/v1/orders", json=payload)
        admin_response = client.post("/api/v1/orders", json=payload, headers=_admin_headers(client))

    assert anonymous_response.status_code == 401
    assert anonymous_response.json()["detail"] == "RESERVATION order type requires to be ADMIN"
    assert admin_response.status_code == 201


def test_disabled_product_ordering_returns_503_for_customers_only(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _admin_headers(client)
        disable_response = client.put("/api/v1/product-ordering/disable", headers=headers)
        customer_response = client.post("/api/v1/orders", json=_pick_up_payload("2030-04-04T12:00:00"))
        admin_response = client.post("/api/v1/orders", json=_pick_up_payload("2030-04-02T12:00:00"), headers=headers)
        status_response = client.get("/api/v1/product-ordering/status")

    assert disable_response.json() == {"status": "disabled"}
    assert customer_response.status_code == 503
    assert customer_response.json()["detail"] == "product ordering is disabled"
    assert admin_response.status_code == 201
    assert status_response.json() == {"status": "disabled"}


def test_delivery_inside_a_closing_period_is_rejected(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)
    with testing_session_local() as db:
        db.add(ClosingPeriodRecord(start_date=datetime(2030, 4, 10), end_date=datetime(2030, 4, 12)))
        db.commit()
    payload = _pick_up_payload(
        None,
        type="DELIVERY",
        delivery_date="2030-04-11T12:00:00",
        delivery_address="Montréal",
    )

    with TestClient(app) as client:
        response = client.post("/api/v1/orders", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "delivery date 2030-04-11T16:00:00.000Z has to be outside closing periods"


def test_admin_lists_updates_checks_and_deletes_orders(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        order_id = client.post("/api/v1/orders", json=_pick_up_payload("2030-04-04T12:00:00")).json()["id"]
        headers = _admin_headers(client)

        unauthorized_response = client.get("/api/v1/orders")
        list_response = client.get("/api/v1/orders", params={"year": 2030}, headers=headers)
        other_year_response = client.get("/api/v1/orders", params={"year": 2029}, headers=headers)
        update_response = client.put(
            f"/api/v1/orders/{order_id}",
            json={
                "products": [{"product_id": 42, "quantity": 5}],
                "type": "DELIVERY",
                "delivery_date": "2030-04-04T12:00:00",
                "delivery_address": "Montréal",
                "note": "",
            },
            headers=headers,
        )
        check_response = client.put(f"/api/v1/orders/{order_id}/check", headers=headers)
        last_response = client.get("/api/v1/orders/last", params={"count": 1}, headers=headers)
        delete_response = client.delete(f"/api/v1/orders/{order_id}", headers=headers)
        missing_response = client.delete(f"/api/v1/orders/{order_id}", headers=headers)

    assert unauthorized_response.status_code == 401
    assert list_response.status_code == 200
    listed = list_response.json()
    assert [order["id"] for order in listed] == [order_id]
    assert listed[0]["pick_up_date"] == "2030-04-04T12:00:00"
    assert listed[0]["products"][0]["product"]["name"] == "Croissant"
    assert other_year_response.json() == []

    assert update_response.status_code == 200
    updated = update_response.json()
    assert updated["type"] == "DELIVERY"
    assert updated["pick_up_date"] is None
    assert updated["delivery_address"] == "Montréal"
    assert updated["products"][0]["quantity"] == 5
    assert updated["client_name"] == "John Doe"
    assert updated["note"] == ""

    assert check_response.json()["checked"] is True
    assert [order["id"] for order in last_response.json()] == [order_id]
    assert delete_response.status_code == 204
    assert missing_response.status_code == 404
    assert missing_response.json()["detail"] == f'Order not found with id "{order_id}"'


def test_update_of_missing_order_returns_404(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.put(
            "/api/v1/orders/1337",
            json={"products": [{"product_id": 42, "quantity": 1}], "type": "PICK_UP", "pick_up_date": "2030-04-04T12:00:00"},
            headers=_admin_headers(client),
        )

    assert response.status_code == 404


def test_invalid_token_is_rejected(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/orders",
            json=_pick_up_payload("2030-04-04T12:00:00"),
            headers={"Authorization": "Bearer not-a-token"},
        )

    assert response.status_code == 401
