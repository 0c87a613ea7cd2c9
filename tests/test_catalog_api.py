"""Product catalog and closing period API tests."""

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
from bakery.models import ClosingPeriodRecord, ProductRecord

EASTERN = ZoneInfo("Canada/Eastern")


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "test_catalog_api.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(
        "bakery.api.v1.endpoints.closing_periods.now_in_business_timezone",
        lambda: datetime(2030, 4, 2, 10, 0, tzinfo=EASTERN),
    )
    monkeypatch.setattr(settings, "admin_username", "admin")
    monkeypatch.setattr(settings, "admin_password_hash", get_password_hash("secret123"))
    return testing_session_local


def _admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/v1/authentication/login", json={"username": "admin", "password": "secret123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_wrong_admin_password_is_rejected(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        response = client.post("/api/v1/authentication/login", json={"username": "admin", "password": "wrong"})

    assert response.status_code == 401


def test_products_endpoint_lists_active_products_only(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _admin_headers(client)
        created = client.post(
            "/api/v1/products",
            json={"name": "Croissant", "description": "Butter", "price": "2.50"},
            headers=headers,
        )
        client.post("/api/v1/products", json={"name": "Old cake", "price": "9.00", "status": "ARCHIVED"}, headers=headers)
        anonymous_create = client.post("/api/v1/products", json={"name": "Sneaky", "price": "1.00"})
        listed = client.get("/api/v1/products")
        all_products = client.get("/api/v1/products/all", headers=headers)

    assert created.status_code == 201
    assert anonymous_create.status_code == 401
    assert [product["name"] for product in listed.json()] == ["Croissant"]
    assert Decimal(listed.json()[0]["price"]) == Decimal("2.50")
    assert [product["status"] for product in all_products.json()] == ["ACTIVE", "ARCHIVED"]


def test_admin_manages_closing_periods(tmp_path: Path, monkeypatch) -> None:
    testing_session_local = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _admin_headers(client)
        created = client.post(
            "/api/v1/closing-periods",
            json={"start_date": "2030-04-10T00:00:00", "end_date": "2030-04-12T23:59:59"},
            headers=headers,
        )
        listed = client.get("/api/v1/closing-periods")
        deleted = client.delete(f"/api/v1/closing-periods/{created.json()['id']}", headers=headers)
        missing = client.delete(f"/api/v1/closing-periods/{created.json()['id']}", headers=headers)

    assert created.status_code == 201
    assert listed.json() == [
        {"id": created.json()["id"], "start_date": "2030-04-10T00:00:00", "end_date": "2030-04-12T23:59:59"}
    ]
    assert deleted.status_code == 204
    assert missing.status_code == 404
    with testing_session_local() as db:
        assert db.query(ClosingPeriodRecord).count() == 0


def test_invalid_closing_period_returns_400(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        headers = _admin_headers(client)
        past = client.post(
            "/api/v1/closing-periods",
            json={"start_date": "2030-04-01T00:00:00", "end_date": "2030-04-12T00:00:00"},
            headers=headers,
        )
        reversed_range = client.post(
            "/api/v1/closing-periods",
            json={"start_date": "2030-04-12T00:00:00", "end_date": "2030-04-10T00:00:00"},
            headers=headers,
        )
        missing_end = client.post("/api/v1/closing-periods", json={"start_date": "2030-04-12T00:00:00"}, headers=headers)
        anonymous = client.post(
            "/api/v1/closing-periods",
            json={"start_date": "2030-04-10T00:00:00", "end_date": "2030-04-12T00:00:00"},
        )

    assert past.status_code == 400
    assert past.json()["detail"] == "start date has to be in the future"
    assert reversed_range.json()["detail"] == "end date has to be greater than start date"
    assert missing_end.json()["detail"] == "end date has to be defined"
    assert anonymous.status_code == 401
