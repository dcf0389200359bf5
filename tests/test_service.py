"""
Unit tests for service, diagnostic and error-handling behaviour
"""
import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from app.config import Settings, settings
from app.db import get_session
from app.errors import NotFound, SlotAlreadyBooked, describe_validation_errors
from app.main import app


@pytest.mark.unit
class TestServiceRoutes:
    """Tests for / and /health"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert "running" in response.json()["message"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_cors_preflight_for_dev_frontend(self, client):
        response = client.options(
            "/bookings",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


@pytest.mark.unit
class TestDiagnostics:
    """Tests for the flag-gated debug routes"""

    def test_debug_in_development(self, client):
        response = client.get("/debug")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["ok"] is True
        assert data["env"]["isProd"] is False
        assert "POST /bookings" in data["routes"]
        assert "(db-test disabled)" in data["routes"]

    def test_debug_hidden_in_production(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")

        assert client.get("/debug").status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/bookings-db-test").status_code == status.HTTP_404_NOT_FOUND

    def test_debug_allowed_in_production(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        monkeypatch.setattr(settings, "ALLOW_DEBUG", True)

        assert client.get("/debug").status_code == status.HTTP_200_OK

    def test_db_test_disabled_by_default(self, client):
        assert client.get("/db-test").status_code == status.HTTP_404_NOT_FOUND

    def test_db_test_enabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_DB_TEST", True)

        response = client.get("/db-test")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"connected": True, "ok": 1}

    def test_recent_bookings(self, client, shops, make_booking):
        for t in ["09:00", "10:00"]:
            make_booking(time=t)

        response = client.get("/bookings-db-test")

        rows = response.json()["rows"]
        assert [r["time"] for r in rows] == ["10:00", "09:00"]
        assert all("customerToken" not in r for r in rows)


@pytest.mark.unit
class TestSettings:
    """Tests for derived configuration"""

    def test_allowed_origins(self):
        s = Settings(FRONTEND_URLS="https://trimmute.app, https://www.trimmute.app,,")
        assert s.allowed_origins == [
            "http://localhost:5173",
            "https://trimmute.app",
            "https://www.trimmute.app",
        ]

    def test_debug_flags(self):
        assert Settings(ENVIRONMENT="development").debug_enabled is True
        assert Settings(ENVIRONMENT="Production").debug_enabled is False
        assert Settings(ENVIRONMENT="production", ALLOW_DEBUG=True).debug_enabled is True


@pytest.mark.unit
class TestValidationMessages:
    """Tests for describe_validation_errors"""

    def test_missing_fields_listed(self):
        errors = [
            {"type": "missing", "loc": ("body", "barberId"), "msg": "Field required"},
            {"type": "missing", "loc": ("body", "date"), "msg": "Field required"},
        ]
        assert describe_validation_errors(errors) == "Missing required fields: barberId, date"

    def test_value_error_prefix_dropped(self):
        errors = [{
            "type": "value_error",
            "loc": ("body", "customerName"),
            "msg": "Value error, customerName must not be empty",
        }]
        assert describe_validation_errors(errors) == "Invalid 'customerName': customerName must not be empty"


class LockedSession:
    """Stands in for a session whose database refuses every statement"""

    def exec(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def rollback(self):
        pass


@pytest.mark.unit
class TestDatabaseErrors:
    """Tests for the 500 path when the store fails"""

    @pytest.mark.parametrize("path", ["/barbers", "/availability?barberId=1&date=2025-06-01"])
    def test_database_failure_returns_server_error(self, client, path):
        def locked_session():
            yield LockedSession()

        app.dependency_overrides[get_session] = locked_session

        response = client.get(path)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "server error"}

    def test_session_rolled_back_on_error(self):
        sessions = get_session()
        session = next(sessions)
        rolled_back = []
        session.rollback = lambda: rolled_back.append(True)

        with pytest.raises(OperationalError):
            sessions.throw(OperationalError("SELECT", {}, Exception("database is locked")))

        assert rolled_back == [True]


@pytest.mark.unit
class TestApiErrors:
    """Tests for the domain exception defaults"""

    def test_default_detail(self):
        assert SlotAlreadyBooked().detail == "That time slot is already booked"
        assert SlotAlreadyBooked(None).status_code == status.HTTP_409_CONFLICT

    def test_explicit_detail(self):
        assert NotFound("Barber not found").detail == "Barber not found"
