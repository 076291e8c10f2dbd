from fastapi.testclient import TestClient

from campus_erp.config.settings import settings
from campus_erp.errors import DependencyFailure
from campus_erp.main import create_app
from tests.conftest import FakeObjectStorage, FakeStore


class UnavailableStore(FakeStore):
    def get(self, table, key):
        raise DependencyFailure(f"Error during get on {table.name}", "Requested resource not found")


def test_dependency_failure_hides_details_by_default(monkeypatch):
    monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAILS", False)
    with TestClient(create_app(store=UnavailableStore(), object_storage=FakeObjectStorage())) as client:
        response = client.get("/api/admin/A1")
    assert response.status_code == 500
    assert response.json() == {"error": "Error during get on Admin"}


def test_dependency_failure_details_when_enabled(monkeypatch):
    monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAILS", True)
    with TestClient(create_app(store=UnavailableStore(), object_storage=FakeObjectStorage())) as client:
        response = client.get("/api/admin/A1")
    assert response.status_code == 500
    assert response.json() == {"error": "Error during get on Admin", "details": "Requested resource not found"}


def test_validation_errors_use_error_envelope(client):
    response = client.post("/api/placement/apply", json={"studentId": "S1"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert {tuple(error["loc"]) for error in body["details"]} == {("body", "companyId"), ("body", "courseId")}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_store_health(client):
    response = client.get("/api/health/store")
    assert response.status_code == 200
    assert response.json()["checks"]["dynamodb"] == {"connected": True}


def test_store_health_unavailable():
    with TestClient(create_app(store=UnavailableStore(), object_storage=FakeObjectStorage())) as client:
        response = client.get("/api/health/store")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_injected_clients_are_not_closed():
    store = FakeStore()
    with TestClient(create_app(store=store, object_storage=FakeObjectStorage())):
        pass
    assert store.closed is False
