"""
Shared test fixtures for the employee manager tests.
"""
import pytest
from fastapi.testclient import TestClient

from employee_manager_api.app.core.config import settings


JOHN = {
    "name": "John Doe",
    "mobileNumber": "123456789",
    "department": "IT",
    "salary": "5000",
}


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the service at a fresh SQLite file for each test."""
    path = tmp_path / "employees.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    return path


@pytest.fixture
def client(db_path):
    """TestClient with the application lifespan (table creation) run."""
    from employee_manager_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def john():
    return dict(JOHN)


@pytest.fixture
def created_id(client, john):
    """ID of an employee inserted through the API."""
    response = client.post("/api/employees", json=john)
    assert response.status_code == 201
    return response.json()["id"]
