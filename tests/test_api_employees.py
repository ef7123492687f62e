"""
Tests for employee_manager_api/app/api/endpoints/employees.py - Employee API endpoints.
"""
import sqlite3
from unittest.mock import AsyncMock, patch

import pytest

from employee_manager_api.app.api.endpoints.employees import parse_employee_id
from employee_manager_api.app.services.employee_service import EmployeeService


def count_rows(db_path):
    conn = sqlite3.connect(db_path)
    try:
        return conn.execute("SELECT COUNT(*) FROM employees").fetchone()[0]
    finally:
        conn.close()


class TestParseEmployeeId:
    """Test parse_employee_id helper."""

    @pytest.mark.parametrize("raw,expected", [("5", 5), (" 7 ", 7), ("5.0", 5), ("1e1", 10)])
    def test_numeric_ids(self, raw, expected):
        """Numeric strings should parse, integral ones as int."""
        value = parse_employee_id(raw)
        assert value == expected
        assert isinstance(value, int)

    def test_fractional_id_kept_as_float(self):
        assert parse_employee_id("1.5") == 1.5

    @pytest.mark.parametrize("raw", ["99999999999999999999", "-99999999999999999999", "1e30", "9223372036854775808"])
    def test_out_of_range_id_kept_as_float(self, raw):
        """IDs outside the 64-bit integer range can never match a row."""
        assert isinstance(parse_employee_id(raw), float)

    def test_largest_store_id_stays_exact(self):
        assert parse_employee_id("9223372036854775807") == 2 ** 63 - 1

    @pytest.mark.parametrize("raw", ["abc", "12abc", "nan", "inf", "-inf", ""])
    def test_non_numeric_ids(self, raw):
        assert parse_employee_id(raw) is None


class TestListEmployees:
    """Test GET /api/employees."""

    def test_empty_table(self, client):
        response = client.get("/api/employees")

        assert response.status_code == 200
        assert response.json() == {"success": True, "empData": []}

    def test_lists_created_employees_in_order(self, client, john):
        client.post("/api/employees", json=john)
        client.post("/api/employees", json={**john, "name": "Jane Roe"})

        data = client.get("/api/employees").json()

        assert data["success"] is True
        assert [emp["name"] for emp in data["empData"]] == ["John Doe", "Jane Roe"]
        assert set(data["empData"][0]) == {"id", "name", "mobileNumber", "department", "salary"}


class TestGetEmployee:
    """Test GET /api/employees/{id}."""

    def test_post_then_get_returns_same_fields(self, client, john, created_id):
        response = client.get(f"/api/employees/{created_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["empData"] == {"id": created_id, **john}

    def test_unknown_id_returns_404(self, client):
        response = client.get("/api/employees/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee details not found"}

    def test_fractional_id_matches_nothing(self, client, created_id):
        response = client.get(f"/api/employees/{created_id}.5")

        assert response.status_code == 404

    @pytest.mark.parametrize("raw_id", ["99999999999999999999", "1e30"])
    def test_out_of_range_id_returns_404(self, client, created_id, raw_id):
        response = client.get(f"/api/employees/{raw_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee details not found"}

    @pytest.mark.parametrize("raw_id", ["abc", "1x", "nan"])
    def test_non_numeric_id_returns_400_without_store_access(self, client, raw_id):
        with patch("employee_manager_api.app.core.db.get_connection") as get_connection:
            response = client.get(f"/api/employees/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid ID"}
        get_connection.assert_not_called()


class TestCreateEmployee:
    """Test POST /api/employees."""

    def test_create_returns_201_with_id(self, client, john):
        response = client.post("/api/employees", json=john)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Employee added successfully"
        assert isinstance(body["id"], int)

    def test_ids_are_generated_by_the_store(self, client, john):
        first = client.post("/api/employees", json=john).json()["id"]
        second = client.post("/api/employees", json=john).json()["id"]

        assert second > first

    def test_numeric_salary_is_accepted_and_stored_as_text(self, client, john):
        new_id = client.post("/api/employees", json={**john, "salary": 5000}).json()["id"]

        employee = client.get(f"/api/employees/{new_id}").json()["empData"]

        assert employee["salary"] == "5000"

    @pytest.mark.parametrize("field", ["name", "mobileNumber", "department", "salary"])
    def test_empty_field_returns_400_without_mutation(self, client, db_path, john, field):
        response = client.post("/api/employees", json={**john, field: ""})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "All fields are required"
        assert body["missingFields"] == [field]
        assert count_rows(db_path) == 0

    @pytest.mark.parametrize("field", ["name", "mobileNumber", "department", "salary"])
    def test_missing_field_returns_400_without_mutation(self, client, db_path, john, field):
        del john[field]

        response = client.post("/api/employees", json=john)

        assert response.status_code == 400
        assert count_rows(db_path) == 0

    def test_empty_object_reports_all_fields(self, client):
        response = client.post("/api/employees", json={})

        assert response.status_code == 400
        assert response.json()["missingFields"] == ["name", "mobileNumber", "department", "salary"]

    def test_missing_body_returns_400(self, client, db_path):
        response = client.post("/api/employees")

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"
        assert count_rows(db_path) == 0

    def test_non_object_body_returns_400(self, client, db_path):
        response = client.post("/api/employees", json=["John Doe"])

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid request body"
        assert count_rows(db_path) == 0

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            "/api/employees",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "Invalid request body"


class TestUpdateEmployee:
    """Test PUT /api/employees/{id}."""

    def test_update_replaces_all_fields(self, client, john, created_id):
        updated = {"name": "John Updated", "mobileNumber": "987654321", "department": "HR", "salary": "6000"}

        response = client.put(f"/api/employees/{created_id}", json=updated)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Employee updated successfully",
            "updatedId": created_id,
            "affectedRows": 1,
            "changedRows": 1,
        }
        assert client.get(f"/api/employees/{created_id}").json()["empData"] == {"id": created_id, **updated}

    def test_update_with_same_values_changes_nothing(self, client, john, created_id):
        body = client.put(f"/api/employees/{created_id}", json=john).json()

        assert body["affectedRows"] == 1
        assert body["changedRows"] == 0

    def test_update_of_unknown_id_still_returns_200(self, client, db_path, john):
        # No existence check on update: the caller only learns about the
        # missing row through affectedRows == 0.
        response = client.put("/api/employees/999", json=john)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["updatedId"] == 999
        assert body["affectedRows"] == 0
        assert body["changedRows"] == 0
        assert count_rows(db_path) == 0

    def test_non_numeric_id_returns_400(self, client, john):
        response = client.put("/api/employees/abc", json=john)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID"

    def test_non_numeric_id_is_checked_before_the_body(self, client):
        response = client.put(
            "/api/employees/abc",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid ID"}

    def test_out_of_range_id_updates_nothing(self, client, db_path, john, created_id):
        response = client.put("/api/employees/99999999999999999999", json={**john, "name": "Nobody"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["affectedRows"] == 0
        assert body["changedRows"] == 0
        assert client.get(f"/api/employees/{created_id}").json()["empData"]["name"] == "John Doe"

    @pytest.mark.parametrize("field", ["name", "mobileNumber", "department", "salary"])
    def test_missing_field_returns_400_without_mutation(self, client, john, created_id, field):
        payload = {**john, "name": "Changed"}
        del payload[field]

        response = client.put(f"/api/employees/{created_id}", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "All fields are required"
        assert body["missingFields"] == [field]
        assert client.get(f"/api/employees/{created_id}").json()["empData"] == {"id": created_id, **john}

    def test_missing_body_returns_400_without_mutation(self, client, john, created_id):
        response = client.put(f"/api/employees/{created_id}")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "All fields are required"
        assert body["missingFields"] == ["name", "mobileNumber", "department", "salary"]
        assert client.get(f"/api/employees/{created_id}").json()["empData"] == {"id": created_id, **john}

    def test_malformed_json_returns_400_without_mutation(self, client, john, created_id):
        response = client.put(
            f"/api/employees/{created_id}",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request body"
        assert client.get(f"/api/employees/{created_id}").json()["empData"] == {"id": created_id, **john}

    def test_empty_field_returns_400_without_mutation(self, client, john, created_id):
        response = client.put(f"/api/employees/{created_id}", json={**john, "name": "", "department": "HR"})

        assert response.status_code == 400
        assert response.json()["missingFields"] == ["name"]
        assert client.get(f"/api/employees/{created_id}").json()["empData"]["department"] == "IT"


class TestDeleteEmployee:
    """Test DELETE /api/employees/{id}."""

    def test_delete_existing_employee(self, client, created_id):
        response = client.delete(f"/api/employees/{created_id}")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Employee deleted successfully",
            "deletedId": created_id,
        }
        assert client.get(f"/api/employees/{created_id}").status_code == 404

    def test_delete_unknown_id_returns_404(self, client):
        response = client.delete("/api/employees/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee details not found"}

    def test_delete_twice_returns_404_second_time(self, client, created_id):
        client.delete(f"/api/employees/{created_id}")

        assert client.delete(f"/api/employees/{created_id}").status_code == 404

    @pytest.mark.parametrize("raw_id", ["99999999999999999999", "1e30"])
    def test_out_of_range_id_returns_404(self, client, db_path, created_id, raw_id):
        response = client.delete(f"/api/employees/{raw_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee details not found"}
        assert count_rows(db_path) == 1

    def test_non_numeric_id_returns_400(self, client):
        response = client.delete("/api/employees/abc")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid ID"}


class TestStoreFailures:
    """Store errors are logged and reported as 500 with the raw error text."""

    @pytest.mark.parametrize(
        "method,path,service_method",
        [
            ("get", "/api/employees", "list_employees"),
            ("get", "/api/employees/1", "get_employee"),
            ("post", "/api/employees", "create_employee"),
            ("put", "/api/employees/1", "update_employee"),
            ("delete", "/api/employees/1", "delete_employee"),
        ],
    )
    def test_store_error_returns_500(self, client, john, method, path, service_method):
        failing = AsyncMock(side_effect=sqlite3.OperationalError("database is locked"))
        kwargs = {"json": john} if method in {"post", "put"} else {}

        with patch.object(EmployeeService, service_method, failing):
            response = getattr(client, method)(path, **kwargs)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Server error, try again",
            "error": "database is locked",
        }

    def test_missing_table_is_reported(self, client, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("DROP TABLE employees")
        conn.commit()
        conn.close()

        response = client.get("/api/employees")

        assert response.status_code == 500
        assert "no such table" in response.json()["error"]


class TestEndToEnd:
    """Create, read, update and delete one employee through the API."""

    def test_full_lifecycle(self, client, john):
        created = client.post("/api/employees", json=john)
        assert created.status_code == 201
        employee_id = created.json()["id"]

        fetched = client.get(f"/api/employees/{employee_id}")
        assert fetched.status_code == 200
        assert fetched.json()["empData"] == {"id": employee_id, **john}

        updated = client.put(f"/api/employees/{employee_id}", json={**john, "name": "John Updated"})
        assert updated.status_code == 200
        assert client.get(f"/api/employees/{employee_id}").json()["empData"]["name"] == "John Updated"

        deleted = client.delete(f"/api/employees/{employee_id}")
        assert deleted.status_code == 200

        assert client.get(f"/api/employees/{employee_id}").status_code == 404
