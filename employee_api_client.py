"""Employee Manager API client.

This module defines a simple client wrapper around the employee REST
API.  The client uses the ``requests`` library internally to make HTTP
calls and exposes one method per endpoint:

* :meth:`list_employees` – return every employee.
* :meth:`get_employee` – fetch a single employee by its identifier.
* :meth:`create_employee` – add a new employee.
* :meth:`update_employee` – replace the fields of an employee.
* :meth:`delete_employee` – remove an employee.

None of the methods raise on HTTP or network failures.  Each returns a
tuple ``(result, error)`` where ``error`` is ``None`` on success and a
dictionary with ``status_code`` and ``message`` keys otherwise.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"
REQUEST_TIMEOUT = 15


class EmployeeAPIClient:
    """Client for interacting with the employee API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including the ``/api`` prefix,
                e.g. ``http://localhost:5000/api``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/employees``).
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Employee operations
    # ------------------------------------------------------------------
    def list_employees(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all employees.

        Returns:
            A tuple ``(employees, error)``. ``employees`` is empty on failure.
        """
        data, error = self._request("GET", "/employees")
        if error:
            return [], error
        if isinstance(data, dict) and isinstance(data.get("empData"), list):
            return data["empData"], None
        return [], None

    def get_employee(self, employee_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve a single employee by ID.

        Returns:
            A tuple ``(employee, error)``.
        """
        data, error = self._request("GET", f"/employees/{employee_id}")
        if error:
            return None, error
        if isinstance(data, dict):
            return data.get("empData"), None
        return None, None

    def create_employee(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Create a new employee.

        Args:
            payload: ``name``, ``mobileNumber``, ``department`` and ``salary``.
        Returns:
            A tuple ``(result, error)``; ``result["id"]`` holds the new ID.
        """
        return self._request("POST", "/employees", json_body=payload)

    def update_employee(
        self, employee_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Replace all fields of an employee.

        Returns:
            A tuple ``(result, error)``.  The server answers with success
            even for unknown IDs; ``result["affectedRows"]`` is 0 then.
        """
        return self._request("PUT", f"/employees/{employee_id}", json_body=payload)

    def delete_employee(self, employee_id: Any) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete an employee.

        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("DELETE", f"/employees/{employee_id}")
        if error:
            return False, error
        return bool(data and data.get("success")), None
