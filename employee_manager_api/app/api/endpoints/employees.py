"""
Employee endpoints.

Five routes map one to one onto the service layer.  Every response is
a JSON envelope carrying a boolean ``success`` key.  Input problems
(non‑numeric ID, missing fields) are answered with 400 before the
database is touched; any error raised while talking to the database
is logged and answered with 500 together with the raw error text.
"""

import json
import logging
import math
from typing import Any, Dict, Optional, Tuple, Union

from fastapi import APIRouter, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from employee_manager_api.app.schemas.employee import EmployeeWrite
from employee_manager_api.app.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter()

SERVER_ERROR_MESSAGE = "Server error, try again"
INVALID_ID_MESSAGE = "Invalid ID"
NOT_FOUND_MESSAGE = "Employee details not found"
MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_BODY_MESSAGE = "Invalid request body"

# SQLite INTEGER is a signed 64-bit value.
MIN_STORE_ID = -(2 ** 63)
MAX_STORE_ID = 2 ** 63 - 1


def parse_employee_id(raw: str) -> Optional[Union[int, float]]:
    """Parse a path ID, returning ``None`` when it is not a finite number.

    Integral values within the store's integer range come back as
    ``int``.  Other numbers are returned as ``float``; they can never
    match a row.
    """
    try:
        exact = int(raw.strip())
    except ValueError:
        exact = None
    if exact is not None:
        return exact if MIN_STORE_ID <= exact <= MAX_STORE_ID else float(exact)
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if value.is_integer() and MIN_STORE_ID <= value <= MAX_STORE_ID:
        return int(value)
    return value


def _envelope(status_code: int, success: bool, **fields: Any) -> JSONResponse:
    content: Dict[str, Any] = {"success": success}
    content.update(fields)
    return JSONResponse(status_code=status_code, content=content)


def _server_error(exc: Exception) -> JSONResponse:
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        False,
        message=SERVER_ERROR_MESSAGE,
        error=str(exc),
    )


def _invalid_id() -> JSONResponse:
    return _envelope(status.HTTP_400_BAD_REQUEST, False, message=INVALID_ID_MESSAGE)


def _not_found() -> JSONResponse:
    return _envelope(status.HTTP_404_NOT_FOUND, False, message=NOT_FOUND_MESSAGE)


def _invalid_body(error: Any) -> JSONResponse:
    return _envelope(status.HTTP_400_BAD_REQUEST, False, message=INVALID_BODY_MESSAGE, error=error)


async def _read_employee_body(request: Request) -> Tuple[Optional[EmployeeWrite], Optional[JSONResponse]]:
    """Parse the request body into ``EmployeeWrite``.

    Runs inside the handler so the path ID is checked first.  An empty
    body yields ``(None, None)``; malformed JSON or a non-object body
    yields the 400 response to send.
    """
    raw = await request.body()
    if not raw.strip():
        return None, None
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        logger.warning("Malformed JSON on %s: %s", request.url.path, exc)
        return None, _invalid_body(str(exc))
    try:
        return EmployeeWrite.model_validate(payload), None
    except ValidationError as exc:
        logger.warning("Invalid employee body on %s: %s", request.url.path, exc.errors())
        return None, _invalid_body(jsonable_encoder(exc.errors(include_url=False)))


def _check_fields(employee_in: Optional[EmployeeWrite]) -> Optional[JSONResponse]:
    missing = employee_in.missing_fields() if employee_in is not None else ["name", "mobileNumber", "department", "salary"]
    if missing:
        logger.debug("Rejected employee payload, missing %s", missing)
        return _envelope(
            status.HTTP_400_BAD_REQUEST,
            False,
            message=MISSING_FIELDS_MESSAGE,
            missingFields=missing,
        )
    return None


@router.get("")
async def list_employees() -> JSONResponse:
    """Return all employees."""
    try:
        employees = await EmployeeService.list_employees()
    except Exception as exc:
        logger.exception("Failed to list employees")
        return _server_error(exc)
    return _envelope(
        status.HTTP_200_OK,
        True,
        empData=[employee.model_dump(by_alias=True) for employee in employees],
    )


@router.get("/{employee_id}")
async def get_employee(employee_id: str) -> JSONResponse:
    """Retrieve a single employee by ID."""
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        return _invalid_id()
    try:
        employee = await EmployeeService.get_employee(parsed_id)
    except Exception as exc:
        logger.exception("Failed to fetch employee %s", employee_id)
        return _server_error(exc)
    if employee is None:
        return _not_found()
    return _envelope(status.HTTP_200_OK, True, empData=employee.model_dump(by_alias=True))


@router.post("")
async def create_employee(request: Request) -> JSONResponse:
    """Create a new employee and return its generated ID."""
    employee_in, rejected = await _read_employee_body(request)
    if rejected is not None:
        return rejected
    rejected = _check_fields(employee_in)
    if rejected is not None:
        return rejected
    try:
        new_id = await EmployeeService.create_employee(employee_in)
    except Exception as exc:
        logger.exception("Failed to create employee")
        return _server_error(exc)
    return _envelope(
        status.HTTP_201_CREATED,
        True,
        message="Employee added successfully",
        id=new_id,
    )


@router.put("/{employee_id}")
async def update_employee(
    employee_id: str,
    request: Request,
) -> JSONResponse:
    """Replace all fields of an employee.

    The update is answered with 200 even when no row has the given ID;
    ``affectedRows`` is 0 in that case.  Callers that need to know
    whether the employee exists must check it themselves.
    """
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        return _invalid_id()
    employee_in, rejected = await _read_employee_body(request)
    if rejected is not None:
        return rejected
    rejected = _check_fields(employee_in)
    if rejected is not None:
        return rejected
    try:
        affected, changed = await EmployeeService.update_employee(parsed_id, employee_in)
    except Exception as exc:
        logger.exception("Failed to update employee %s", employee_id)
        return _server_error(exc)
    return _envelope(
        status.HTTP_200_OK,
        True,
        message="Employee updated successfully",
        updatedId=parsed_id,
        affectedRows=affected,
        changedRows=changed,
    )


@router.delete("/{employee_id}")
async def delete_employee(employee_id: str) -> JSONResponse:
    """Delete an employee by ID."""
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        return _invalid_id()
    try:
        deleted = await EmployeeService.delete_employee(parsed_id)
    except Exception as exc:
        logger.exception("Failed to delete employee %s", employee_id)
        return _server_error(exc)
    if not deleted:
        return _not_found()
    return _envelope(
        status.HTTP_200_OK,
        True,
        message="Employee deleted successfully",
        deletedId=parsed_id,
    )
