"""
Service layer for employee records.

This module provides CRUD operations against the ``employees`` table.
Each method borrows a connection through ``get_cursor`` and releases
it before returning.  All queries use parameterized statements.

Errors raised by the database driver are not handled here; the API
layer decides how to report them.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional, Tuple, Union

from employee_manager_api.app.core.db import get_cursor
from employee_manager_api.app.schemas.employee import EmployeeRead, EmployeeWrite

logger = logging.getLogger(__name__)

EmployeeId = Union[int, float]


class EmployeeService:
    """Service class for managing employees."""

    @classmethod
    async def list_employees(cls) -> List[EmployeeRead]:
        """Return every employee in insertion order."""
        with get_cursor() as cursor:
            rows = cursor.execute("SELECT * FROM employees ORDER BY id").fetchall()
            return [cls._row_to_employee_read(row) for row in rows]

    @classmethod
    async def get_employee(cls, employee_id: EmployeeId) -> Optional[EmployeeRead]:
        """Retrieve a single employee by ID, or ``None`` if absent."""
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT * FROM employees WHERE id = ?",
                (employee_id,),
            ).fetchone()
            if not row:
                return None
            return cls._row_to_employee_read(row)

    @classmethod
    async def create_employee(cls, data: EmployeeWrite) -> int:
        """Insert a new employee and return the generated ID."""
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO employees (name, mobileNumber, department, salary)
                VALUES (?, ?, ?, ?)
                """,
                cls._write_values(data),
            )
            employee_id = cursor.lastrowid
        logger.info("Created employee %s", employee_id)
        return employee_id

    @classmethod
    async def update_employee(cls, employee_id: EmployeeId, data: EmployeeWrite) -> Tuple[int, int]:
        """Replace all four fields of an employee.

        Returns ``(affected_rows, changed_rows)``: the number of rows the
        ``WHERE`` clause matched and the number whose values actually
        differ afterwards.  Callers are not told whether the ID existed
        other than through ``affected_rows == 0``.
        """
        values = cls._write_values(data)
        with get_cursor() as cursor:
            current = cursor.execute(
                "SELECT name, mobileNumber, department, salary FROM employees WHERE id = ?",
                (employee_id,),
            ).fetchone()
            cursor.execute(
                """
                UPDATE employees
                SET name = ?, mobileNumber = ?, department = ?, salary = ?
                WHERE id = ?
                """,
                (*values, employee_id),
            )
            affected = cursor.rowcount
        changed = affected if current is not None and tuple(current) != values else 0
        logger.info("Updated employee %s (affected=%d, changed=%d)", employee_id, affected, changed)
        return affected, changed

    @classmethod
    async def delete_employee(cls, employee_id: EmployeeId) -> bool:
        """Delete an employee by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM employees WHERE id = ?", (employee_id,))
            affected = cursor.rowcount
        if affected:
            logger.info("Deleted employee %s", employee_id)
        return affected > 0

    @staticmethod
    def _write_values(data: EmployeeWrite) -> Tuple[str, str, str, str]:
        return (data.name, data.mobile_number, data.department, str(data.salary))

    @staticmethod
    def _row_to_employee_read(row: sqlite3.Row) -> EmployeeRead:
        """Convert a database row to an EmployeeRead schema instance."""
        return EmployeeRead(
            id=row["id"],
            name=row["name"],
            mobile_number=row["mobileNumber"],
            department=row["department"],
            salary=row["salary"],
        )
