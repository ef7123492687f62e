"""
Pydantic schemas for employee records.

An employee has a name, a mobile number, a department and a salary.
On the wire the mobile number is called ``mobileNumber``; Python code
uses ``mobile_number`` and the alias bridges the two.  The salary may
arrive as text or as a number and is stored as text.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SalaryValue = Union[int, float, str]

REQUIRED_FIELDS = ("name", "mobile_number", "department", "salary")


class EmployeeWrite(BaseModel):
    """Request body for creating or replacing an employee.

    Every field is optional at the schema level so that a missing
    field is reported by the endpoint as a 400 with the usual
    envelope instead of a schema error.  Use :meth:`missing_fields`
    to check presence.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = None
    mobile_number: Optional[str] = Field(None, alias="mobileNumber")
    department: Optional[str] = None
    salary: Optional[SalaryValue] = None

    def missing_fields(self) -> List[str]:
        """Return the wire names of fields that are absent or empty."""
        missing = []
        for field_name in REQUIRED_FIELDS:
            value = getattr(self, field_name)
            if value is None or value == "":
                missing.append(type(self).model_fields[field_name].alias or field_name)
        return missing


class EmployeeRead(BaseModel):
    """Schema for reading an employee."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    mobile_number: str = Field(..., alias="mobileNumber")
    department: str
    salary: SalaryValue
