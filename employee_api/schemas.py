# schemas.py
import uuid
from sqlmodel import SQLModel, Field
from pydantic import ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import date
from typing import Optional


# JSON bodies use camelCase; snake_case is accepted too.
CAMEL_CONFIG = dict(alias_generator=to_camel, populate_by_name=True)


@field_validator('date_of_birth', mode='before')
def validate_dob_not_in_future(cls, v):
    """Validates the date of birth is not in the future."""
    if v is None:
        return None

    if isinstance(v, str):
        try:
            v = date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"Invalid date format: {v}")

    if v > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return v


class EmployeeBase(SQLModel):
    employee_id: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    department: Optional[str] = None
    position: Optional[str] = None
    date_of_joining: Optional[date] = None
    salary: Optional[float] = Field(default=None, ge=0)

    _validate_dob = validate_dob_not_in_future

    model_config = ConfigDict(
        **CAMEL_CONFIG,
        json_schema_extra={
            "example": {
                "employeeId": "E-1001",
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane.doe@example.com",
                "phoneNumber": "+44 20 7946 0000",
                "dateOfBirth": "1990-01-15",
                "department": "Engineering",
                "position": "Backend Developer",
                "dateOfJoining": "2024-03-01",
                "salary": 65000
            }
        }
    )


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeRead(EmployeeBase):
    id: uuid.UUID

    model_config = ConfigDict(
        **CAMEL_CONFIG,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "a1b2c3d4-e5f6-a7b8-c9d0-e1f2a3b4c5d6",
                "employeeId": "E-1001",
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane.doe@example.com",
                "department": "Engineering",
                "dateOfJoining": "2024-03-01"
            }
        }
    )


class EmployeeUpdate(SQLModel):
    """Partial update; the merged record is revalidated as an EmployeeCreate."""
    employee_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    department: Optional[str] = None
    position: Optional[str] = None
    date_of_joining: Optional[date] = None
    salary: Optional[float] = None

    model_config = ConfigDict(
        **CAMEL_CONFIG,
        json_schema_extra={
            "example": {
                "department": "Platform",
                "position": "Senior Backend Developer"
            }
        }
    )


class Message(SQLModel):
    message: str
