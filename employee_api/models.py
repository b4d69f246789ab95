# models.py
import uuid
from sqlmodel import SQLModel, Field
from datetime import date
from typing import Optional


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    id: Optional[uuid.UUID] = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True
    )
    # Business key; duplicates are not rejected.
    employee_id: str = Field(index=True)
    first_name: str
    last_name: str
    email: str = Field(unique=True, index=True)
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    department: Optional[str] = Field(default=None, index=True)
    position: Optional[str] = None
    date_of_joining: Optional[date] = None
    salary: Optional[float] = None
