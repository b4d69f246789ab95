# crud.py
import logging
import uuid
from datetime import date
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from .errors import EmployeeAPIError, ErrorKind, format_validation_errors
from .models import Employee
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email already exists. Please use a different email."


def _is_duplicate_email(exc: IntegrityError) -> bool:
    return "email" in str(exc.orig).lower()


def parse_system_id(key: str) -> Optional[uuid.UUID]:
    """Returns the key as a UUID if it is in the system identifier format."""
    try:
        return uuid.UUID(key)
    except ValueError:
        return None


# --- Filter construction ---

def name_matches_either(name: str):
    return or_(
        Employee.first_name.icontains(name, autoescape=True),
        Employee.last_name.icontains(name, autoescape=True),
    )


def build_search_filters(
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
        department: Optional[str] = None,
) -> list:
    """
    Filters for the keyword search.
    A single name token matches first or last name; with two or more tokens
    the first must match the first name and the second the last name.
    """
    filters = []
    if employee_id:
        filters.append(Employee.employee_id == employee_id)
    if department:
        filters.append(Employee.department == department)
    if name:
        parts = name.split()
        if len(parts) == 1:
            filters.append(name_matches_either(parts[0]))
        elif len(parts) > 1:
            filters.append(and_(
                Employee.first_name.icontains(parts[0], autoescape=True),
                Employee.last_name.icontains(parts[1], autoescape=True),
            ))
    return filters


def build_list_filters(
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
        department: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
) -> list:
    """Filters for the employee list; the name is never split."""
    filters = []
    if employee_id:
        filters.append(Employee.employee_id == employee_id)
    if name:
        filters.append(name_matches_either(name))
    if department:
        filters.append(Employee.department == department)

    if date_from and date_to:
        if date_from > date_to:
            raise EmployeeAPIError(ErrorKind.BAD_REQUEST, "dateFrom cannot be greater than dateTo")
        filters.append(Employee.date_of_joining.between(date_from, date_to))
    return filters


# --- Employee CRUD ---

async def create_employee(db: AsyncSession, employee: EmployeeCreate) -> Employee:
    db_employee = Employee(**employee.model_dump())

    try:
        db.add(db_employee)
        await db.commit()
        await db.refresh(db_employee)
        return db_employee
    except IntegrityError as exc:
        await db.rollback()
        if _is_duplicate_email(exc):
            raise EmployeeAPIError(ErrorKind.DUPLICATE_KEY, DUPLICATE_EMAIL_MESSAGE)
        raise EmployeeAPIError(ErrorKind.VALIDATION, "Error adding employee", str(exc.orig))
    except SQLAlchemyError as exc:
        await db.rollback()
        raise EmployeeAPIError(ErrorKind.VALIDATION, "Error adding employee", str(exc))


async def get_employee_by_key(db: AsyncSession, key: str) -> Optional[Employee]:
    """Looks up by system id when the key is a UUID, otherwise by employeeId."""
    system_id = parse_system_id(key)
    if system_id is not None:
        return await db.get(Employee, system_id)

    statement = select(Employee).where(Employee.employee_id == key)
    result = await db.execute(statement)
    return result.scalars().first()


async def update_employee(
        db: AsyncSession,
        key: str,
        employee_update: EmployeeUpdate
) -> Optional[Employee]:
    try:
        db_employee = await get_employee_by_key(db, key)
        if not db_employee:
            return None

        update_data = employee_update.model_dump(exclude_unset=True)
        merged = {**db_employee.model_dump(exclude={"id"}), **update_data}
        validated = EmployeeCreate.model_validate(merged)

        for field, value in validated.model_dump().items():
            setattr(db_employee, field, value)

        db.add(db_employee)
        await db.commit()
        await db.refresh(db_employee)
        return db_employee
    except ValidationError as exc:
        raise EmployeeAPIError(
            ErrorKind.VALIDATION, "Error updating employee", format_validation_errors(exc.errors())
        )
    except IntegrityError as exc:
        await db.rollback()
        if _is_duplicate_email(exc):
            raise EmployeeAPIError(ErrorKind.DUPLICATE_KEY, "Error updating employee", DUPLICATE_EMAIL_MESSAGE)
        raise EmployeeAPIError(ErrorKind.VALIDATION, "Error updating employee", str(exc.orig))
    except SQLAlchemyError as exc:
        await db.rollback()
        raise EmployeeAPIError(ErrorKind.VALIDATION, "Error updating employee", str(exc))


async def delete_employee(db: AsyncSession, key: str) -> bool:
    try:
        db_employee = await get_employee_by_key(db, key)
        if not db_employee:
            return False

        await db.delete(db_employee)
        await db.commit()
        return True
    except SQLAlchemyError as exc:
        await db.rollback()
        raise EmployeeAPIError(ErrorKind.VALIDATION, "Error deleting employee", str(exc))


async def find_employees(db: AsyncSession, filters: list) -> List[Employee]:
    statement = select(Employee).where(*filters)
    result = await db.execute(statement)
    return result.scalars().all()


async def search_employees(
        db: AsyncSession,
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
        department: Optional[str] = None,
) -> List[Employee]:
    filters = build_search_filters(employee_id, name, department)
    try:
        return await find_employees(db, filters)
    except SQLAlchemyError as exc:
        raise EmployeeAPIError(ErrorKind.SERVER, "Server error", str(exc))


async def list_employees(
        db: AsyncSession,
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
        department: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
) -> List[Employee]:
    logger.debug(
        f"Query parameters: employeeId={employee_id!r} name={name!r} "
        f"department={department!r} dateFrom={date_from} dateTo={date_to}"
    )
    filters = build_list_filters(employee_id, name, department, date_from, date_to)
    logger.debug(f"Employee filter: {[str(f) for f in filters]}")

    try:
        return await find_employees(db, filters)
    except SQLAlchemyError as exc:
        raise EmployeeAPIError(ErrorKind.SERVER, "Error fetching employees", str(exc))
