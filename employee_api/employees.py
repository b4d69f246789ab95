# employees.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from . import crud, schemas
from .database import get_async_session
from .errors import EmployeeAPIError, ErrorKind

router = APIRouter(
    prefix="/api/employees",
    tags=["Employees"]
)


def employee_not_found() -> EmployeeAPIError:
    return EmployeeAPIError(ErrorKind.NOT_FOUND, "Employee not found")


@router.post("", response_model=schemas.EmployeeRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=schemas.EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee_endpoint(
        employee_input: schemas.EmployeeCreate,
        db: AsyncSession = Depends(get_async_session)
):
    """Create a new employee record with a generated system id."""
    return await crud.create_employee(db=db, employee=employee_input)


@router.put("/{id}", response_model=schemas.EmployeeRead)
async def update_employee_endpoint(
        id: str,
        updated_details: schemas.EmployeeUpdate,
        db: AsyncSession = Depends(get_async_session)
):
    """
    Updates an employee found by system id or, failing the id format, by employeeId.
    Only the provided fields change; the result must still be a valid employee.
    """
    updated_employee = await crud.update_employee(db=db, key=id, employee_update=updated_details)
    if not updated_employee:
        raise employee_not_found()
    return updated_employee


@router.delete("/{id}", response_model=schemas.Message)
async def delete_employee_endpoint(
        id: str,
        db: AsyncSession = Depends(get_async_session)
):
    """Delete an employee by system id or employeeId."""
    if not await crud.delete_employee(db=db, key=id):
        raise employee_not_found()
    return {"message": "Employee deleted successfully"}


@router.get("/search", response_model=List[schemas.EmployeeRead])
async def search_employees_endpoint(
        employee_id: Optional[str] = Query(None, alias="employeeId"),
        name: Optional[str] = None,
        department: Optional[str] = None,
        db: AsyncSession = Depends(get_async_session)
):
    """
    Keyword search. "John" matches first or last name, "John Smith" matches
    first name John and last name Smith. Name matching ignores case.
    """
    return await crud.search_employees(db, employee_id=employee_id, name=name, department=department)


@router.get("", response_model=List[schemas.EmployeeRead], include_in_schema=False)
@router.get("/", response_model=List[schemas.EmployeeRead])
async def list_employees_endpoint(
        employee_id: Optional[str] = Query(None, alias="employeeId"),
        name: Optional[str] = None,
        department: Optional[str] = None,
        date_from: Optional[date] = Query(None, alias="dateFrom"),
        date_to: Optional[date] = Query(None, alias="dateTo"),
        db: AsyncSession = Depends(get_async_session)
):
    """List employees, optionally filtered by joining date range [dateFrom, dateTo]."""
    return await crud.list_employees(
        db,
        employee_id=employee_id,
        name=name,
        department=department,
        date_from=date_from,
        date_to=date_to,
    )
