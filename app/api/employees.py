from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import EmployeeCreate, EmployeeUpdate, EmployeeResponse

router = APIRouter(prefix="/api/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
def list_employees(
    status: str = Query(None),
    department: str = Query(None),
    store=Depends(get_store)
):
    criteria = {}
    if status:
        criteria["status"] = status
    if department:
        criteria["department"] = department
    return store.employees.filter_by(**criteria) if criteria else store.employees.list()


@router.post("", response_model=EmployeeResponse, status_code=201)
def create_employee(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(EmployeeCreate, data, "employee")
    return store.employees.create(payload.model_dump())


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: str, store=Depends(get_store)):
    return get_or_404(store.employees, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(employee_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(EmployeeUpdate, data, "employee"))
    return update_or_404(store.employees, employee_id, changes)


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: str, store=Depends(get_store)):
    delete_or_404(store.employees, employee_id)
    return Response(status_code=204)
