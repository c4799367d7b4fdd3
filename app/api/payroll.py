from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import PayrollCreate, PayrollUpdate, PayrollResponse, PayrollTotals
from app.services.analytics import payroll_totals

router = APIRouter(prefix="/api/payroll", tags=["payroll"])


@router.get("", response_model=list[PayrollResponse])
def list_payroll(
    employee_id: str = Query(None, alias="employeeId"),
    period: str = Query(None),
    store=Depends(get_store)
):
    records = store.payroll.list_by_employee(employee_id) if employee_id else store.payroll.list()
    if period:
        records = [r for r in records if r.period == period]
    return records


@router.get("/totals", response_model=PayrollTotals)
def get_totals(employee_id: str = Query(None, alias="employeeId"), store=Depends(get_store)):
    return PayrollTotals(**payroll_totals(store, employee_id))


@router.post("", response_model=PayrollResponse, status_code=201)
def create_payroll_record(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(PayrollCreate, data, "payroll")
    return store.payroll.create(payload.model_dump())


@router.get("/{record_id}", response_model=PayrollResponse)
def get_payroll_record(record_id: str, store=Depends(get_store)):
    return get_or_404(store.payroll, record_id)


@router.put("/{record_id}", response_model=PayrollResponse)
def update_payroll_record(record_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(PayrollUpdate, data, "payroll"))
    return update_or_404(store.payroll, record_id, changes)


@router.delete("/{record_id}", status_code=204)
def delete_payroll_record(record_id: str, store=Depends(get_store)):
    delete_or_404(store.payroll, record_id)
    return Response(status_code=204)
