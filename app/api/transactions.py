from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import TransactionCreate, TransactionUpdate, TransactionResponse, FinanceTotals
from app.services.analytics import finance_totals

router = APIRouter(prefix="/api/transactions", tags=["finance"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(project_id: str = Query(None, alias="projectId"), store=Depends(get_store)):
    if project_id:
        return store.transactions.list_by_project(project_id)
    return store.transactions.list()


@router.get("/totals", response_model=FinanceTotals)
def get_totals(store=Depends(get_store)):
    return FinanceTotals(**finance_totals(store))


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(TransactionCreate, data, "transaction")
    return store.transactions.create(payload.model_dump())


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: str, store=Depends(get_store)):
    return get_or_404(store.transactions, transaction_id)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(transaction_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(TransactionUpdate, data, "transaction"))
    return update_or_404(store.transactions, transaction_id, changes)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, store=Depends(get_store)):
    delete_or_404(store.transactions, transaction_id)
    return Response(status_code=204)
