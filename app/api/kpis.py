from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import KPICreate, KPIUpdate, KPIResponse, KPIProgress
from app.services.analytics import kpi_progress

router = APIRouter(prefix="/api/kpis", tags=["kpis"])


def _kpi_response(kpi) -> KPIResponse:
    response = KPIResponse.model_validate(kpi)
    response.progress = kpi_progress(kpi)
    return response


@router.get("", response_model=list[KPIResponse])
def list_kpis(category: str = Query(None), store=Depends(get_store)):
    kpis = store.kpis.filter_by(category=category) if category else store.kpis.list()
    return [_kpi_response(k) for k in kpis]


@router.post("", response_model=KPIResponse, status_code=201)
def create_kpi(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(KPICreate, data, "KPI")
    return _kpi_response(store.kpis.create(payload.model_dump()))


@router.get("/{kpi_id}", response_model=KPIResponse)
def get_kpi(kpi_id: str, store=Depends(get_store)):
    return _kpi_response(get_or_404(store.kpis, kpi_id))


@router.get("/{kpi_id}/progress", response_model=KPIProgress)
def get_kpi_progress(kpi_id: str, store=Depends(get_store)):
    kpi = get_or_404(store.kpis, kpi_id)
    return KPIProgress(id=kpi.id, progress=kpi_progress(kpi))


@router.put("/{kpi_id}", response_model=KPIResponse)
def update_kpi(kpi_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(KPIUpdate, data, "KPI"))
    return _kpi_response(update_or_404(store.kpis, kpi_id, changes))


@router.delete("/{kpi_id}", status_code=204)
def delete_kpi(kpi_id: str, store=Depends(get_store)):
    delete_or_404(store.kpis, kpi_id)
    return Response(status_code=204)
