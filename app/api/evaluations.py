from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import EvaluationCreate, EvaluationUpdate, EvaluationResponse

router = APIRouter(prefix="/api/evaluations", tags=["monitoring-evaluation"])


@router.get("", response_model=list[EvaluationResponse])
def list_evaluations(project_id: str = Query(None, alias="projectId"), store=Depends(get_store)):
    if project_id:
        return store.evaluations.list_by_project(project_id)
    return store.evaluations.list()


@router.post("", response_model=EvaluationResponse, status_code=201)
def create_evaluation(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(EvaluationCreate, data, "evaluation")
    return store.evaluations.create(payload.model_dump())


@router.get("/{evaluation_id}", response_model=EvaluationResponse)
def get_evaluation(evaluation_id: str, store=Depends(get_store)):
    return get_or_404(store.evaluations, evaluation_id)


@router.put("/{evaluation_id}", response_model=EvaluationResponse)
def update_evaluation(evaluation_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(EvaluationUpdate, data, "evaluation"))
    return update_or_404(store.evaluations, evaluation_id, changes)


@router.delete("/{evaluation_id}", status_code=204)
def delete_evaluation(evaluation_id: str, store=Depends(get_store)):
    delete_or_404(store.evaluations, evaluation_id)
    return Response(status_code=204)
