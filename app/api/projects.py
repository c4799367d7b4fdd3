from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, EvaluationResponse, EvaluationSummary
)
from app.services.analytics import evaluation_summary

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
def list_projects(status: str = Query(None), store=Depends(get_store)):
    if status:
        return store.projects.filter_by(status=status)
    return store.projects.list()


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(ProjectCreate, data, "project")
    return store.projects.create(payload.model_dump())


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, store=Depends(get_store)):
    return get_or_404(store.projects, project_id)


@router.get("/{project_id}/evaluation-summary", response_model=EvaluationSummary)
def get_evaluation_summary(project_id: str, store=Depends(get_store)):
    get_or_404(store.projects, project_id)
    summary = evaluation_summary(store, project_id)
    latest = summary["latest_evaluation"]
    summary["latest_evaluation"] = EvaluationResponse.model_validate(latest) if latest is not None else None
    return EvaluationSummary(**summary)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(ProjectUpdate, data, "project"))
    return update_or_404(store.projects, project_id, changes)


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: str, store=Depends(get_store)):
    delete_or_404(store.projects, project_id)
    return Response(status_code=204)
