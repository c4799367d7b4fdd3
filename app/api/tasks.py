from datetime import datetime
from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.models.models import TaskStatus
from app.schemas.schemas import TaskCreate, TaskUpdate, TaskResponse

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

COMPLETED = TaskStatus.COMPLETED.value


@router.get("", response_model=list[TaskResponse])
def list_tasks(
    project_id: str = Query(None, alias="projectId"),
    assignee_id: str = Query(None, alias="assigneeId"),
    status: str = Query(None),
    store=Depends(get_store)
):
    criteria = {}
    if project_id:
        criteria["project_id"] = project_id
    if assignee_id:
        criteria["assignee_id"] = assignee_id
    if status:
        criteria["status"] = status
    return store.tasks.filter_by(**criteria) if criteria else store.tasks.list()


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(data: dict = Body(...), store=Depends(get_store)):
    fields = validate_payload(TaskCreate, data, "task").model_dump()
    if fields["status"] == COMPLETED:
        if fields.get("completed_at") is None:
            fields["completed_at"] = datetime.utcnow()
    else:
        fields["completed_at"] = None
    return store.tasks.create(fields)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, store=Depends(get_store)):
    return get_or_404(store.tasks, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(TaskUpdate, data, "task"))
    task = get_or_404(store.tasks, task_id)

    new_status = changes.get("status")
    if new_status == COMPLETED:
        if task.status != COMPLETED and changes.get("completed_at") is None:
            changes["completed_at"] = datetime.utcnow()
    elif new_status is not None:
        changes["completed_at"] = None

    return update_or_404(store.tasks, task_id, changes)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, store=Depends(get_store)):
    delete_or_404(store.tasks, task_id)
    return Response(status_code=204)
