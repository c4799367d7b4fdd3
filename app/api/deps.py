from fastapi import HTTPException, Request
from pydantic import ValidationError
from app.core.errors import ValidationFailed, field_errors


def get_store(request: Request):
    return request.app.state.store


def validate_payload(schema, data, label: str):
    """Parse a request body with ``schema``; a failure becomes a 400 naming ``label``."""
    try:
        return schema.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise ValidationFailed(f"Invalid {label} data", field_errors(exc))


def changes_from(payload) -> dict:
    """Only the fields the caller actually sent."""
    return payload.model_dump(exclude_unset=True)


def get_or_404(collection, record_id: str):
    record = collection.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{collection.label} not found")
    return record


def update_or_404(collection, record_id: str, changes: dict):
    record = collection.update(record_id, changes)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{collection.label} not found")
    return record


def delete_or_404(collection, record_id: str) -> None:
    if not collection.delete(record_id):
        raise HTTPException(status_code=404, detail=f"{collection.label} not found")
