from fastapi import APIRouter, Body, Depends
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404
from app.core.auth import hash_password
from app.schemas.schemas import UserCreate, UserUpdate, UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(store=Depends(get_store)):
    return store.users.list()


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(UserCreate, data, "user")
    fields = payload.model_dump()
    fields["hashed_password"] = hash_password(fields.pop("password"))
    return store.users.create(fields)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, store=Depends(get_store)):
    return get_or_404(store.users, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(UserUpdate, data, "user"))
    if "password" in changes:
        changes["hashed_password"] = hash_password(changes.pop("password"))
    return update_or_404(store.users, user_id, changes)
