import logging
from fastapi import APIRouter, Body, Depends, HTTPException
from app.api.deps import get_store, validate_payload
from app.core.auth import hash_password, verify_password, create_access_token, get_current_user
from app.schemas.schemas import LoginRequest, LoginResponse, RegisterRequest, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=201)
def register(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(RegisterRequest, data, "registration")
    fields = payload.model_dump()
    fields["hashed_password"] = hash_password(fields.pop("password"))
    fields["role"] = "user"
    return store.users.create(fields)


@router.post("/login", response_model=LoginResponse)
def login(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(LoginRequest, data, "login")
    user = store.users.get_by_email(payload.email)
    # same answer for unknown email, disabled account and wrong password
    if not user or not user.is_active or not verify_password(payload.password, user.hashed_password):
        logger.info("Rejected login attempt")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.id})
    return LoginResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse)
def get_me(user=Depends(get_current_user)):
    return user
