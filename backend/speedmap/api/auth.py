from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speedmap.api.deps import current_user
from speedmap.db import get_db
from speedmap.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from speedmap.services import auth as auth_service


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.login(db, payload.email, payload.password)
    except auth_service.AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.register(
            db, payload.name, payload.email, payload.password, payload.confirm_password
        )
    except auth_service.AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.get("/me", response_model=UserRead)
def me(user=Depends(current_user)):
    return user


@router.post("/logout")
def logout():
    # Tokens are stateless; the client just drops it
    return {"message": "Logged out"}
