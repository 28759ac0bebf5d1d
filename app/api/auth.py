"""API роуты авторизации."""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.user import User
from app.schemas.auth import Token, UserCreate, UserResponse
from app.schemas.common import DataResponse
from app.services.auth import authenticate_user, create_access_token, create_user, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """Зарегистрировать пользователя и сразу выдать токен."""
    user = create_user(db, payload.username, payload.password, payload.role)
    token = create_access_token({"sub": user.username}, request.app.state.settings)
    return Token(access_token=token, token_type="bearer")


@router.post("/login", response_model=Token)
async def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Войти по имени и паролю."""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверное имя пользователя или пароль",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token({"sub": user.username}, request.app.state.settings)
    return Token(access_token=token, token_type="bearer")


@router.get("/me", response_model=DataResponse[UserResponse])
async def me(current_user: User = Depends(get_current_user)):
    """Текущий пользователь."""
    return {"success": True, "data": UserResponse.model_validate(current_user)}
