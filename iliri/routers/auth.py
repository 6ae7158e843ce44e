from fastapi import APIRouter, Depends, HTTPException

from iliri.models import User
from iliri.schemas.auth import LoginRequest, LoginResponse, UserResponse, UserUpdate
from iliri.services.session_service import SessionStore, InvalidCredentials, get_session
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, session: SessionStore = Depends(get_session)):
    try:
        user = session.login(credentials.name, credentials.password, credentials.remember_me)
    except InvalidCredentials:
        raise HTTPException(status_code=401, detail="Ungültige Anmeldedaten")
    return LoginResponse(access_token=session.token, user=user)


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user), session: SessionStore = Depends(get_session)):
    session.logout()
    return {"message": "Abgemeldet"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_me(user_update: UserUpdate, current_user: User = Depends(get_current_user), session: SessionStore = Depends(get_session)):
    update_data = user_update.model_dump(exclude_unset=True)
    return session.update_user(**update_data)
