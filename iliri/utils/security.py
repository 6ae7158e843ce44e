from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer

from iliri.models import User
from iliri.services.session_service import SessionStore, get_session


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_current_user(extracted_token: str = Depends(oauth2_scheme), session: SessionStore = Depends(get_session)) -> User:
    user = session.user_for_token(extracted_token)
    if not user:
        raise HTTPException(status_code=401, detail="Nicht angemeldet")
    return user
