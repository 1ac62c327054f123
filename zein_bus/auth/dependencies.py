from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from zein_bus.config import settings
from zein_bus.auth.session import UserSession
from zein_bus.auth.utils import verify_token
from zein_bus.backend.client import BackendClient

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")

def get_current_session(token: str = Depends(oauth2_scheme)) -> UserSession:
    """Session of the authenticated caller"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    return verify_token(token, credentials_exception)

def get_public_client() -> BackendClient:
    """Backend client for data that needs no login (areas, universities)"""
    return BackendClient()

def get_session_client(session: UserSession = Depends(get_current_session)) -> BackendClient:
    """Backend client acting with the caller's token"""
    return BackendClient(token=session.token)
