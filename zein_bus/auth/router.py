from fastapi import APIRouter, Depends, HTTPException, status

from zein_bus.auth.dependencies import get_current_session, get_public_client
from zein_bus.auth.schemas import AuthResult, LoginRequest, RegisterRequest
from zein_bus.auth.service import AuthService
from zein_bus.auth.session import UserSession
from zein_bus.backend.client import BackendClient
from zein_bus.backend.errors import BackendError

router = APIRouter()

@router.post("/login", response_model=AuthResult)
async def login(
    request: LoginRequest,
    client: BackendClient = Depends(get_public_client)
):
    """Exchange credentials for a backend JWT"""
    try:
        return await AuthService(client).login(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BackendError as e:
        # Transport and server failures are not bad credentials
        if e.is_unauthorized or (e.status_code is not None and e.status_code < 500):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=e.message,
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

@router.post("/register", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    client: BackendClient = Depends(get_public_client)
):
    """Create a commuter account"""
    try:
        return await AuthService(client).register(request)
    except BackendError as e:
        if e.status_code is not None and e.status_code < 500:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

@router.get("/me")
def read_session(session: UserSession = Depends(get_current_session)):
    """Who the bearer token belongs to"""
    return {"user_id": session.user_id}
