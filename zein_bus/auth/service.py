import logging

from zein_bus.auth.schemas import AuthResult, LoginRequest, RegisterRequest
from zein_bus.backend.client import BackendClient

logger = logging.getLogger(__name__)

class AuthService:
    """Login and registration are owned by the backend; this relays them"""

    def __init__(self, client: BackendClient):
        self.client = client

    async def login(self, request: LoginRequest) -> AuthResult:
        if not request.identifier.strip() or not request.password:
            raise ValueError("Identifier and password are required")
        result = await self.client.login(request.identifier.strip(), request.password)
        logger.info("User %s logged in", result.user_id)
        return result

    async def register(self, request: RegisterRequest) -> AuthResult:
        result = await self.client.register(request)
        logger.info("User %s registered in area %s", result.user_id, request.area)
        return result
