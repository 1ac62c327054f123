from typing import Optional

class BackendError(Exception):
    """Failure reported by the GraphQL backend or its transport.

    The message is the backend's own text and is shown to users unchanged.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (401, 403)
