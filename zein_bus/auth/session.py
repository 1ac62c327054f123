from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class UserSession:
    """Authenticated caller: backend JWT plus the user id it was issued for.

    Passed explicitly to whatever needs the current user; nothing stores it globally.
    """
    token: str
    user_id: str
