from typing import Optional

from zenscribe.core.logger import log_event
from zenscribe.core.storage import USER_KEY, StoreAdapter
from zenscribe.exceptions import PreconditionNotMet
from zenscribe.models.user import User


class SessionGate:
    """
    Holds the single local session user. This is profile selection, not
    authentication: nothing is verified on login.
    """

    def __init__(self, store: StoreAdapter):
        self.store = store
        self._user: Optional[User] = store.load(USER_KEY, User)

    @property
    def is_logged_in(self) -> bool:
        return self._user is not None

    def current_user(self) -> Optional[User]:
        return self._user

    def require_user(self) -> User:
        if self._user is None:
            raise PreconditionNotMet("A session user is required")
        return self._user

    def login(self, user: User) -> None:
        self._user = user
        self.store.save(USER_KEY, user)
        log_event("INFO", "User logged in", {"name": user.name})

    def logout(self) -> None:
        self._user = None
        self.store.remove(USER_KEY)
        log_event("INFO", "User logged out")
