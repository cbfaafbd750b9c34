"""Sign-in for the single bookkeeping session."""
# Credentials are not checked; any non-blank username/password pair opens the books.

from __future__ import annotations

from ..errors import AuthError
from ..logging_config import get_logger
from ..models.user import User
from ..state import LedgerStore

logger = get_logger("auth")


def login(username: str, password: str) -> User:
    """Return an authenticated user when both fields are filled in."""

    username = (username or "").strip()
    if not username or not (password or "").strip():
        raise AuthError("Please fill in all fields")
    return User(username=username, is_authenticated=True)


def sign_in(store: LedgerStore, username: str, password: str) -> User:
    """Validate the login form and record the user on the store."""

    try:
        user = login(username, password)
    except AuthError:
        logger.warning("Incomplete login form submitted")
        raise
    return store.login(user)


def sign_out(store: LedgerStore) -> None:
    store.logout()
