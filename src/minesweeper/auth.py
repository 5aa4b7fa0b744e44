"""
Mock login session.

There is no real authentication: logging in stores the player's email
in a client-side cookie that expires after a week. The game only asks
whether such a cookie is present.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

SESSION_COOKIE = "user"
SESSION_LIFETIME = timedelta(days=7)
MIN_PASSWORD_LENGTH = 6

HOME_PATH = "/"
LOGIN_PATH = "/login"
GUARDED_PATHS = frozenset({HOME_PATH, LOGIN_PATH})


class AuthError(ValueError):
    """Login or registration input was rejected."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_expiry(entry: Any) -> Optional[datetime]:
    """Expiry of a stored cookie, or None if the entry is malformed."""
    if not isinstance(entry, dict) or not isinstance(entry.get("value"), str):
        return None
    expires = entry.get("expires")
    if not isinstance(expires, str):
        return None
    try:
        parsed = datetime.fromisoformat(expires)
    except ValueError:
        return None
    # Naive timestamps cannot be compared with the aware clock.
    if parsed.tzinfo is None:
        return None
    return parsed


# ============================================================================
# Validation
# ============================================================================

def validate_credentials(
    email: str, password: str, confirm_password: Optional[str] = None
) -> None:
    """
    Check login or registration form input.

    Registration is selected by passing ``confirm_password``.

    Raises:
        AuthError: With the message to show the player.
    """
    if confirm_password is not None:
        if password != confirm_password:
            raise AuthError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} "
                "characters long"
            )
    if not email or not password:
        raise AuthError("Please fill in all fields")


# ============================================================================
# Cookie Storage
# ============================================================================

class CookieJar:
    """
    JSON file holding named cookies with absolute expiry times.

    Args:
        path: File backing the jar; created on first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get(self, name: str, now: Optional[datetime] = None) -> Optional[str]:
        """Return a cookie value, or None if missing or expired."""
        cookies = self._load()
        if name not in cookies:
            return None
        entry = cookies[name]
        expires = _parse_expiry(entry)
        if expires is None:
            logger.warning("Dropping malformed cookie %r in %s", name, self.path)
        if expires is None or expires <= (now or _utcnow()):
            del cookies[name]
            self._save(cookies)
            return None
        return entry["value"]

    def set(
        self,
        name: str,
        value: str,
        max_age: timedelta,
        now: Optional[datetime] = None,
    ) -> None:
        cookies = self._load()
        cookies[name] = {
            "value": value,
            "expires": ((now or _utcnow()) + max_age).isoformat(),
        }
        self._save(cookies)

    def delete(self, name: str) -> None:
        cookies = self._load()
        if cookies.pop(name, None) is not None:
            self._save(cookies)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as error:
            logger.warning("Ignoring unreadable cookie file %s: %s", self.path, error)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, cookies: Dict[str, Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(cookies, f, indent=2)


# ============================================================================
# Mock Session
# ============================================================================

class MockSession:
    """Cookie-backed stand-in for a logged-in player."""

    def __init__(self, jar: CookieJar, lifetime: timedelta = SESSION_LIFETIME):
        self.jar = jar
        self.lifetime = lifetime

    def login(
        self, email: str, password: str, now: Optional[datetime] = None
    ) -> None:
        validate_credentials(email, password)
        self._start(email, now)

    def register(
        self,
        email: str,
        password: str,
        confirm_password: str,
        now: Optional[datetime] = None,
    ) -> None:
        validate_credentials(email, password, confirm_password)
        self._start(email, now)

    def logout(self) -> None:
        self.jar.delete(SESSION_COOKIE)

    def identity(self, now: Optional[datetime] = None) -> Optional[str]:
        """Email of the logged-in player, if any."""
        value = self.jar.get(SESSION_COOKIE, now)
        if value is None:
            return None
        try:
            return json.loads(value).get("email")
        except (json.JSONDecodeError, AttributeError):
            return None

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return self.jar.get(SESSION_COOKIE, now) is not None

    def _start(self, email: str, now: Optional[datetime]) -> None:
        self.jar.set(
            SESSION_COOKIE, json.dumps({"email": email}), self.lifetime, now
        )
        logger.info("Session started for %s", email)


# ============================================================================
# Route Gate
# ============================================================================

def resolve_route(path: str, has_session: bool) -> Optional[str]:
    """
    Decide where a request for ``path`` should go.

    Returns:
        Path to redirect to, or None to serve ``path`` as requested.
    """
    if path not in GUARDED_PATHS:
        return None
    if path == LOGIN_PATH and has_session:
        return HOME_PATH
    if path != LOGIN_PATH and not has_session:
        return LOGIN_PATH
    return None
