# bloodbridge/client/session.py
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    role: Optional[str] = None
    email: Optional[str] = None


class SessionStore:
    """
    Locally cached identity of the signed-in user: role, email and the
    provider's access token. With a ``path`` the record survives restarts as
    a small JSON file; without one it lives in memory only.
    """

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = Path(path).expanduser() if path else None
        self.role: Optional[str] = None
        self.email: Optional[str] = None
        self.access_token: Optional[str] = None

    def load(self) -> "SessionStore":
        if self.path and self.path.exists():
            try:
                data = json.loads(self.path.read_text())
            except (OSError, ValueError) as exc:
                logger.warning("ignoring unreadable session file %s: %s", self.path, exc)
                data = {}
            self.role = data.get("role")
            self.email = data.get("email")
            self.access_token = data.get("access_token")
        return self

    def save(self, role: str, email: str, access_token: str) -> None:
        self.role, self.email, self.access_token = role, email, access_token
        if self.path:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(
                {"role": role, "email": email, "access_token": access_token}
            ))

    def clear(self) -> None:
        self.role = self.email = self.access_token = None
        if self.path and self.path.exists():
            self.path.unlink()

    def current(self) -> CurrentUser:
        return CurrentUser(self.role, self.email)
