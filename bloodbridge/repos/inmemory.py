# bloodbridge/repos/inmemory.py
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

TABLES = ("donor_info", "hospital_info", "blood_donations", "blood_requests")

def _id() -> str:
    return uuid.uuid4().hex


class DuplicateEmail(ValueError):
    pass


class InMemoryRepo:
    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.revoked: set[str] = set()
        self.tables: Dict[str, Dict[str, dict]] = {name: {} for name in TABLES}

    # Users
    async def create_user(self, email: str, password_hash: str, metadata: dict) -> dict:
        if email in self.users:
            raise DuplicateEmail("Email exists")
        doc = {
            "_id": _id(),
            "email": email,
            "password_hash": password_hash,
            "metadata": dict(metadata),
            "created_at": datetime.now(timezone.utc),
        }
        self.users[email] = doc
        return doc

    async def find_user_by_email(self, email: str) -> Optional[dict]:
        return self.users.get(email)

    # Sessions
    async def revoke_token(self, jti: str) -> None:
        self.revoked.add(jti)

    async def is_token_revoked(self, jti: str) -> bool:
        return jti in self.revoked

    # Rows
    async def insert_row(self, table: str, row: Dict[str, Any]) -> dict:
        doc = dict(row)
        doc["id"] = _id()
        doc.setdefault("created_at", datetime.now(timezone.utc))
        self.tables[table][doc["id"]] = doc
        return dict(doc)

    async def select_rows(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Rows matching every equality filter, newest first."""
        filters = filters or {}
        rows = [
            dict(r) for r in self.tables[table].values()
            if all(r.get(k) == v for k, v in filters.items())
        ]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return rows

    async def get_row(self, table: str, row_id: str) -> Optional[dict]:
        row = self.tables[table].get(row_id)
        return dict(row) if row else None
