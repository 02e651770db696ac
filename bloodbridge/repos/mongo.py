# bloodbridge/repos/mongo.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from bloodbridge.repos.inmemory import TABLES, DuplicateEmail


def _out(doc: dict) -> dict:
    doc["id"] = str(doc.pop("_id"))
    return doc


class MongoRepo:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def ensure_indexes(self):
        await self.db.users.create_index("email", unique=True)
        await self.db.revoked_tokens.create_index("jti", unique=True)
        for name in TABLES:
            await self.db[name].create_index([("created_at", DESCENDING)])
            await self.db[name].create_index([("email", ASCENDING)])

    # Users
    async def create_user(self, email: str, password_hash: str, metadata: dict) -> dict:
        doc = {
            "email": email,
            "password_hash": password_hash,
            "metadata": dict(metadata),
            "created_at": datetime.now(timezone.utc),
        }
        try:
            res = await self.db.users.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateEmail("Email exists")
        doc["_id"] = str(res.inserted_id)
        return doc

    async def find_user_by_email(self, email: str) -> Optional[dict]:
        return await self.db.users.find_one({"email": email})

    # Sessions
    async def revoke_token(self, jti: str) -> None:
        await self.db.revoked_tokens.update_one(
            {"jti": jti},
            {"$setOnInsert": {"jti": jti, "revoked_at": datetime.now(timezone.utc)}},
            upsert=True,
        )

    async def is_token_revoked(self, jti: str) -> bool:
        return await self.db.revoked_tokens.find_one({"jti": jti}) is not None

    # Rows
    async def insert_row(self, table: str, row: Dict[str, Any]) -> dict:
        doc = dict(row)
        doc.setdefault("created_at", datetime.now(timezone.utc))
        res = await self.db[table].insert_one(doc)
        doc["_id"] = res.inserted_id
        return _out(doc)

    async def select_rows(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        """Rows matching every equality filter, newest first."""
        items: List[dict] = []
        cur = self.db[table].find(filters or {}).sort("created_at", -1)
        async for doc in cur:
            items.append(_out(doc))
        return items

    async def get_row(self, table: str, row_id: str) -> Optional[dict]:
        if not ObjectId.is_valid(row_id):
            return None
        doc = await self.db[table].find_one({"_id": ObjectId(row_id)})
        return _out(doc) if doc else None
