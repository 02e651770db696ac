# bloodbridge/routers/tables.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from bloodbridge.core.security import get_claims
from bloodbridge.deps import get_feed, get_repo
from bloodbridge.schemas import PROFILE_TABLES, TABLE_SCHEMAS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tables", tags=["tables"])

def _table(table: str) -> str:
    if table not in TABLE_SCHEMAS:
        raise HTTPException(404, f"Unknown table: {table}")
    return table

def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in exc.errors(include_url=False)
    )

@router.get("/{table}")
async def select_rows(
    table: str = Depends(_table),
    email: Optional[str] = None,
    blood_group: Optional[str] = None,
    urgency: Optional[str] = None,
    repo=Depends(get_repo),
):
    """Rows of ``table`` matching every given column, newest first."""
    filters = {k: v for k, v in
               {"email": email, "blood_group": blood_group, "urgency": urgency}.items()
               if v is not None}
    return await repo.select_rows(table, filters)

@router.get("/{table}/{row_id}")
async def get_row(row_id: str, table: str = Depends(_table), repo=Depends(get_repo)):
    row = await repo.get_row(table, row_id)
    if not row:
        raise HTTPException(404, "Row not found")
    return row

@router.post("/{table}", status_code=201)
async def insert_row(
    body: dict = Body(...),
    table: str = Depends(_table),
    claims=Depends(get_claims),
    repo=Depends(get_repo),
    feed=Depends(get_feed),
):
    body.setdefault("email", claims["sub"])
    if body["email"] != claims["sub"]:
        raise HTTPException(403, "Rows can only be written for the signed-in email")

    if table in PROFILE_TABLES.values():
        if table != PROFILE_TABLES.get(claims.get("role")):
            raise HTTPException(403, f"A {claims.get('role')} account cannot write to {table}")
        others = [t for t in PROFILE_TABLES.values() if t != table]
        for other in others:
            if await repo.select_rows(other, {"email": body["email"]}):
                raise HTTPException(409, "This email already has a profile of another role")

    try:
        doc = TABLE_SCHEMAS[table].model_validate(body).model_dump()
    except ValidationError as exc:
        raise HTTPException(422, _describe(exc))

    saved = await repo.insert_row(table, doc)
    feed.emit(table, "INSERT", saved)
    logger.info("inserted %s row %s for %s", table, saved["id"], saved["email"])
    return saved
