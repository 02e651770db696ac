# bloodbridge/routers/events.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from bloodbridge.deps import get_feed
from bloodbridge.schemas import EventsOut

router = APIRouter(prefix="/api/events", tags=["events"])

@router.get("", response_model=EventsOut)
async def list_events(
    after: int = Query(0, ge=0),
    table: Optional[List[str]] = Query(None),
    feed=Depends(get_feed),
):
    return {"events": feed.since(after, table), "last_seq": feed.last_seq}
