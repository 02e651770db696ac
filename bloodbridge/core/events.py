# bloodbridge/core/events.py
import itertools
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class ChangeFeed:
    """
    In-process change log for the table store.

    Every insert/update/delete is appended with a monotonically increasing
    ``seq``; clients poll with the last ``seq`` they saw. Only the newest
    ``maxlen`` events are retained.
    """

    def __init__(self, maxlen: int = 1000):
        self._events: deque = deque(maxlen=maxlen)
        self._seq = itertools.count(1)
        self._lock = threading.Lock()
        self.last_seq = 0

    def emit(self, table: str, type_: str, row: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            evt = self._append(table, type_, row)
        logger.debug("change event %s %s #%s", type_, table, evt["seq"])
        return evt

    def _append(self, table: str, type_: str, row: Dict[str, Any]) -> Dict[str, Any]:
        evt = {
            "seq": next(self._seq),
            "table": table,
            "type": type_,
            "row": row,
            "created_at": datetime.now(timezone.utc),
        }
        self._events.append(evt)
        self.last_seq = evt["seq"]
        return evt

    def since(self, after: int = 0, tables: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        wanted = set(tables) if tables else None
        with self._lock:
            snapshot = list(self._events)
        return [
            e for e in snapshot
            if e["seq"] > after and (wanted is None or e["table"] in wanted)
        ]
