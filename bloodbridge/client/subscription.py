# bloodbridge/client/subscription.py
import logging
import time
from typing import Callable, Iterator, List, Optional, Sequence

from bloodbridge.client.api_client import ApiClient
from bloodbridge.core.errors import BloodBridgeError
from bloodbridge.schemas import ChangeEvent

logger = logging.getLogger(__name__)


class ChangeSubscription:
    """
    Change notifications for a set of tables, read from the provider's event
    feed. ``poll`` returns whatever arrived since the previous call; iterating
    blocks and yields events until ``close`` is called. A failed poll while
    iterating is passed to ``on_error`` and retried after ``interval``.
    """

    def __init__(self, api: ApiClient, tables: Sequence[str], interval: float = 2.0, after: int = 0,
                 on_error: Optional[Callable[[BloodBridgeError], None]] = None):
        self.api = api
        self.tables = list(tables)
        self.interval = interval
        self.cursor = after
        self.on_error = on_error
        self.closed = False

    @classmethod
    def from_now(cls, api: ApiClient, tables: Sequence[str], interval: float = 2.0,
                 on_error: Optional[Callable[[BloodBridgeError], None]] = None) -> "ChangeSubscription":
        """Skip everything already in the feed."""
        last = api.events(after=0, tables=tables)["last_seq"]
        return cls(api, tables, interval=interval, after=last, on_error=on_error)
    def poll(self) -> List[ChangeEvent]:
        data = self.api.events(after=self.cursor, tables=self.tables)
        events = [ChangeEvent.model_validate(e) for e in data["events"]]
        if events:
            self.cursor = events[-1].seq
            logger.debug("%d change events, cursor now %s", len(events), self.cursor)
        return events

    def close(self) -> None:
        self.closed = True

    def __iter__(self) -> Iterator[ChangeEvent]:
        while not self.closed:
            try:
                events = self.poll()
            except BloodBridgeError as exc:
                logger.warning("change feed poll failed: %s", exc.message)
                if self.on_error:
                    self.on_error(exc)
                events = []
            for evt in events:
                yield evt
                if self.closed:
                    return
            if not events:
                time.sleep(self.interval)
