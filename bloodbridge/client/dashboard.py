# bloodbridge/client/dashboard.py
import logging
from typing import Dict, Iterable, List, Optional

from bloodbridge.client.profiles import ProfileRepository
from bloodbridge.client.session import SessionStore
from bloodbridge.core.config import settings
from bloodbridge.core.errors import BloodBridgeError
from bloodbridge.schemas import ChangeEvent, DashboardStats
from bloodbridge.services.stats import compute_stats

logger = logging.getLogger(__name__)

WATCHED_TABLES = ("blood_donations", "blood_requests")

def contact_links(row: dict) -> Dict[str, str]:
    """tel:/mailto: targets for a row, fields used verbatim."""
    links = {}
    if row.get("phone_number"):
        links["tel"] = f"tel:{row['phone_number']}"
    if row.get("email"):
        links["mailto"] = f"mailto:{row['email']}"
    return links


class Dashboard:
    """
    Lists and counters for the signed-in user. Every load is a full re-fetch;
    a failed load reports the error and leaves the previous lists in place.
    """

    def __init__(self, profiles: ProfileRepository, session: SessionStore, notify,
                 recent_days: int = settings.recent_days):
        self.profiles = profiles
        self.session = session
        self.notify = notify
        self.recent_days = recent_days
        self.reset()

    def reset(self) -> None:
        self.donations: List[dict] = []
        self.requests: List[dict] = []
        self.my_donations: List[dict] = []
        self.my_requests: List[dict] = []
        self.urgent_requests: List[dict] = []
        self.stats = DashboardStats()
        self.loads = 0

    def load(self) -> bool:
        email = self.session.email
        if not email:
            self.notify("error", "User email not found. Please try logging in again.")
            return False
        try:
            donations = self.profiles.list_donations()
            requests = self.profiles.list_requests()
            mine_d = self.profiles.list_donations(email=email)
            mine_r = self.profiles.list_requests(email=email)
            urgent = self.profiles.list_requests(urgency="High")
        except BloodBridgeError as exc:
            logger.error("dashboard load failed: %s", exc.message)
            self.notify("error", "Failed to load dashboard data")
            return False

        self.donations, self.requests = donations, requests
        self.my_donations, self.my_requests = mine_d, mine_r
        self.urgent_requests = urgent
        self.stats = compute_stats(donations, requests, recent_days=self.recent_days)
        self.loads += 1
        return True

    def refresh(self) -> bool:
        return self.load()

    def handle(self, event: ChangeEvent) -> bool:
        logger.info("%s change on %s, reloading", event.type, event.table)
        if event.table == "blood_requests":
            if event.type == "INSERT":
                self.notify("info", "New blood request submitted!")
        else:
            self.notify("info", "New blood donation information available!")
        return self.load()

    def watch(self, events: Iterable[ChangeEvent], limit: Optional[int] = None) -> int:
        """Reload once per event, in arrival order. Returns the events handled."""
        handled = 0
        for evt in events:
            self.handle(evt)
            handled += 1
            if limit is not None and handled >= limit:
                break
        return handled
