# bloodbridge/client/controller.py
import logging

from pydantic import ValidationError

from bloodbridge.client.api_client import ApiClient
from bloodbridge.client.auth import AuthGateway, Notifier, log_notice, validation_message
from bloodbridge.client.dashboard import WATCHED_TABLES, Dashboard
from bloodbridge.client.profiles import ProfileRepository
from bloodbridge.client.session import SessionStore
from bloodbridge.client.subscription import ChangeSubscription
from bloodbridge.core.config import settings
from bloodbridge.core.errors import BloodBridgeError
from bloodbridge.schemas import DonorProfile, HospitalProfile

logger = logging.getLogger(__name__)


class AppController:
    """
    Owns the client-side session for the lifetime of the application: the
    store is loaded when the controller starts and cleared on logout.
    """

    def __init__(self, base_url: str = settings.api_base, session_file=settings.session_file,
                 http=None, notify: Notifier | None = None, timeout: float | None = 10):
        self.notify = notify or log_notice
        self.session = SessionStore(session_file).load()
        self.api = ApiClient(base_url, token=self.session.access_token, http=http, timeout=timeout)
        self.profiles = ProfileRepository(self.api)
        self.auth = AuthGateway(self.api, self.session, self.profiles, self.notify)
        self.dashboard = Dashboard(self.profiles, self.session, self.notify)

    def subscribe(self, interval: float = 2.0) -> ChangeSubscription:
        return ChangeSubscription.from_now(
            self.api, WATCHED_TABLES, interval=interval,
            on_error=lambda exc: self.notify("error", "Failed to receive live updates"),
        )

    def logout(self) -> None:
        self.auth.logout()
        self.dashboard.reset()
        logger.info("session cleared")

    # ---------- forms ----------
    def submit_donation(self, fields: dict) -> bool:
        return self._submit(DonorProfile, self.profiles.submit_donation, fields,
                            "Thank you for your donation submission!")

    def submit_request(self, fields: dict) -> bool:
        return self._submit(HospitalProfile, self.profiles.submit_request, fields,
                            "Blood request submitted successfully!")

    def _submit(self, schema, send, fields: dict, done: str) -> bool:
        if not self.session.email:
            self.notify("error", "User email not found. Please try logging in again.")
            return False
        try:
            row = schema.model_validate({**fields, "email": self.session.email})
        except ValidationError as exc:
            self.notify("error", validation_message(exc))
            return False
        try:
            send(row)
        except BloodBridgeError as exc:
            self.notify("error", exc.message)
            return False
        self.notify("success", done)
        return True
