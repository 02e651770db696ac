# bloodbridge/client/auth.py
"""
Role-aware signup/login against the identity provider.

Every public operation reports its outcome through ``notify(level, message)``
and answers with a plain bool; nothing raises to the caller. Signup is two
writes (identity, then profile) without a transaction, so a failed profile
insert leaves an identity with no profile behind.
"""
import logging
from typing import Any, Callable, Mapping, Union

from pydantic import ValidationError

from bloodbridge.client.api_client import ApiClient
from bloodbridge.client.profiles import ProfileRepository
from bloodbridge.client.session import CurrentUser, SessionStore
from bloodbridge.core.errors import BloodBridgeError, ConsistencyError
from bloodbridge.schemas import DonorSignUp, HospitalSignUp, LoginData, signup_adapter

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

def log_notice(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, message)

def validation_message(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if any(e["type"] == "missing" for e in errors):
        return "Please fill in all fields"
    first = errors[0]
    field = ".".join(str(p) for p in first["loc"] if p not in ("donor", "hospital"))
    return f"{field}: {first['msg']}" if field else first["msg"]


class AuthGateway:
    def __init__(self, api: ApiClient, session: SessionStore,
                 profiles: ProfileRepository, notify: Notifier | None = None):
        self.api = api
        self.session = session
        self.profiles = profiles
        self.notify = notify or log_notice

    def sign_up(self, data: Union[DonorSignUp, HospitalSignUp, Mapping[str, Any]]) -> bool:
        try:
            signup = data if isinstance(data, (DonorSignUp, HospitalSignUp)) \
                else signup_adapter.validate_python(dict(data))
        except ValidationError as exc:
            self.notify("error", validation_message(exc))
            return False

        try:
            if self.profiles.get_profile(signup.role, signup.email):
                self.notify("error", f"A {signup.role} with this email already exists")
                return False
            auth = self.api.create_user(signup.email, signup.password, {"role": signup.role})
            self.api.set_token(auth["access_token"])
            self.profiles.insert_profile(signup.profile())
        except BloodBridgeError as exc:
            self.api.clear_token()
            self.notify("error", exc.message)
            return False

        self.session.save(signup.role, signup.email, auth["access_token"])
        logger.info("signed up %s as %s", signup.email, signup.role)
        self.notify("success", "Account created successfully!")
        return True

    def login(self, email: str, password: str, role: str) -> bool:
        try:
            creds = LoginData(email=email, password=password, role=role)
        except ValidationError as exc:
            self.notify("error", validation_message(exc))
            return False

        try:
            auth = self.api.sign_in(creds.email, creds.password)
            self.api.set_token(auth["access_token"])
            if not self.profiles.get_profile(creds.role, creds.email):
                raise ConsistencyError(f"No {creds.role} account found for this email")
        except ConsistencyError as exc:
            self._sign_out_quietly()
            self.notify("error", exc.message)
            return False
        except BloodBridgeError as exc:
            self.api.clear_token()
            self.notify("error", exc.message)
            return False

        self.session.save(creds.role, creds.email, auth["access_token"])
        self.notify("success", "Logged in successfully!")
        return True

    def logout(self) -> None:
        if self.api.token:
            self._sign_out_quietly()
        self.session.clear()
        self.notify("success", "Logged out successfully")

    def is_authenticated(self) -> bool:
        if not self.session.role or not self.session.access_token:
            return False
        try:
            self.api.get_session(self.session.access_token)
        except BloodBridgeError:
            return False
        return True

    def get_current_user(self) -> CurrentUser:
        if not self.is_authenticated():
            return CurrentUser()
        return self.session.current()

    def _sign_out_quietly(self) -> None:
        try:
            self.api.sign_out()
        except BloodBridgeError as exc:
            logger.warning("provider sign-out failed: %s", exc.message)
        finally:
            self.api.clear_token()
