# bloodbridge/client/api_client.py
import logging

import requests

from bloodbridge.core.errors import GENERIC_MESSAGE, ProviderError

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin wrapper over the provider's HTTP API.

    ``http`` is anything with a requests-style ``request`` method; a
    ``requests.Session`` by default. Non-2xx responses and network failures
    raise ``ProviderError`` carrying the provider's message when it sent one.
    """

    def __init__(self, base_url: str, token: str | None = None, http=None, timeout: float | None = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.http = http or requests.Session()
        self.timeout = timeout

    def set_token(self, token: str | None):
        self.token = token

    def clear_token(self):
        self.token = None

    def headers(self):
        h = {"Accept": "application/json"}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    def _send(self, method: str, path: str, headers=None, **kwargs):
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)
        headers = {**self.headers(), **(headers or {})}
        try:
            r = self.http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ProviderError(GENERIC_MESSAGE) from exc

        if r.status_code >= 400:
            detail = None
            try:
                detail = r.json().get("detail")
            except ValueError:
                pass
            logger.debug("%s %s -> %s %s", method, path, r.status_code, detail)
            raise ProviderError(detail if isinstance(detail, str) else GENERIC_MESSAGE, r.status_code)
        return r.json()

    def get(self, path: str, params=None, headers=None):
        return self._send("GET", path, params=params, headers=headers)

    def post(self, path: str, json=None):
        return self._send("POST", path, json=json)

    # ---------- identity ----------
    def create_user(self, email: str, password: str, metadata: dict) -> dict:
        return self.post("/api/auth/signup", json={"email": email, "password": password, "metadata": metadata})

    def sign_in(self, email: str, password: str) -> dict:
        return self.post("/api/auth/signin", json={"email": email, "password": password})

    def sign_out(self) -> None:
        self.post("/api/auth/signout")

    def get_session(self, token: str | None = None) -> dict:
        """Session for ``token``, or for the client's own token."""
        headers = {"Authorization": f"Bearer {token}"} if token else None
        return self.get("/api/auth/session", headers=headers)

    # ---------- tables ----------
    def select(self, table: str, **eq) -> list:
        return self.get(f"/api/tables/{table}", params={k: v for k, v in eq.items() if v is not None})

    def insert(self, table: str, row: dict) -> dict:
        return self.post(f"/api/tables/{table}", json=row)

    # ---------- changes ----------
    def events(self, after: int = 0, tables=None) -> dict:
        params = {"after": after}
        if tables:
            params["table"] = list(tables)
        return self.get("/api/events", params=params)
