from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from urllib3.exceptions import InsecureRequestWarning

from . import TOOL_ID
from .errors import AuthenticationError, RequestConstructionError, TransportError

requests.packages.urllib3.disable_warnings(category=InsecureRequestWarning)

DEFAULT_PORT = 5825
DEFAULT_TIMEOUT = 5


class XCAClient:
    # Minimal client for the ExtremeCloud Appliance (XCA) REST API.
    # - Auth via POST /management/v1/oauth2/token with a password grant (userId/secret).
    # - Injects the bearer token into every request built afterwards.
    # - No pagination, no retry: one request in, one response out.

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        username: str = "",
        password: str = "",
        verify: bool = False,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = TOOL_ID,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.verify = verify
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
        self._token: Optional[str] = None

    @property
    def base_url(self) -> str:
        return f"https://{self.host}:{self.port}/management/"

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def authenticate(self) -> str:
        url = f"{self.base_url}v1/oauth2/token"
        body = {"grantType": "password", "userId": self.username, "password": self.password}
        try:
            resp = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise AuthenticationError(f"could not connect to XCA: {exc}") from exc
        with resp:
            if resp.status_code != requests.codes.ok:
                raise AuthenticationError(
                    f"got status code {resp.status_code} instead of {requests.codes.ok}"
                )
            try:
                token = resp.json().get("access_token")
            except (ValueError, AttributeError) as exc:
                raise AuthenticationError(f"could not read token response: {exc}") from exc
        if not token:
            raise AuthenticationError("No access_token in auth response")
        self._token = token
        self.session.headers["Authorization"] = f"Bearer {token}"
        return token

    def build_request(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.PreparedRequest:
        url = f"{self.base_url}{path.lstrip('/')}"
        req = requests.Request("GET", url, params=params)
        try:
            return self.session.prepare_request(req)
        except (requests.RequestException, ValueError) as exc:
            raise RequestConstructionError(f"could not create HTTP(S) request: {exc}") from exc

    def perform(self, request: requests.PreparedRequest) -> requests.Response:
        # Body is streamed; the caller owns closing the response.
        try:
            return self.session.send(request, timeout=self.timeout, verify=self.verify, stream=True)
        except requests.RequestException as exc:
            raise TransportError(f"could not connect to XCA: {exc}") from exc
