"""
cli.py

XCA BSSID lister:
  - Authenticates against the ExtremeCloud Appliance REST API
  - Fetches GET v1/aps?inventory=true once
  - Prints one CSV row per (AP serial, radio index, BSSID, SSID)

Exit codes: 0 ok / -version, 1 usage, 10 authentication, 11 API call.
"""

import enum
import os
import sys
from typing import Optional, Sequence, TextIO

from . import TOOL_ID
from .aps_api import fetch_inventory
from .config import Settings, load_settings
from .errors import (
    EXIT_SUCCESS,
    ApiCallError,
    AuthenticationError,
    BssidListerError,
    ConfigError,
)
from .render import render
from .xca_client import XCAClient


class Phase(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    FETCHED = "fetched"
    RENDERED = "rendered"
    DONE = "done"
    FAILED = "failed"


def _say(settings: Settings, msg: str) -> None:
    if settings.verbose:
        print(msg, file=sys.stderr)


def build_client(settings: Settings) -> XCAClient:
    return XCAClient(
        host=settings.host, port=settings.port,
        username=settings.userid, password=settings.secret,
        verify=settings.verify_ssl, timeout=settings.timeout,
    )


class Runner:
    # Drives one run: authenticate -> fetch -> render. Nothing is retried.

    def __init__(self, settings: Settings, client: XCAClient, out: Optional[TextIO] = None) -> None:
        self.settings = settings
        self.client = client
        self.out = out
        self.phase = Phase.UNAUTHENTICATED

    def run(self) -> int:
        try:
            self.client.authenticate()
        except AuthenticationError as e:
            self.phase = Phase.FAILED
            print(f"[!] Could not authenticate: {e}", file=sys.stderr)
            return e.exit_code
        self.phase = Phase.AUTHENTICATED
        _say(self.settings, f"[+] Authenticated against {self.client.base_url}")

        try:
            aps = fetch_inventory(self.client)
        except ApiCallError as e:
            self.phase = Phase.FAILED
            print(f"[!] Could not obtain AP list: {e}", file=sys.stderr)
            return e.exit_code
        self.phase = Phase.FETCHED
        _say(self.settings, f"[+] Access points: {len(aps)}")

        try:
            rows = self._write(aps)
        except ConfigError as e:
            self.phase = Phase.FAILED
            print(f"[!] Could not write CSV: {e}", file=sys.stderr)
            return e.exit_code
        self.phase = Phase.RENDERED
        _say(self.settings, f"[+] Wrote {rows} row(s) to {self.settings.csv_path or 'stdout'}")

        self.phase = Phase.DONE
        return EXIT_SUCCESS

    def _write(self, aps) -> int:
        if self.out is not None:
            return render(aps, self.out)
        if self.settings.csv_path:
            path = os.path.abspath(self.settings.csv_path)
            try:
                os.makedirs(os.path.dirname(path), exist_ok=True)
                with open(path, "w", newline="", encoding="utf-8") as f:
                    return render(aps, f)
            except OSError as exc:
                raise ConfigError(f"<{path}>: {exc}") from exc
        return render(aps, sys.stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = load_settings(argv)
        if settings.print_version:
            print(TOOL_ID)
            return EXIT_SUCCESS
        settings.validate()
    except BssidListerError as e:
        print(f"[!] {e}", file=sys.stderr)
        return e.exit_code

    return Runner(settings, build_client(settings)).run()
