import json
from typing import List

import requests

from .errors import BodyReadError, DecodeError, UnexpectedContentTypeError, UnexpectedStatusError
from .models import AccessPoint, parse_inventory
from .xca_client import XCAClient

APS_PATH = "v1/aps"
INVENTORY_PARAMS = {"inventory": "true"}
JSON_MIME_TYPE = "application/json"


def fetch_inventory(client: XCAClient) -> List[AccessPoint]:
    # GET v1/aps?inventory=true and decode the AP -> radio -> wlan tree.
    # Endpoint: /management/v1/aps
    req = client.build_request(APS_PATH, dict(INVENTORY_PARAMS))
    resp = client.perform(req)
    with resp:
        if resp.status_code != requests.codes.ok:
            raise UnexpectedStatusError(resp.status_code, requests.codes.ok)

        # Prefix match so "application/json; charset=utf-8" passes.
        content_type = resp.headers.get("Content-Type", "")
        if not content_type.startswith(JSON_MIME_TYPE):
            raise UnexpectedContentTypeError(content_type, JSON_MIME_TYPE)

        try:
            body = resp.content
        except requests.RequestException as exc:
            raise BodyReadError(f"could not read server response: {exc}") from exc

    try:
        # Invalid UTF-8 (SSIDs are arbitrary bytes) becomes U+FFFD instead of failing.
        data = json.loads(body.decode("utf-8", errors="replace"))
    except ValueError as exc:
        raise DecodeError(f"could not read server response: {exc}") from exc
    return parse_inventory(data)
