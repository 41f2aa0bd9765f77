"""
Typed view of the XCA ``GET v1/aps?inventory=true`` payload.

The controller returns a list of access points, each with a list of radios,
each radio with a list of WLAN (SSID/BSSID) entries. Missing fields and JSON
``null`` fall back to zero values; values of the wrong JSON type raise
DecodeError. Unknown fields are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Tuple

from .errors import DecodeError


def _obj(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected object, got {type(value).__name__}")
    return value


def _list(obj: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{where}.{key}: expected array, got {type(value).__name__}")
    return value


def _str(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected string, got {type(value).__name__}")
    return value


def _bool(obj: Dict[str, Any], key: str, where: str) -> bool:
    value = obj.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"{where}.{key}: expected boolean, got {type(value).__name__}")
    return value


def _index(obj: Dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{where}.{key}: expected integer, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class WlanEntry:
    bssid: str = ""
    ssid: str = ""

    @classmethod
    def from_dict(cls, data: Any, where: str = "wlan") -> "WlanEntry":
        obj = _obj(data, where)
        return cls(bssid=_str(obj, "bssid", where), ssid=_str(obj, "ssid", where))


@dataclass(frozen=True)
class Radio:
    radio_index: int = 0
    wlan: Tuple[WlanEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, where: str = "radio") -> "Radio":
        obj = _obj(data, where)
        return cls(
            radio_index=_index(obj, "radioIndex", where),
            wlan=tuple(
                WlanEntry.from_dict(w, f"{where}.wlan[{i}]")
                for i, w in enumerate(_list(obj, "wlan", where))
            ),
        )


@dataclass(frozen=True)
class AccessPoint:
    serial_number: str = ""
    can_edit: bool = False
    can_delete: bool = False
    proxied: str = ""
    radios: Tuple[Radio, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, where: str = "ap") -> "AccessPoint":
        obj = _obj(data, where)
        return cls(
            serial_number=_str(obj, "serialNumber", where),
            can_edit=_bool(obj, "canEdit", where),
            can_delete=_bool(obj, "canDelete", where),
            proxied=_str(obj, "proxied", where),
            radios=tuple(
                Radio.from_dict(r, f"{where}.radios[{i}]")
                for i, r in enumerate(_list(obj, "radios", where))
            ),
        )


class CsvRow(NamedTuple):
    serial_number: str
    radio_index: int
    bssid: str
    ssid: str


def parse_inventory(data: Any) -> List[AccessPoint]:
    # Top level is a JSON array of access points; null means "no APs".
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"expected array of access points, got {type(data).__name__}")
    return [AccessPoint.from_dict(ap, f"aps[{i}]") for i, ap in enumerate(data)]
