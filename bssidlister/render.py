from typing import Iterable, Iterator, TextIO

from .models import AccessPoint, CsvRow

HEADER = ("serial", "radio", "bssid", "ssid")


def iter_rows(aps: Iterable[AccessPoint]) -> Iterator[CsvRow]:
    # One row per wlan entry, depth first, in the order the controller sent them.
    for ap in aps:
        for radio in ap.radios:
            for wlan in radio.wlan:
                yield CsvRow(ap.serial_number, radio.radio_index, wlan.bssid, wlan.ssid)


def _quote(fields) -> str:
    # Embedded quotes/commas are written as-is, same as the Go tool did.
    return ",".join(f'"{f}"' for f in fields)


def format_header() -> str:
    return _quote(HEADER)


def format_row(row: CsvRow) -> str:
    return _quote((row.serial_number, f"{row.radio_index:d}", row.bssid, row.ssid))


def render(aps: Iterable[AccessPoint], out: TextIO) -> int:
    """Write the header and one line per wlan entry to ``out``; return the data row count."""
    out.write(format_header() + "\n")
    count = 0
    for row in iter_rows(aps):
        out.write(format_row(row) + "\n")
        count += 1
    return count
