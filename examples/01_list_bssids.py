#!/usr/bin/env python
# List APs and their (B)SSIDs from XCA and (optionally) write CSV.
import argparse, os, sys
from bssidlister.config import load_settings
from bssidlister.errors import BssidListerError
from bssidlister.xca_client import XCAClient
from bssidlister.aps_api import fetch_inventory
from bssidlister.render import iter_rows, render

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", default=None, help="Path to write BSSID CSV (optional)")
    parser.add_argument("--limit", type=int, default=10, help="Print preview count (default: 10)")
    args, rest = parser.parse_known_args()

    try:
        s = load_settings(rest)
        s.validate()
        client = XCAClient(
            s.host, port=s.port, username=s.userid, password=s.secret,
            verify=s.verify_ssl, timeout=s.timeout,
        )
        client.authenticate()
        aps = fetch_inventory(client)
    except BssidListerError as e:
        print(f"[!] {e}", file=sys.stderr)
        return e.exit_code

    print(f"Access points: {len(aps)}")
    rows = list(iter_rows(aps))
    for r in rows[: args.limit]:
        print(r.serial_number, r.radio_index, r.bssid, r.ssid)
    print(f"Rows: {len(rows)}")

    if args.out:
        os.makedirs(os.path.dirname(os.path.abspath(args.out)), exist_ok=True)
        with open(args.out, "w", newline="", encoding="utf-8") as f:
            render(aps, f)
        print(f"[+] Wrote CSV: {args.out}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
