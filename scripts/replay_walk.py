#!/usr/bin/env python3
"""
Replay a recorded walk into a running speedmap API.

Reads a CSV in the export format (id, latitude, longitude, speed,
timestamp, label), creates a new session and posts every row as a sample.
With --simulate N it instead asks the server for N simulated steps.

Usage examples:
  - Replay an export:
      python scripts/replay_walk.py --base-url http://localhost:8000 --csv session-3.csv
  - Simulated walk of 5 minutes:
      python scripts/replay_walk.py --base-url http://localhost:8000 --simulate 300
"""

import argparse
import csv
import sys

import requests


def api(base_url: str, method: str, path: str, **kwargs) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, timeout=15, **kwargs)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def read_rows(path: str) -> list[dict]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def replay_csv(base_url: str, session_id: int, rows: list[dict]) -> int:
    for row in rows:
        api(base_url, "POST", f"sessions/{session_id}/samples", json={
            "latitude": float(row["latitude"]),
            "longitude": float(row["longitude"]),
            "speed_mbps": float(row["speed"]),
            "timestamp": row.get("timestamp") or None,
        })
    return len(rows)


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay or simulate a walk against the speedmap API")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--csv", help="CSV export to replay")
    src.add_argument("--simulate", type=int, help="number of simulated steps")
    ap.add_argument("--title", default="Replayed walk")
    args = ap.parse_args()

    source = "imported" if args.csv else "simulated"
    session = api(args.base_url, "POST", "sessions/", json={"title": args.title, "source": source})
    sid = session["id"]

    if args.csv:
        added = replay_csv(args.base_url, sid, read_rows(args.csv))
    else:
        added = api(args.base_url, "POST", f"sessions/{sid}/simulate", params={"steps": args.simulate})["added"]

    stats = api(args.base_url, "GET", f"sessions/{sid}/stats")
    print(f"Session {sid}: {added} samples, avg {stats['average']:.1f} Mbps "
          f"(min {stats['min']:.1f}, max {stats['max']:.1f})")


if __name__ == "__main__":
    try:
        main()
    except RuntimeError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
