"""
Walk one visitor through a running backend: open, issue, enter, visit, exit, close.

A ticket is consumed by its first gate crossing: the entry ticket still
allows space visits afterwards, but leaving needs a second ticket (the
exit pass). With one entry and one exit logged, the zoo can close again.

Usage: python scripts/test/simulate_visit.py --url http://localhost:8080 [--escape-game]
"""

import argparse
import sys
import requests
from datetime import datetime, timedelta, timezone


def call(session, method, url, results, **kwargs):
    resp = session.request(method, url, **kwargs)
    body = resp.json() if resp.content else None
    ok = resp.status_code < 400
    results.append(ok)
    mark = "✅" if ok else "❌"
    print(f"{mark} {method} {url.split('/api/v1')[-1]} -> HTTP {resp.status_code}: {body}")
    return body


def issue_ticket(request, api, ticket_type, space_ids):
    now = datetime.now(timezone.utc)
    return request("POST", f"{api}/tickets", json={
        "ticket_type": ticket_type,
        "spaces": space_ids,
        "valid_from": (now - timedelta(minutes=1)).isoformat(),
        "valid_until": (now + timedelta(days=1)).isoformat(),
        "user_id": "simulator",
    })


def simulate(session, base_url, space_count=3, escape_game=False, **request_options) -> bool:
    """Returns True when every call succeeded."""
    api = f"{base_url.rstrip('/')}/api/v1"
    results = []

    def request(method, url, **kwargs):
        return call(session, method, url, results, **request_options, **kwargs)

    request("GET", f"{api}/zoo/can-open")
    request("POST", f"{api}/zoo/open")

    stamp = datetime.now(timezone.utc).strftime("%H%M%S%f")
    space_ids = []
    for i in range(space_count):
        space = request("POST", f"{api}/spaces", json={"name": f"sim-{stamp}-{i}"})
        space_ids.append(space["id"])

    entry = issue_ticket(request, api, "EscapeGame" if escape_game else "DayPass", space_ids)
    request("POST", f"{api}/tickets/{entry['id']}/enter")
    for space_id in space_ids:
        request("POST", f"{api}/tickets/{entry['id']}/use", json={"space_id": space_id})

    exit_pass = issue_ticket(request, api, "DayPass", [])
    request("POST", f"{api}/tickets/{exit_pass['id']}/exit")

    request("GET", f"{api}/zoo/state")
    request("POST", f"{api}/zoo/close")
    return all(results)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate a zoo visit against the API")
    parser.add_argument("--url", default="http://localhost:8080")
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--spaces", type=int, default=3)
    parser.add_argument("--escape-game", action="store_true")
    args = parser.parse_args()

    session = requests.Session()
    if args.api_key:
        session.headers["X-API-Key"] = args.api_key

    ok = simulate(session, args.url, args.spaces, args.escape_game, timeout=10)
    sys.exit(0 if ok else 1)
