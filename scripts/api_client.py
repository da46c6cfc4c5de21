"""Lightweight REST client for the pydynasty API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_players(path: Path) -> list[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid roster JSON: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("players", [])
    if not isinstance(payload, list):
        raise SystemExit("roster JSON must be a list of players or an object with 'players'")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pydynasty REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster JSON of scored players")
    parser.add_argument("--history", type=Path, help="Injury history JSON to score instead of a roster")
    parser.add_argument("--age", type=int, default=None, help="Player age for --history")
    parser.add_argument("--health", action="store_true", help="Check the API health endpoint and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.history:
            history = json.loads(args.history.read_text(encoding="utf-8"))
            resp = client.post("/durability", json={"history": history, "age": args.age})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster is None:
            raise SystemExit("roster file is required unless using --health/--history")

        resp = client.post("/diagnose", json={"players": load_players(args.roster)})
        if resp.status_code == 400:
            raise SystemExit(f"diagnose rejected: {resp.json().get('detail')}")
        resp.raise_for_status()
        diagnosis = resp.json()
        print(f"{diagnosis['classification']} ({diagnosis['confidence']}% confidence)")
        print(diagnosis["summary"])
        print(diagnosis["outlook"])


if __name__ == "__main__":
    main()
