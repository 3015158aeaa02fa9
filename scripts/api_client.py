"""Lightweight REST client for the sbcsolve API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_config(args: argparse.Namespace) -> dict:
    config: dict[str, object] = {
        "squad_size": args.squad_size,
        "min_team_rating": args.min_rating,
        "min_chemistry": args.min_chemistry,
    }
    if args.search_limit is not None:
        config["search_limit"] = args.search_limit
    return config


def build_requirements(raw: str) -> list[dict]:
    if not raw:
        return []
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid requirements JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the sbcsolve REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("players", type=Path, help="Player pool file (bulk text, CSV or JSON)")
    parser.add_argument("--requirements", default="", help="JSON list of requirement objects")
    parser.add_argument("--squad-size", type=int, default=11)
    parser.add_argument("--min-rating", type=float, default=0.0)
    parser.add_argument("--min-chemistry", type=int, default=0)
    parser.add_argument("--search-limit", type=int, default=None)
    parser.add_argument("--import-only", action="store_true", help="Only parse the pool and print the summary")
    parser.add_argument("--export-path", type=Path, help="Download the solved squad as CSV")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=120.0) as client:
        files = {"file": (args.players.name, args.players.read_bytes(), "text/plain")}
        resp = client.post("/players/import", files=files)
        resp.raise_for_status()
        imported = resp.json()
        print("Import summary:", json.dumps(imported["summary"], indent=2))

        if args.import_only:
            return

        body = {
            "players": imported["players"],
            "requirements": build_requirements(args.requirements),
            "config": build_config(args),
        }
        if args.export_path:
            resp = client.post("/solve/export.csv", json=body)
            if resp.status_code == 422:
                raise SystemExit(f"no squad: {resp.json()['detail']}")
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.post("/solve", json=body)
        resp.raise_for_status()
        payload = resp.json()
        if payload["kind"] != "success":
            print(f"No squad ({payload['kind']}): {payload['reason']}")
            print(json.dumps(payload["stats"], indent=2))
            return
        print(payload["summary"])


if __name__ == "__main__":
    main()
