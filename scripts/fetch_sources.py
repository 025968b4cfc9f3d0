"""Download the four source documents from a base URL into a local data directory."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx

from hoopsdraft.config_loader import DataSources


def main() -> None:
    parser = argparse.ArgumentParser(description="Mirror hoopsdraft source documents locally")
    parser.add_argument("base_url", help="Base URL hosting the JSON files, e.g. https://example.com/data")
    parser.add_argument("dest", type=Path, nargs="?", default=Path("data"), help="Destination directory")
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    args = parser.parse_args()

    remote = DataSources.from_directory(args.base_url)
    local = DataSources.from_directory(args.dest)
    args.dest.mkdir(parents=True, exist_ok=True)

    with httpx.Client(timeout=args.timeout) as client:
        for key in ("historical", "adp", "buckets", "registry"):
            url = getattr(remote, key)
            resp = client.get(url)
            if resp.status_code == 404:
                raise SystemExit(f"{key} document not found at {url}")
            resp.raise_for_status()
            try:
                payload = resp.json()
            except json.JSONDecodeError as exc:
                raise SystemExit(f"{key} document at {url} is not valid JSON: {exc}") from exc
            target = Path(getattr(local, key))
            target.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            print(f"Saved {key} document to {target}")


if __name__ == "__main__":
    main()
