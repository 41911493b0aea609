"""
CLI helper to sync the upstream D&D class list into the local store.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from calabozos.config import get_settings
from calabozos.dependencies import get_repository, get_upstream_client
from calabozos.sync import ClassSyncService
from upstream.dnd_api import InvalidUpstreamResponse, UpstreamConnectionError


def main() -> int:
    parser = argparse.ArgumentParser(description="Calabozos class sync")
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Only print the locally stored classes, do not contact upstream",
    )
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().log_level.upper())
    repository = get_repository()

    if args.list:
        records = repository.all()
    else:
        service = ClassSyncService(get_upstream_client(), repository)
        try:
            records = service.sync_all()
        except (UpstreamConnectionError, InvalidUpstreamResponse) as e:
            print(f"Sync failed: {e}", file=sys.stderr)
            return 1

    for record in records:
        print(f"{record.index}\t{record.name}\t{record.url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
