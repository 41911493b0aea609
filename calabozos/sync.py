"""
Fetch-and-persist routine reconciling the upstream class list with local rows.
"""

from __future__ import annotations

import logging

from calabozos.db import ClassRepository
from shared.types import ClassRecord, class_record_from_dict
from upstream.dnd_api import InvalidUpstreamResponse, UpstreamClient

logger = logging.getLogger(__name__)


class ClassSyncService:
    """Pulls every class from upstream and stores the ones not yet known."""

    def __init__(self, client: UpstreamClient, repository: ClassRepository):
        self.client = client
        self.repository = repository

    def sync_all(self) -> list[ClassRecord]:
        """
        Fetches the full upstream class list and creates missing local records.

        Items that are not objects are skipped. Items that fail to map or
        persist are logged and skipped; they never abort the batch.

        Returns:
            list[ClassRecord]: The processed records, in upstream order.

        Raises:
            InvalidUpstreamResponse: If the payload has no "results" list.
            UpstreamConnectionError: If the collection fetch fails.
        """
        payload = self.client.get_classes()
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise InvalidUpstreamResponse(
                "Invalid API response: missing or invalid results array"
            )

        records: list[ClassRecord] = []
        for item in results:
            if not isinstance(item, dict):
                continue
            try:
                record = class_record_from_dict(item)
                records.append(self.repository.find_or_create(record))
            except Exception as e:
                logger.warning(
                    "Failed to process class data %r: %s", item, e
                )

        logger.info(
            "Synced %d of %d upstream classes", len(records), len(results)
        )
        return records
