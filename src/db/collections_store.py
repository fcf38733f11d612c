from datetime import datetime, timezone
from typing import Any

from loguru import logger as log
from pymongo import UpdateOne
from pymongo.database import Database

from src.db.mongodb import COLLECTIONS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionStore:
    """Writes to the `collections` MongoDB collection, keyed by slug."""

    def __init__(self, database: Database):
        self.collection = database[COLLECTIONS["COLLECTIONS"]]

    def count(self) -> int:
        return self.collection.count_documents({})

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        now = _utcnow()
        document = {
            "designIds": [],
            "isActive": True,
            **data,
            "createdAt": now,
            "updatedAt": now,
        }
        result = self.collection.insert_one(document)
        log.info(f"Created collection {document.get('slug')}")
        return {**document, "_id": str(result.inserted_id)}

    def update_designs(self, slug: str, design_ids: list[str]) -> bool:
        result = self.collection.update_one(
            {"slug": slug},
            {"$set": {"designIds": design_ids, "updatedAt": _utcnow()}},
        )
        return result.matched_count > 0

    def set_active_status(self, slug: str, is_active: bool) -> bool:
        result = self.collection.update_one(
            {"slug": slug},
            {"$set": {"isActive": is_active, "updatedAt": _utcnow()}},
        )
        return result.matched_count > 0

    def update_positions(self, updates: list[dict[str, Any]]) -> int:
        """
        Persist new positions for many collections in one bulk write.

        Returns:
            int: Number of collections matched
        """
        if not updates:
            return 0

        now = _utcnow()
        operations = [
            UpdateOne(
                {"slug": update["slug"]},
                {"$set": {"position": update["position"], "updatedAt": now}},
            )
            for update in updates
        ]
        result = self.collection.bulk_write(operations, ordered=False)
        log.info(
            f"Updated positions for {result.matched_count} of {len(updates)} collections"
        )
        return result.matched_count

    def delete(self, slug: str) -> bool:
        result = self.collection.delete_one({"slug": slug})
        return result.deleted_count > 0
