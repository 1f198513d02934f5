"""
Repository for calculation records.

``CalculationRepository`` wraps a single MongoDB collection and
exposes the four operations the API needs: create, list the most
recent records, fetch one by id and delete one by id.  The collection
handle is injected at construction time; the application passes the
collection from its lifespan‑managed client while tests pass an
in‑memory substitute.

Driver failures are reported as ``StorageError`` and lookups that
match nothing (including ids that are not valid ``ObjectId`` strings)
as ``NotFound``.  The repository stores what it is given: computing
the sum is the caller's job, and ``create`` is the only write path.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from calculator_api.app.core.errors import NotFound, StorageError
from calculator_api.app.schemas.calculation import CalculationRead

logger = logging.getLogger(__name__)

# Newest first; ObjectIds grow monotonically so they break createdAt ties.
RECENT_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class CalculationRepository:
    """CRUD access to the calculations collection."""

    def __init__(self, collection: Any, default_limit: int = 10) -> None:
        self._collection = collection
        self._default_limit = default_limit

    async def create(self, number1: float, number2: float, sum: float) -> CalculationRead:
        """Insert a new record and return it as stored.

        The document is read back after the insert so the returned
        timestamps carry the precision the store keeps, and match what
        a later ``get_by_id`` returns.
        """
        now = datetime.now(timezone.utc)
        document = {
            "number1": number1,
            "number2": number2,
            "sum": sum,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = await self._collection.insert_one(document)
            stored = await self._collection.find_one({"_id": result.inserted_id})
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        if stored is None:
            raise StorageError(f"Inserted calculation {result.inserted_id} could not be read back")
        logger.info("Created calculation %s", result.inserted_id)
        return CalculationRead.from_document(stored)

    async def list_recent(self, limit: Optional[int] = None) -> List[CalculationRead]:
        """Return up to ``limit`` records, most recently created first.

        Without a ``limit`` the default given at construction is used.
        """
        if limit is None:
            limit = self._default_limit
        try:
            cursor = self._collection.find({}, sort=RECENT_FIRST, limit=limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        return [CalculationRead.from_document(doc) for doc in documents]

    async def get_by_id(self, calculation_id: str) -> CalculationRead:
        object_id = self._object_id(calculation_id)
        try:
            document = await self._collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        if document is None:
            raise NotFound()
        return CalculationRead.from_document(document)

    async def delete_by_id(self, calculation_id: str) -> CalculationRead:
        """Remove a record and return it as it was before deletion."""
        object_id = self._object_id(calculation_id)
        try:
            document = await self._collection.find_one_and_delete({"_id": object_id})
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        if document is None:
            raise NotFound()
        logger.info("Deleted calculation %s", calculation_id)
        return CalculationRead.from_document(document)

    @staticmethod
    def _object_id(calculation_id: str) -> ObjectId:
        if not ObjectId.is_valid(calculation_id):
            raise NotFound()
        return ObjectId(calculation_id)
