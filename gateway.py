"""
Team record gateway: maps CRUD intents onto single MongoDB operations.

Every operation validates its input before touching the store and performs
exactly one store call. Updates replace a fixed field subset (name,
category, coach, athletes, liberos); optional fields the caller leaves out
are written as null, while `userId` and `dataCadastro` are never touched.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from errors import NotFoundError, StoreError, ValidationError
from schemas import TeamPayload

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Team not found"


def oid(id_str: Any) -> ObjectId:
    if not isinstance(id_str, str) or not ObjectId.is_valid(id_str):
        raise ValidationError("Invalid id format")
    return ObjectId(id_str)


def _present(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


@contextmanager
def _store_call(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        logger.exception("Store failure while trying to %s", action)
        raise StoreError(f"Failed to {action}", error=str(exc)) from exc


class TeamGateway:
    def __init__(self, collection: Collection, owner_scoping: bool = True):
        self.collection = collection
        self.owner_scoping = owner_scoping

    def _require_fields(self, payload: TeamPayload, *, creating: bool) -> None:
        missing = [alias for alias, value in (("nomeEquipe", payload.name), ("categoria", payload.category)) if not _present(value)]
        if creating and self.owner_scoping and not _present(payload.owner_id):
            missing.append("userId")
        if missing:
            raise ValidationError(f"Incomplete data: {', '.join(missing)} required")

    @staticmethod
    def _roster_fields(payload: TeamPayload) -> Dict[str, Any]:
        return {
            "nomeEquipe": payload.name,
            "categoria": payload.category,
            "tecnico": payload.coach,
            "atletas": payload.athletes,
            "liberos": payload.liberos,
        }

    def create(self, payload: TeamPayload) -> str:
        self._require_fields(payload, creating=True)

        doc: Dict[str, Any] = {}
        if self.owner_scoping:
            doc["userId"] = payload.owner_id
        doc.update(self._roster_fields(payload))
        doc["dataCadastro"] = datetime.now(timezone.utc)

        with _store_call("create team"):
            result = self.collection.insert_one(doc)
        logger.info("Created team id=%s", result.inserted_id)
        return str(result.inserted_id)

    def list_all(self) -> List[Dict[str, Any]]:
        with _store_call("list teams"):
            docs = list(self.collection.find({}))
        return [_serialize(d) for d in docs]

    def list_by_owner(self, owner_id: Optional[str]) -> List[Dict[str, Any]]:
        if not _present(owner_id):
            raise ValidationError("userId is required")
        with _store_call("list teams"):
            docs = list(self.collection.find({"userId": owner_id}))
        return [_serialize(d) for d in docs]

    def get(self, team_id: str) -> Dict[str, Any]:
        key = oid(team_id)
        with _store_call("fetch team"):
            doc = self.collection.find_one({"_id": key})
        if doc is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return _serialize(doc)

    def update(self, team_id: str, payload: TeamPayload) -> None:
        key = oid(team_id)
        self._require_fields(payload, creating=False)

        with _store_call("update team"):
            result = self.collection.update_one({"_id": key}, {"$set": self._roster_fields(payload)})
        if result.matched_count == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)

    def delete(self, team_id: str) -> None:
        key = oid(team_id)
        with _store_call("delete team"):
            result = self.collection.delete_one({"_id": key})
        if result.deleted_count == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)
