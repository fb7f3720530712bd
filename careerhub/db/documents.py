"""
Collection-based document access on top of Motor.

Documents keep string ids in ``_id``; everything returned to callers carries the
id as ``"id"`` instead. Multi-document writes go through ``WriteBatch`` which
commits in one transaction when the deployment supports it
(``MONGODB_USE_TRANSACTIONS``) and otherwise applies its operations in order.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple
from datetime import datetime, timezone
import logging
import uuid

from careerhub.core.config import settings
from careerhub.core.errors import NotFoundError
from careerhub.db.mongo import get_db, get_mongo_client

logger = logging.getLogger(__name__)

def utcnow() -> datetime:
    # Mongo hands datetimes back naive (UTC); keep ours naive too so they compare
    return datetime.now(timezone.utc).replace(tzinfo=None)

def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def new_id() -> str:
    return uuid.uuid4().hex

def _to_id(doc):
    if not doc:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc["_id"])
        del doc["_id"]
    return doc

def _strip_id(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in ("id", "_id")}

async def get_document(collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    doc = await db[collection].find_one({"_id": doc_id})
    return _to_id(doc)

async def exists(collection: str, doc_id: str) -> bool:
    db = get_db()
    return await db[collection].find_one({"_id": doc_id}, {"_id": 1}) is not None

async def set_document(collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
    db = get_db()
    payload = _strip_id(data)
    if merge:
        await db[collection].update_one({"_id": doc_id}, {"$set": payload}, upsert=True)
    else:
        await db[collection].replace_one({"_id": doc_id}, payload, upsert=True)

async def update_document(collection: str, doc_id: str, data: Dict[str, Any]) -> None:
    db = get_db()
    res = await db[collection].update_one({"_id": doc_id}, {"$set": _strip_id(data)})
    if res.matched_count == 0:
        raise NotFoundError(f"Document {collection}/{doc_id} not found.")

async def push_to_array(
    collection: str, doc_id: str, field: str, value: Any, set_fields: Optional[Dict[str, Any]] = None
) -> None:
    """Append value to an array field in one atomic update."""
    db = get_db()
    update: Dict[str, Any] = {"$push": {field: value}}
    if set_fields:
        update["$set"] = _strip_id(set_fields)
    res = await db[collection].update_one({"_id": doc_id}, update)
    if res.matched_count == 0:
        raise NotFoundError(f"Document {collection}/{doc_id} not found.")

async def add_document(collection: str, data: Dict[str, Any]) -> str:
    db = get_db()
    doc_id = new_id()
    payload = _strip_id(data)
    payload["_id"] = doc_id
    await db[collection].insert_one(payload)
    return doc_id

async def delete_document(collection: str, doc_id: str) -> bool:
    db = get_db()
    res = await db[collection].delete_one({"_id": doc_id})
    return res.deleted_count > 0

async def query(
    collection: str,
    filters: Optional[Dict[str, Any]] = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: int = 0,
    skip: int = 0,
) -> List[Dict[str, Any]]:
    """
    Equality / range filters are plain Mongo filter documents, e.g.
    ``{"status": "submitted", "created_at": {"$gte": since}}``.
    """
    db = get_db()
    cur = db[collection].find(filters or {})
    if order_by:
        cur = cur.sort(order_by, -1 if descending else 1)
    if skip:
        cur = cur.skip(skip)
    if limit:
        cur = cur.limit(limit)
    out = []
    async for d in cur:
        out.append(_to_id(d))
    return out

async def get_many(collection: str, ids: Iterable[str]) -> List[Dict[str, Any]]:
    ids = list(ids)
    if not ids:
        return []
    return await query(collection, {"_id": {"$in": ids}})

async def count(collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
    db = get_db()
    return await db[collection].count_documents(filters or {})


class WriteBatch:
    """Collects set/update/delete operations and applies them on commit()."""

    def __init__(self):
        self._ops: List[Tuple[str, str, str, Optional[Dict[str, Any]], bool]] = []

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> "WriteBatch":
        self._ops.append(("set", collection, doc_id, _strip_id(data), merge))
        return self

    def update(self, collection: str, doc_id: str, data: Dict[str, Any]) -> "WriteBatch":
        self._ops.append(("update", collection, doc_id, _strip_id(data), False))
        return self

    def delete(self, collection: str, doc_id: str) -> "WriteBatch":
        self._ops.append(("delete", collection, doc_id, None, False))
        return self

    def __len__(self) -> int:
        return len(self._ops)

    async def _apply(self, session=None) -> None:
        db = get_db()
        kw = {"session": session} if session is not None else {}
        for op, collection, doc_id, data, merge in self._ops:
            coll = db[collection]
            if op == "set" and merge:
                await coll.update_one({"_id": doc_id}, {"$set": data}, upsert=True, **kw)
            elif op == "set":
                await coll.replace_one({"_id": doc_id}, data, upsert=True, **kw)
            elif op == "update":
                await coll.update_one({"_id": doc_id}, {"$set": data}, **kw)
            else:
                await coll.delete_one({"_id": doc_id}, **kw)

    async def commit(self) -> int:
        """Apply all queued operations. Returns the number of operations written."""
        if not self._ops:
            return 0
        if settings.MONGODB_USE_TRANSACTIONS:
            client = get_mongo_client()
            async with await client.start_session() as s:
                async with s.start_transaction():
                    await self._apply(session=s)
        else:
            await self._apply()
        written = len(self._ops)
        logger.debug("Committed batch of %d operations", written)
        self._ops = []
        return written

def batch() -> WriteBatch:
    return WriteBatch()
