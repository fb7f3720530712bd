# tests/test_documents.py
import pytest

from careerhub.core.errors import NotFoundError
from careerhub.db.documents import (
    add_document,
    batch,
    exists,
    get_document,
    get_many,
    push_to_array,
    query,
    set_document,
    update_document,
)


async def test_ids_are_exposed_as_id():
    doc_id = await add_document("things", {"name": "a", "id": "ignored"})
    doc = await get_document("things", doc_id)
    assert doc == {"id": doc_id, "name": "a"}
    assert await exists("things", doc_id)
    assert not await exists("things", "nope")


async def test_set_merge_and_replace():
    await set_document("things", "t1", {"a": 1, "b": 2})
    await set_document("things", "t1", {"b": 3}, merge=True)
    assert await get_document("things", "t1") == {"id": "t1", "a": 1, "b": 3}
    await set_document("things", "t1", {"c": 4})
    assert await get_document("things", "t1") == {"id": "t1", "c": 4}


async def test_update_missing_raises():
    with pytest.raises(NotFoundError):
        await update_document("things", "missing", {"a": 1})


async def test_query_order_and_limit():
    for i, name in enumerate(["c", "a", "b"]):
        await set_document("things", f"t{i}", {"name": name, "n": i})
    rows = await query("things", order_by="name")
    assert [r["name"] for r in rows] == ["a", "b", "c"]
    rows = await query("things", {"n": {"$gte": 1}}, order_by="n", descending=True, limit=1)
    assert [r["id"] for r in rows] == ["t2"]
    assert {r["id"] for r in await get_many("things", ["t0", "t2", "zz"])} == {"t0", "t2"}
    assert await get_many("things", []) == []


async def test_batch_applies_in_order():
    wb = batch()
    wb.set("things", "x", {"v": 1})
    wb.update("things", "x", {"w": 2})
    wb.set("things", "y", {"v": 1})
    wb.delete("things", "y")
    assert len(wb) == 4
    assert await wb.commit() == 4
    assert await get_document("things", "x") == {"id": "x", "v": 1, "w": 2}
    assert await get_document("things", "y") is None
    assert len(wb) == 0


async def test_empty_batch_commits_nothing():
    assert await batch().commit() == 0


async def test_push_to_array_appends():
    await set_document("things", "t1", {"items": ["a"]})
    await push_to_array("things", "t1", "items", "b", {"touched": True})
    await push_to_array("things", "t1", "items", "c")
    assert await get_document("things", "t1") == {"id": "t1", "items": ["a", "b", "c"], "touched": True}
    with pytest.raises(NotFoundError):
        await push_to_array("things", "missing", "items", "x")
