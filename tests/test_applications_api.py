# tests/test_applications_api.py
import asyncio
from datetime import timedelta

import pytest

from careerhub.db.documents import get_document, set_document, utcnow
from careerhub.services.applications import add_note, application_id


@pytest.fixture
async def candidate(make_user, complete_profile):
    uid, headers = await make_user("kandidat", full_name="Budi Santoso")
    await complete_profile(uid)
    return uid, headers


async def test_apply_creates_application(client, candidate, make_job):
    uid, headers = candidate
    job = await make_job()
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body == {"id": application_id(job["id"], uid), "status": "submitted"}

    stored = await get_document("applications", body["id"])
    assert stored["candidate_name"] == "Budi Santoso"
    assert stored["brand_name"] == "Kopi Nusantara"
    assert stored["job_position"] == "Staf Administrasi"


async def test_apply_twice_conflicts(client, candidate, make_job):
    _, headers = candidate
    job = await make_job()
    await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 409
    assert "already applied" in r.json()["error"]


async def test_one_active_application_at_a_time(client, candidate, make_job):
    _, headers = candidate
    first = await make_job("Kasir")
    second = await make_job("Barista")
    await client.post(f"/api/v1/jobs/{first['slug']}/apply", headers=headers)
    r = await client.post(f"/api/v1/jobs/{second['slug']}/apply", headers=headers)
    assert r.status_code == 409
    assert "Kasir" in r.json()["error"]


async def test_incomplete_profile_rejected(client, make_user, make_job):
    _, headers = await make_user("kandidat")
    job = await make_job()
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 400
    assert "complete your profile" in r.json()["error"]


async def test_deadline_passed(client, candidate, make_job):
    _, headers = candidate
    job = await make_job(apply_deadline=utcnow() - timedelta(days=1))
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 400
    assert "deadline" in r.json()["error"]


async def test_unpublished_job_is_not_found(client, candidate, make_job):
    _, headers = candidate
    job = await make_job(publish_status="draft")
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 404


async def test_cooldown_after_rejection(client, candidate, make_job):
    uid, headers = candidate
    old_job = await make_job("Kasir")
    await set_document("applications", application_id(old_job["id"], uid), {
        "candidate_uid": uid,
        "job_id": old_job["id"],
        "job_position": "Kasir",
        "status": "rejected",
        "decision_at": utcnow() - timedelta(days=30),
    })
    job = await make_job("Barista")
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 409
    assert "cooldown_until" in r.json()


async def test_cooldown_expired(client, candidate, make_job):
    uid, headers = candidate
    old_job = await make_job("Kasir")
    await set_document("applications", application_id(old_job["id"], uid), {
        "candidate_uid": uid,
        "job_id": old_job["id"],
        "status": "hired",
        "decision_at": utcnow() - timedelta(days=200),
    })
    job = await make_job("Barista")
    r = await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)
    assert r.status_code == 201


async def test_status_change_records_timestamps(client, candidate, make_user, make_job):
    _, headers = candidate
    _, hrd = await make_user("hrd")
    job = await make_job()
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]

    r = await client.patch(f"/api/v1/applications/{app_id}/status", json={"status": "tes_kepribadian"}, headers=hrd)
    assert r.status_code == 200
    stored = await get_document("applications", app_id)
    assert stored["personality_test_assigned_at"] is not None

    r = await client.patch(
        f"/api/v1/applications/{app_id}/status", json={"status": "rejected", "reason": "Kualifikasi"}, headers=hrd,
    )
    assert r.json()["status"] == "rejected"
    stored = await get_document("applications", app_id)
    assert stored["decision_reason"] == "Kualifikasi"
    assert stored["decision_at"] is not None


async def test_unknown_status_is_400(client, candidate, make_user, make_job):
    _, headers = candidate
    _, hrd = await make_user("hrd")
    job = await make_job()
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]
    r = await client.patch(f"/api/v1/applications/{app_id}/status", json={"status": "approved"}, headers=hrd)
    assert r.status_code == 400


async def test_interview_and_notes(client, candidate, make_user, make_job):
    _, headers = candidate
    _, hrd = await make_user("hrd")
    job = await make_job()
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]

    r = await client.put(f"/api/v1/applications/{app_id}/interview", json={
        "date_time": "2026-11-02T09:00:00Z", "mode": "online",
    }, headers=hrd)
    assert r.status_code == 400

    r = await client.put(f"/api/v1/applications/{app_id}/interview", json={
        "date_time": "2026-11-02T09:00:00Z", "mode": "online", "link": "https://meet.example.com/abc",
    }, headers=hrd)
    assert r.status_code == 200
    assert r.json()["status"] == "interview"

    r = await client.post(f"/api/v1/applications/{app_id}/notes", json={"text": "Komunikatif"}, headers=hrd)
    assert r.status_code == 201
    stored = await get_document("applications", app_id)
    assert [n["text"] for n in stored["notes"]] == ["Komunikatif"]


async def test_visibility_rules(client, candidate, make_user, make_job):
    _, headers = candidate
    _, other = await make_user("kandidat")
    _, manager = await make_user("manager")
    job = await make_job()
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]

    assert (await client.get(f"/api/v1/applications/{app_id}", headers=headers)).status_code == 200
    assert (await client.get(f"/api/v1/applications/{app_id}", headers=manager)).status_code == 200
    assert (await client.get(f"/api/v1/applications/{app_id}", headers=other)).status_code == 403

    mine = (await client.get("/api/v1/applications/mine", headers=headers)).json()
    assert mine["count"] == 1
    assert (await client.get("/api/v1/applications/mine", headers=other)).json()["count"] == 0


async def test_auth_guards(client, candidate):
    _, headers = candidate
    assert (await client.get("/api/v1/applications")).status_code == 401
    r = await client.get("/api/v1/applications", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401
    assert (await client.get("/api/v1/applications", headers=headers)).status_code == 403


async def test_hrd_list_is_scoped_to_managed_brands(client, make_user, make_job, complete_profile):
    job_a = await make_job("Kasir")
    job_b = await make_job("Barista")
    for job in (job_a, job_b):
        uid, headers = await make_user("kandidat")
        await complete_profile(uid)
        await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)

    _, hrd = await make_user("hrd", managed_brand_ids=[job_a["brand_id"]])
    _, admin = await make_user("super-admin")
    scoped = (await client.get("/api/v1/applications", headers=hrd)).json()
    assert [a["job_id"] for a in scoped["items"]] == [job_a["id"]]
    assert (await client.get("/api/v1/applications", headers=admin)).json()["count"] == 2

    kpis = (await client.get("/api/v1/applications/kpis", headers=admin)).json()
    assert kpis["total"] == 2
    assert kpis["by_status"]["submitted"] == 2
    assert kpis["active"] == 2


async def test_cv_upload_clears_cached_text(client, candidate, make_job, monkeypatch, tmp_path):
    from careerhub.core.config import settings

    uid, headers = candidate
    monkeypatch.setattr(settings, "S3_BUCKET", None)
    monkeypatch.setattr("careerhub.services.storage.LOCAL_UPLOAD_DIR", tmp_path)
    job = await make_job()
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]
    await set_document("applications", app_id, {"cv_text": "old", "cv_char_count": 3}, merge=True)

    r = await client.post(
        f"/api/v1/applications/{app_id}/documents/cv",
        files={"file": ("cv.pdf", b"%PDF-1.4 test", "application/pdf")},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    stored = await get_document("applications", app_id)
    assert stored["cv_file_name"] == "cv.pdf"
    assert stored["cv_text"] is None


async def test_hrd_cannot_touch_other_brands_applications(client, candidate, make_user, make_job):
    _, headers = candidate
    job = await make_job()
    other = await make_job("Barista")
    app_id = (await client.post(f"/api/v1/jobs/{job['slug']}/apply", headers=headers)).json()["id"]

    _, outsider = await make_user("hrd", managed_brand_ids=[other["brand_id"]])
    assert (await client.get("/api/v1/applications", headers=outsider)).json()["count"] == 0
    assert (await client.get(f"/api/v1/applications/{app_id}", headers=outsider)).status_code == 403
    r = await client.patch(f"/api/v1/applications/{app_id}/status", json={"status": "rejected"}, headers=outsider)
    assert r.status_code == 403
    r = await client.put(f"/api/v1/applications/{app_id}/interview", json={
        "date_time": "2026-11-02T09:00:00Z", "mode": "offline", "location": "Kantor Pusat",
    }, headers=outsider)
    assert r.status_code == 403
    r = await client.post(f"/api/v1/applications/{app_id}/notes", json={"text": "x"}, headers=outsider)
    assert r.status_code == 403
    assert (await client.post(f"/api/v1/applications/{app_id}/analysis", headers=outsider)).status_code == 403

    stored = await get_document("applications", app_id)
    assert stored["status"] == "submitted"
    assert stored["notes"] == []

    _, insider = await make_user("hrd", managed_brand_ids=[job["brand_id"]])
    assert (await client.get(f"/api/v1/applications/{app_id}", headers=insider)).status_code == 200
    r = await client.patch(f"/api/v1/applications/{app_id}/status", json={"status": "screening"}, headers=insider)
    assert r.status_code == 200


async def test_concurrent_notes_are_all_kept(candidate, make_job):
    uid, _ = candidate
    job = await make_job()
    app_id = application_id(job["id"], uid)
    await set_document("applications", app_id, {"candidate_uid": uid, "job_id": job["id"], "status": "screening", "notes": []})

    author = {"uid": "hrd1", "full_name": "HRD"}
    await asyncio.gather(*(add_note(app_id, f"catatan {i}", author) for i in range(5)))
    stored = await get_document("applications", app_id)
    assert sorted(n["text"] for n in stored["notes"]) == [f"catatan {i}" for i in range(5)]
