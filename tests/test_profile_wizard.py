# tests/test_profile_wizard.py
from careerhub.db.documents import get_document

PERSONAL = {
    "full_name": "Siti Rahma",
    "nickname": "Siti",
    "email": "siti@mail.com",
    "phone": "081298765432",
    "e_ktp_number": "3273012345678901",
    "gender": "Perempuan",
    "birth_place": "Bandung",
    "birth_date": "1998-02-20",
    "address_ktp": {"street": "Jl. Asia Afrika 10", "city": "Bandung", "province": "Jawa Barat"},
}
EDUCATION = {"education": [{"institution": "ITB", "level": "S1", "start_date": "2016-08", "end_date": "2020-07"}]}


async def test_wizard_round_trip(client, make_user):
    uid, headers = await make_user("kandidat")

    r = await client.put("/api/v1/profile/steps/personal", json=PERSONAL, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["profile_step"] == 2
    assert r.json()["is_complete"] is False

    r = await client.put("/api/v1/profile/steps/education", json=EDUCATION, headers=headers)
    assert r.json()["profile_step"] == 3

    r = await client.get("/api/v1/profile", headers=headers)
    profile = r.json()
    assert profile["birth_date"] == "1998-02-20"
    assert profile["address_ktp"]["city"] == "Bandung"
    assert profile["missing_fields"] == ["declaration"]


async def test_completion_is_mirrored_on_user(client, make_user):
    uid, headers = await make_user("kandidat")
    await client.put("/api/v1/profile/steps/personal", json=PERSONAL, headers=headers)
    await client.put("/api/v1/profile/steps/education", json=EDUCATION, headers=headers)
    r = await client.put("/api/v1/profile/steps/self-description", json={
        "self_description": "Teliti dan rapi.", "declaration": True,
    }, headers=headers)
    assert r.json()["is_complete"] is True

    user = await get_document("users", uid)
    assert user["is_profile_complete"] is True
    profile = await get_document("profiles", uid)
    assert profile["profile_status"] == "completed"
    assert profile["completed_at"] is not None

    # withdrawing the declaration reopens the profile
    await client.put("/api/v1/profile/steps/self-description", json={"declaration": False}, headers=headers)
    assert (await get_document("users", uid))["is_profile_complete"] is False


async def test_invalid_ektp_rejected(client, make_user):
    _, headers = await make_user("kandidat")
    r = await client.put(
        "/api/v1/profile/steps/personal", json={**PERSONAL, "e_ktp_number": "12345"}, headers=headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid request body. Ensure all fields are correct."
    assert any("e_ktp_number" in d["loc"] for d in body["details"])


async def test_unknown_step_rejected(client, make_user):
    _, headers = await make_user("kandidat")
    r = await client.put("/api/v1/profile/steps/hobbies", json={}, headers=headers)
    assert r.status_code == 400


async def test_profile_missing_is_404(client, make_user):
    _, headers = await make_user("kandidat")
    assert (await client.get("/api/v1/profile", headers=headers)).status_code == 404


async def test_internal_roles_read_candidate_profiles(client, make_user):
    uid, headers = await make_user("kandidat")
    await client.put("/api/v1/profile/steps/personal", json=PERSONAL, headers=headers)
    _, hrd = await make_user("hrd")
    r = await client.get(f"/api/v1/profiles/{uid}", headers=hrd)
    assert r.json()["full_name"] == "Siti Rahma"
    assert (await client.get(f"/api/v1/profiles/{uid}", headers=headers)).status_code == 403
