# tests/test_jobs_api.py
from careerhub.services.jobs import slugify


def test_slugify():
    assert slugify("Staf Administrasi (Kontrak)") == "staf-administrasi-kontrak"
    assert slugify("Café Barista") == "cafe-barista"
    assert slugify("!!!") == "job"


async def _brand(client, headers, name="Kopi Nusantara"):
    r = await client.post("/api/v1/brands", json={"name": name}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["id"]


async def test_job_lifecycle(client, make_user):
    _, admin = await make_user("super-admin")
    brand_id = await _brand(client, admin)
    payload = {
        "position": "Staf Administrasi",
        "division": "Operasional",
        "location": "Jakarta",
        "brand_id": brand_id,
        "special_requirements_html": "<ul><li>Excel</li></ul>",
    }
    r = await client.post("/api/v1/admin/jobs", json=payload, headers=admin)
    assert r.status_code == 201, r.text
    job = r.json()
    assert job["slug"] == "staf-administrasi"
    assert job["brand_name"] == "Kopi Nusantara"

    # drafts are hidden from the public listing
    assert (await client.get("/api/v1/jobs")).json()["count"] == 0
    assert (await client.get("/api/v1/jobs/staf-administrasi")).status_code == 404

    r = await client.patch(f"/api/v1/admin/jobs/{job['id']}", json={"publish_status": "published"}, headers=admin)
    assert r.json()["publish_status"] == "published"
    public = (await client.get("/api/v1/jobs")).json()
    assert [j["slug"] for j in public["items"]] == ["staf-administrasi"]

    r = await client.delete(f"/api/v1/admin/jobs/{job['id']}", headers=admin)
    assert r.json() == {"deleted": True}
    assert (await client.delete(f"/api/v1/admin/jobs/{job['id']}", headers=admin)).status_code == 404


async def test_duplicate_positions_get_unique_slugs(client, make_user):
    _, admin = await make_user("super-admin")
    brand_id = await _brand(client, admin)
    payload = {"position": "Kasir", "division": "Toko", "location": "Bogor", "brand_id": brand_id}
    first = (await client.post("/api/v1/admin/jobs", json=payload, headers=admin)).json()
    second = (await client.post("/api/v1/admin/jobs", json=payload, headers=admin)).json()
    assert first["slug"] == "kasir"
    assert second["slug"] == "kasir-2"


async def test_job_with_unknown_brand_rejected(client, make_user):
    _, admin = await make_user("super-admin")
    payload = {"position": "Kasir", "division": "Toko", "location": "Bogor", "brand_id": "missing"}
    r = await client.post("/api/v1/admin/jobs", json=payload, headers=admin)
    assert r.status_code == 400


async def test_brand_with_jobs_cannot_be_deleted(client, make_user, make_job):
    _, admin = await make_user("super-admin")
    job = await make_job()
    r = await client.delete(f"/api/v1/brands/{job['brand_id']}", headers=admin)
    assert r.status_code == 409
    empty = await _brand(client, admin, "Roti Enak")
    assert (await client.delete(f"/api/v1/brands/{empty}", headers=admin)).status_code == 200


async def test_admin_job_routes_need_recruiter(client, make_user):
    _, manager = await make_user("manager")
    assert (await client.get("/api/v1/admin/jobs", headers=manager)).status_code == 403
    _, hrd = await make_user("hrd")
    assert (await client.get("/api/v1/admin/jobs", headers=hrd)).status_code == 200


async def test_navigation_settings(client, make_user):
    _, admin = await make_user("super-admin")
    _, hrd = await make_user("hrd")
    r = await client.put("/api/v1/navigation/hrd", json={"visible_menu_items": ["Dashboard", "Rekrutmen"]}, headers=admin)
    assert r.status_code == 200
    r = await client.get("/api/v1/navigation/hrd", headers=hrd)
    assert r.json()["visible_menu_items"] == ["Dashboard", "Rekrutmen"]
    assert (await client.put("/api/v1/navigation/hrd", json={"visible_menu_items": []}, headers=hrd)).status_code == 403
    assert (await client.put("/api/v1/navigation/nobody", json={"visible_menu_items": []}, headers=admin)).status_code == 400


async def test_hrd_job_admin_is_scoped_to_managed_brands(client, make_user, make_job):
    job = await make_job()
    other = await make_job("Barista")
    _, hrd = await make_user("hrd", managed_brand_ids=[other["brand_id"]])

    assert (await client.get(f"/api/v1/admin/jobs/{job['id']}", headers=hrd)).status_code == 403
    r = await client.patch(f"/api/v1/admin/jobs/{job['id']}", json={"location": "Depok"}, headers=hrd)
    assert r.status_code == 403
    assert (await client.delete(f"/api/v1/admin/jobs/{job['id']}", headers=hrd)).status_code == 403
    payload = {"position": "Kasir", "division": "Toko", "location": "Bogor", "brand_id": job["brand_id"]}
    assert (await client.post("/api/v1/admin/jobs", json=payload, headers=hrd)).status_code == 403

    assert (await client.get(f"/api/v1/admin/jobs/{other['id']}", headers=hrd)).status_code == 200
