"""Admin Calculator Categories — authenticated create and list.

Invariants:
    - No token or a wrong token → 401
    - Duplicate slug → 400 DUPLICATE_RESOURCE
    - List ordered by sort_order, then name_en
"""


async def test_create_requires_token(client):
    res = await client.post(
        "/api/v1/admin/calculator-categories", json={"slug": "health", "name_en": "Health"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_wrong_scheme_rejected(client):
    res = await client.get(
        "/api/v1/admin/calculator-categories",
        headers={"Authorization": "Basic test-admin-token"},
    )
    assert res.status_code == 401


async def test_create_category(client, admin_headers):
    res = await client.post(
        "/api/v1/admin/calculator-categories",
        headers=admin_headers,
        json={"slug": "health", "name_en": "Health", "name_es": "Salud", "icon": "heart"},
    )
    assert res.status_code == 201
    data = res.json()
    assert data["slug"] == "health"
    assert data["name_es"] == "Salud"
    assert data["color"] == "blue"
    assert data["is_active"] is True


async def test_duplicate_slug_400(client, admin_headers, finance_category):
    res = await client.post(
        "/api/v1/admin/calculator-categories",
        headers=admin_headers,
        json={"slug": "finance", "name_en": "Money"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_RESOURCE"
    assert "A category with this slug already exists" in error["message"]


async def test_invalid_slug_400(client, admin_headers):
    res = await client.post(
        "/api/v1/admin/calculator-categories",
        headers=admin_headers,
        json={"slug": "Not A Slug", "name_en": "X"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_ordered(client, admin_headers):
    for slug, name, order in [("zeta", "Zeta", 1), ("alpha", "Alpha", 1), ("first", "First", 0)]:
        await client.post(
            "/api/v1/admin/calculator-categories",
            headers=admin_headers,
            json={"slug": slug, "name_en": name, "sort_order": order},
        )
    res = await client.get("/api/v1/admin/calculator-categories", headers=admin_headers)
    assert [c["slug"] for c in res.json()] == ["first", "alpha", "zeta"]
