"""End-to-end tests through the HTTP API."""

from tests.conftest import cat_fields


def test_health(client):
    assert client.get("/").json() == {"message": "Cattery API is running!"}


def test_admin_routes_require_token(client):
    assert client.get("/cats").status_code == 401
    assert client.post("/cats", json=cat_fields()).status_code == 401
    assert client.get("/analytics/summary").status_code == 401

    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/cats", headers=bad).status_code == 401


def test_login_rejects_wrong_password(client):
    response = client.post("/auth/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401


def test_me_returns_admin_context(client, admin_headers):
    assert client.get("/auth/me", headers=admin_headers).json() == {
        "username": "admin",
        "role": "admin",
    }


def test_cat_lifecycle(client, admin_headers):
    created = client.post(
        "/cats",
        json=cat_fields(name="Luna", internal_notes="Vet on Friday"),
        headers=admin_headers,
    )
    assert created.status_code == 200
    luna = created.json()
    assert luna["is_displayed"] is True
    assert luna["internal_notes"] == "Vet on Friday"

    public = client.get(f"/cats/{luna['id']}").json()
    assert public["name"] == "Luna"
    assert "internal_notes" not in public

    patched = client.patch(
        f"/cats/{luna['id']}",
        json={"status": "Retired"},
        headers=admin_headers,
    ).json()
    assert patched["status"] == "Retired"
    assert patched["name"] == "Luna"

    hidden = client.post(f"/cats/{luna['id']}/toggle-display", headers=admin_headers).json()
    assert hidden["is_displayed"] is False
    assert client.get("/cats/displayed").json() == []

    deleted = client.delete(f"/cats/{luna['id']}", headers=admin_headers)
    assert deleted.json() == {"success": True}
    assert client.get(f"/cats/{luna['id']}").json() is None


def test_invalid_enum_is_rejected(client, admin_headers):
    response = client.post("/cats", json=cat_fields(gender="unknown"), headers=admin_headers)
    assert response.status_code == 422


def test_toggle_unknown_cat_is_404(client, admin_headers):
    response = client.post("/cats/missing/toggle-display", headers=admin_headers)
    assert response.status_code == 404


def test_search_limit(client, admin_headers):
    for i in range(7):
        client.post("/cats", json=cat_fields(name=f"Cat {i}"), headers=admin_headers)

    found = client.get("/cats/search", params={"limit": 5}, headers=admin_headers).json()
    assert len(found) == 5


def test_pedigree_flow(client, admin_headers):
    luna = client.post("/cats", json=cat_fields(name="Luna"), headers=admin_headers).json()
    rex = client.post(
        "/cats",
        json=cat_fields(name="Rex", gender="male"),
        headers=admin_headers,
    ).json()

    edge = client.post(
        "/pedigree/connections",
        json={"parent_id": rex["id"], "child_id": luna["id"], "type": "father"},
        headers=admin_headers,
    )
    assert edge.status_code == 200

    tree = client.get(f"/pedigree/ancestors/{luna['id']}", params={"depth": 1}).json()
    assert tree["cat"]["name"] == "Luna"
    assert tree["father"]["cat"]["name"] == "Rex"
    assert tree["mother"] is None

    saved = client.post(
        "/pedigree/trees",
        json={"root_cat_id": luna["id"], "name": "Luna", "depth": 1},
        headers=admin_headers,
    ).json()
    by_root = client.get(f"/pedigree/trees/root/{luna['id']}").json()
    assert by_root["id"] == saved["id"]
    assert by_root["tree"] == tree

    client.delete(f"/cats/{rex['id']}", headers=admin_headers)

    assert client.get(f"/pedigree/connections/child/{luna['id']}").json() == []
    assert client.get(f"/cats/{luna['id']}").json()["name"] == "Luna"


def test_bad_connection_type_is_rejected(client, admin_headers):
    a = client.post("/cats", json=cat_fields(name="A"), headers=admin_headers).json()
    b = client.post("/cats", json=cat_fields(name="B"), headers=admin_headers).json()

    response = client.post(
        "/pedigree/connections",
        json={"parent_id": a["id"], "child_id": b["id"], "type": "aunt"},
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_analytics_flow(client, admin_headers):
    for session_id in ["s1", "s1", "s2"]:
        response = client.post(
            "/analytics/visit",
            json={"path": "/", "session_id": session_id, "device_type": "desktop"},
        )
        assert response.status_code == 200
        assert "id" in response.json()

    summary = client.get("/analytics/summary", headers=admin_headers).json()
    assert summary["today"] == {"real": 2, "synthetic": 0, "total": 2}

    first = client.post("/analytics/synthetic", json={}, headers=admin_headers).json()
    second = client.post("/analytics/synthetic", json={}, headers=admin_headers).json()

    assert first["success"] is True
    assert 20 <= first["count"] <= 30
    assert second["success"] is False
    assert second["existing"]["count"] == first["count"]

    rows = client.get("/analytics/synthetic", headers=admin_headers).json()
    assert len(rows) == 1

    devices = client.get("/analytics/devices", headers=admin_headers).json()
    assert devices == [{"device": "desktop", "count": 3}]

    daily = client.get("/analytics/daily", params={"days": 7}, headers=admin_headers).json()
    assert len(daily) == 7
    assert daily[-1]["page_views"] == 3
    assert daily[-1]["total"] == 2 + first["count"]


def test_announcements_public_and_admin(client, admin_headers):
    body = {
        "title": "Open house",
        "content": "Come meet the kittens.",
        "is_published": True,
        "sort_order": 1,
    }
    created = client.post("/announcements", json=body, headers=admin_headers).json()
    assert created["slug"] == "open-house"

    latest = client.get("/announcements/latest", params={"include_content": False}).json()
    assert latest[0]["title"] == "Open house"
    assert "content" not in latest[0]

    assert client.get("/announcements/slug/open-house").status_code == 200
    assert client.get("/announcements/slug/missing").status_code == 404


def test_synthetic_visits_without_body(client, admin_headers):
    response = client.post("/analytics/synthetic", headers=admin_headers)

    assert response.status_code == 200
    result = response.json()
    assert result["success"] is True
    assert 20 <= result["count"] <= 30

    dated = client.post(
        "/analytics/synthetic",
        json={"date": "2026-01-05"},
        headers=admin_headers,
    ).json()
    assert dated["success"] is True
