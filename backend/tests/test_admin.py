"""
Content Hub - Admin API Tests
"""
import pytest
from httpx import AsyncClient

from contenthub.models.user import UserRole


@pytest.mark.asyncio
async def test_pending_users(client: AsyncClient, make_user, admin, auth_headers):
    pending = await make_user("new@example.com", is_approved=False)

    response = await client.get("/api/v1/admin/users/pending", headers=auth_headers(admin))

    assert response.status_code == 200
    assert [u["id"] for u in response.json()] == [str(pending.id)]


@pytest.mark.asyncio
async def test_admin_endpoints_require_admin(client: AsyncClient, moderator, auth_headers):
    response = await client.get("/api/v1/admin/users/pending", headers=auth_headers(moderator))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_approve_as_moderator(client: AsyncClient, make_user, admin, auth_headers):
    pending = await make_user("new@example.com", is_approved=False)

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approve",
        json={"role": "moderator"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["is_approved"] is True
    assert response.json()["role"] == "moderator"


@pytest.mark.asyncio
async def test_cannot_approve_as_admin(client: AsyncClient, make_user, admin, auth_headers):
    pending = await make_user("new@example.com", is_approved=False)

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approve",
        json={"role": "admin"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_approve_does_not_rerole_existing_admin(
    client: AsyncClient, make_user, admin, auth_headers
):
    other_admin = await make_user("second-admin@example.com", role=UserRole.ADMIN)

    response = await client.post(
        f"/api/v1/admin/users/{other_admin.id}/approve",
        headers=auth_headers(admin),
    )
    assert response.status_code == 409

    # Still an admin: admin routes keep working for that account
    response = await client.get("/api/v1/admin/users/pending", headers=auth_headers(other_admin))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_admin_cannot_approve_self(client: AsyncClient, admin, auth_headers):
    response = await client.post(
        f"/api/v1/admin/users/{admin.id}/approve",
        headers=auth_headers(admin),
    )
    assert response.status_code == 400

    response = await client.get("/api/v1/admin/users/pending", headers=auth_headers(admin))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_rejected_account_can_be_approved_later(
    client: AsyncClient, make_user, admin, auth_headers
):
    pending = await make_user("new@example.com", is_approved=False)
    await client.post(f"/api/v1/admin/users/{pending.id}/reject", headers=auth_headers(admin))

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approve",
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["is_active"] is True


@pytest.mark.asyncio
async def test_reject_deactivates_account(client: AsyncClient, make_user, admin, auth_headers):
    pending = await make_user("new@example.com", is_approved=False)

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/reject",
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["is_active"] is False

    login = await client.post("/api/v1/auth/login", json={
        "email": "new@example.com",
        "password": "TestPass123",
    })
    assert login.status_code == 403


@pytest.mark.asyncio
async def test_admin_cannot_reject_self(client: AsyncClient, admin, auth_headers):
    response = await client.post(
        f"/api/v1/admin/users/{admin.id}/reject",
        headers=auth_headers(admin),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_approve_unknown_user(client: AsyncClient, admin, auth_headers):
    response = await client.post(
        "/api/v1/admin/users/00000000-0000-0000-0000-000000000000/approve",
        headers=auth_headers(admin),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_user_stats(
    client: AsyncClient, make_user, contributor, moderator, admin, auth_headers, sample_material_data
):
    await make_user("pending@example.com", is_approved=False)
    first = await client.post("/api/v1/materials", json=sample_material_data, headers=auth_headers(contributor))
    await client.post("/api/v1/materials", json=sample_material_data, headers=auth_headers(contributor))
    await client.patch(
        f"/api/v1/materials/{first.json()['id']}/status",
        json={"status": "approved"},
        headers=auth_headers(moderator),
    )

    response = await client.get("/api/v1/admin/stats/users", headers=auth_headers(admin))

    assert response.status_code == 200
    stats = response.json()
    # Approved users only, busiest first
    assert len(stats) == 3
    assert stats[0]["user_id"] == str(contributor.id)
    assert stats[0]["total_uploads"] == 2
    assert stats[0]["approved_uploads"] == 1
    assert stats[0]["approval_rate"] == 50
    assert all(s["total_uploads"] == 0 and s["approval_rate"] == 0 for s in stats[1:])
