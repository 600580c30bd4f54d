"""
Content Hub - Materials API Tests
"""
import pytest
from httpx import AsyncClient

from contenthub.services.materials import approval_rate

MATERIALS_URL = "/api/v1/materials"


async def _submit(client: AsyncClient, headers: dict, data: dict) -> dict:
    response = await client.post(MATERIALS_URL, json=data, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.mark.parametrize(
    "approved, total, expected",
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (4, 4, 100)],
)
def test_approval_rate_rounds_half_up(approved, total, expected):
    assert approval_rate(approved, total) == expected


@pytest.mark.asyncio
async def test_submit_material(client: AsyncClient, contributor, auth_headers, sample_material_data):
    data = await _submit(client, auth_headers(contributor), sample_material_data)

    assert data["status"] == "pending"
    assert data["contributor_name"] == "Rina Das"
    assert data["contributor_id"] == str(contributor.id)
    assert data["subtopic"] == "Speed and Velocity"


@pytest.mark.asyncio
async def test_submit_rejects_unknown_path(
    client: AsyncClient, contributor, auth_headers, sample_material_data
):
    sample_material_data["subtopic"] = "Quantum Tunnelling"
    response = await client.post(
        MATERIALS_URL, json=sample_material_data, headers=auth_headers(contributor)
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_is_unavailable_when_curriculum_cannot_load(
    client: AsyncClient, failing_flush, contributor, auth_headers, sample_material_data
):
    failing_flush()

    response = await client.post(
        MATERIALS_URL, json=sample_material_data, headers=auth_headers(contributor)
    )
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_blooms_levels(client: AsyncClient, contributor, auth_headers):
    response = await client.get(f"{MATERIALS_URL}/blooms-levels", headers=auth_headers(contributor))

    assert response.status_code == 200
    assert response.json() == [
        {"level": "Level 0 (Readiness)", "description": "Student Readiness"},
        {"level": "Level 1 (Remember & Understand)", "description": "Remember & Understand"},
        {"level": "Level 2 (Apply & Analyze)", "description": "Derive, Apply & Analyze"},
    ]


@pytest.mark.asyncio
async def test_blooms_levels_requires_auth(client: AsyncClient):
    response = await client.get(f"{MATERIALS_URL}/blooms-levels")
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_review_queue_and_approval(
    client: AsyncClient, contributor, moderator, auth_headers, sample_material_data
):
    material = await _submit(client, auth_headers(contributor), sample_material_data)

    queue = await client.get(f"{MATERIALS_URL}/review-queue", headers=auth_headers(moderator))
    assert queue.status_code == 200
    assert [m["id"] for m in queue.json()] == [material["id"]]

    response = await client.patch(
        f"{MATERIALS_URL}/{material['id']}/status",
        json={"status": "approved"},
        headers=auth_headers(moderator),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    queue = await client.get(f"{MATERIALS_URL}/review-queue", headers=auth_headers(moderator))
    assert queue.json() == []


@pytest.mark.asyncio
async def test_contributor_cannot_moderate(
    client: AsyncClient, contributor, auth_headers, sample_material_data
):
    material = await _submit(client, auth_headers(contributor), sample_material_data)

    response = await client.patch(
        f"{MATERIALS_URL}/{material['id']}/status",
        json={"status": "approved"},
        headers=auth_headers(contributor),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_contributors_see_approved_and_own(
    client: AsyncClient, make_user, contributor, moderator, auth_headers, sample_material_data
):
    other = await make_user("other@example.com", full_name="Other")
    own = await _submit(client, auth_headers(contributor), sample_material_data)
    foreign = await _submit(client, auth_headers(other), sample_material_data)

    response = await client.get(MATERIALS_URL, headers=auth_headers(contributor))
    assert [m["id"] for m in response.json()] == [own["id"]]

    await client.patch(
        f"{MATERIALS_URL}/{foreign['id']}/status",
        json={"status": "approved"},
        headers=auth_headers(moderator),
    )
    response = await client.get(MATERIALS_URL, headers=auth_headers(contributor))
    assert {m["id"] for m in response.json()} == {own["id"], foreign["id"]}

    response = await client.get(
        MATERIALS_URL, params={"status": "approved"}, headers=auth_headers(moderator)
    )
    assert [m["id"] for m in response.json()] == [foreign["id"]]


@pytest.mark.asyncio
async def test_filter_by_hierarchy(
    client: AsyncClient, contributor, auth_headers, sample_material_data
):
    await _submit(client, auth_headers(contributor), sample_material_data)

    response = await client.get(
        MATERIALS_URL,
        params={"class_name": "Class 10"},
        headers=auth_headers(contributor),
    )
    assert response.json() == []

    response = await client.get(
        MATERIALS_URL,
        params={"class_name": "Class 9", "topic": "Motion"},
        headers=auth_headers(contributor),
    )
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_owner_deletes_pending_material(
    client: AsyncClient, contributor, auth_headers, sample_material_data
):
    material = await _submit(client, auth_headers(contributor), sample_material_data)

    response = await client.delete(
        f"{MATERIALS_URL}/{material['id']}", headers=auth_headers(contributor)
    )
    assert response.status_code == 204

    response = await client.delete(
        f"{MATERIALS_URL}/{material['id']}", headers=auth_headers(contributor)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_owner_cannot_delete_reviewed_material(
    client: AsyncClient, contributor, moderator, auth_headers, sample_material_data
):
    material = await _submit(client, auth_headers(contributor), sample_material_data)
    await client.patch(
        f"{MATERIALS_URL}/{material['id']}/status",
        json={"status": "rejected"},
        headers=auth_headers(moderator),
    )

    response = await client.delete(
        f"{MATERIALS_URL}/{material['id']}", headers=auth_headers(contributor)
    )
    assert response.status_code == 403

    response = await client.delete(
        f"{MATERIALS_URL}/{material['id']}", headers=auth_headers(moderator)
    )
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_contributor_stats(
    client: AsyncClient, make_user, contributor, moderator, auth_headers, sample_material_data
):
    other = await make_user("other@example.com", full_name="Other")
    ids = [
        (await _submit(client, auth_headers(contributor), sample_material_data))["id"]
        for _ in range(3)
    ]
    await _submit(client, auth_headers(other), sample_material_data)

    reviewer = auth_headers(moderator)
    await client.patch(f"{MATERIALS_URL}/{ids[0]}/status", json={"status": "approved"}, headers=reviewer)
    await client.patch(f"{MATERIALS_URL}/{ids[1]}/status", json={"status": "approved"}, headers=reviewer)
    await client.patch(f"{MATERIALS_URL}/{ids[2]}/status", json={"status": "rejected"}, headers=reviewer)

    response = await client.get(f"{MATERIALS_URL}/stats/contributors", headers=reviewer)

    assert response.status_code == 200
    stats = response.json()
    assert [s["contributor_name"] for s in stats] == ["Rina Das", "Other"]
    assert stats[0] == {
        "contributor_name": "Rina Das",
        "total": 3,
        "approved": 2,
        "rejected": 1,
        "approval_rate": 67,
    }
    assert stats[1]["approval_rate"] == 0
