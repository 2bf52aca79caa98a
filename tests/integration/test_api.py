"""HTTP API end to end against the test database."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.taskboard.models import User
from tests.helpers import auth_headers, create_project, create_task

pytestmark = pytest.mark.integration

TASK_BODY = {
    "title": "Book venue",
    "description": "Find a venue for the offsite",
    "start_date": "2025-01-10",
    "end_date": "2025-01-12",
    "media_type": "text",
    "media_content": "Capacity 40",
}


async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


async def test_missing_token_is_401(client: AsyncClient):
    response = await client.get("/api/v1/projects")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["request_id"]


async def test_project_flow(client: AsyncClient, organizer: User, member: User):
    headers = auth_headers(organizer)

    created = await client.post(
        "/api/v1/projects",
        json={"title": "Offsite", "description": "Team offsite"},
        headers=headers,
    )
    assert created.status_code == 201
    project_id = created.json()["id"]

    added = await client.post(
        f"/api/v1/projects/{project_id}/members",
        json={"identifier": member.email},
        headers=headers,
    )
    assert added.status_code == 201

    duplicate = await client.post(
        f"/api/v1/projects/{project_id}/members",
        json={"identifier": member.user_name},
        headers=headers,
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["code"] == "already_member"

    members = await client.get(f"/api/v1/projects/{project_id}/members", headers=headers)
    assert [m["user"]["id"] for m in members.json()] == [str(organizer.id), str(member.id)]

    listed = await client.get("/api/v1/projects", headers=auth_headers(member))
    assert [p["id"] for p in listed.json()["items"]] == [project_id]


async def test_hidden_and_missing_projects_look_the_same(
    client: AsyncClient, db_session, organizer: User, outsider: User
):
    project = await create_project(db_session, organizer)
    headers = auth_headers(outsider)

    hidden = await client.get(f"/api/v1/projects/{project.id}", headers=headers)
    missing = await client.get("/api/v1/projects/9999", headers=headers)

    assert hidden.status_code == missing.status_code == 404
    assert hidden.json()["detail"] == missing.json()["detail"] == "Not found"


async def test_deleted_project_is_404_even_for_admin(
    client: AsyncClient, db_session, organizer: User
):
    project = await create_project(db_session, organizer)

    first = await client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers(organizer))
    again = await client.get(
        f"/api/v1/projects/{project.id}", headers=auth_headers(organizer, "Admin")
    )

    assert first.status_code == 204
    assert again.status_code == 404


async def test_remove_organizer_is_conflict(client: AsyncClient, db_session, organizer: User):
    project = await create_project(db_session, organizer)

    response = await client.delete(
        f"/api/v1/projects/{project.id}/members/{organizer.id}",
        headers=auth_headers(organizer),
    )

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "is_organizer"


async def test_task_assignment_and_status_flow(
    client: AsyncClient, db_session, organizer: User, member: User, outsider: User
):
    project = await create_project(db_session, organizer, members=[member])
    base = f"/api/v1/projects/{project.id}/tasks"

    created = await client.post(base, json=TASK_BODY, headers=auth_headers(organizer))
    assert created.status_code == 201
    task_id = created.json()["id"]

    assigned = await client.post(
        f"{base}/{task_id}/assignments",
        json={"user_id": str(member.id)},
        headers=auth_headers(organizer),
    )
    assert assigned.status_code == 201

    moved = await client.put(
        f"{base}/{task_id}/status", json={"status": "in_progress"}, headers=auth_headers(member)
    )
    assert moved.status_code == 200
    assert moved.json()["status"] == "in_progress"

    denied = await client.put(
        f"{base}/{task_id}/status", json={"status": "completed"}, headers=auth_headers(outsider)
    )
    assert denied.status_code == 403
    assert denied.json()["detail"] == "Forbidden"

    details = await client.get(f"{base}/{task_id}", headers=auth_headers(member))
    body = details.json()
    assert body["assignee"]["id"] == str(member.id)
    assert body["can_change_status"] is True
    assert body["can_modify"] is False

    history = await client.get(f"{base}/{task_id}/assignments", headers=auth_headers(member))
    assert len(history.json()) == 1


async def test_invalid_dates_are_422_with_code(client: AsyncClient, db_session, organizer: User):
    project = await create_project(db_session, organizer)

    response = await client.post(
        f"/api/v1/projects/{project.id}/tasks",
        json={**TASK_BODY, "end_date": "2025-01-10"},
        headers=auth_headers(organizer),
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_dates"


async def test_assign_outsider_is_422(
    client: AsyncClient, db_session, organizer: User, outsider: User
):
    project = await create_project(db_session, organizer)
    task = await create_task(db_session, project)

    response = await client.post(
        f"/api/v1/projects/{project.id}/tasks/{task.id}/assignments",
        json={"user_id": str(outsider.id)},
        headers=auth_headers(organizer),
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_assignee"


async def test_comments_and_dashboard(
    client: AsyncClient, db_session, organizer: User, member: User
):
    project = await create_project(db_session, organizer, members=[member])
    task = await create_task(db_session, project)
    base = f"/api/v1/projects/{project.id}/tasks/{task.id}"

    await client.post(
        f"{base}/assignments", json={"user_id": str(member.id)}, headers=auth_headers(organizer)
    )
    comment = await client.post(
        f"{base}/comments", json={"text": "Booked"}, headers=auth_headers(member)
    )
    assert comment.status_code == 201
    comment_id = comment.json()["id"]

    forbidden = await client.patch(
        f"/api/v1/comments/{comment_id}", json={"text": "No"}, headers=auth_headers(organizer)
    )
    assert forbidden.status_code == 403

    edited = await client.patch(
        f"/api/v1/comments/{comment_id}", json={"text": "Booked!"}, headers=auth_headers(member)
    )
    assert edited.json()["text"] == "Booked!"

    dashboard = await client.get("/api/v1/dashboard", headers=auth_headers(member))
    assert dashboard.status_code == 200
    assert [t["task"]["id"] for t in dashboard.json()["tasks"]] == [task.id]

    deleted = await client.delete(f"/api/v1/comments/{comment_id}", headers=auth_headers(member))
    assert deleted.status_code == 204


async def test_delete_task_then_404(client: AsyncClient, db_session, organizer: User):
    project = await create_project(db_session, organizer)
    task = await create_task(db_session, project)
    url = f"/api/v1/projects/{project.id}/tasks/{task.id}"

    deleted = await client.delete(url, headers=auth_headers(organizer))
    missing = await client.get(url, headers=auth_headers(organizer))

    assert deleted.status_code == 204
    assert missing.status_code == 404


async def test_request_id_is_echoed(client: AsyncClient):
    request_id = str(uuid4())

    response = await client.get("/api/v1/projects", headers={"X-Request-ID": request_id})

    assert response.headers["x-request-id"] == request_id
    assert response.json()["request_id"] == request_id


async def test_outsider_mutation_matches_missing_project(
    client: AsyncClient, db_session, organizer: User, outsider: User
):
    project = await create_project(db_session, organizer)
    headers = auth_headers(outsider)

    existing = await client.delete(f"/api/v1/projects/{project.id}", headers=headers)
    missing = await client.delete("/api/v1/projects/99999", headers=headers)
    create = await client.post(
        f"/api/v1/projects/{project.id}/tasks", json=TASK_BODY, headers=headers
    )

    assert existing.status_code == missing.status_code == create.status_code == 404
    assert existing.json() == missing.json()
