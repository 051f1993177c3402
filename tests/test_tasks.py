"""Tests for task endpoints, status transitions and the dashboard."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient

from app.db.enums import TaskStatus
from app.db.models import Task
from app.db.types import utcnow
from app.services import task_service


async def _create_task(client, headers, **fields):
    payload = {"title": "Call customer", **fields}
    response = await client.post("/tasks", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["task"]


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()


# =============================================================================
# Status transition hook
# =============================================================================

def test_status_transition_to_completed_stamps_date():
    now = datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)
    task = Task(status=TaskStatus.COMPLETED.value)
    task_service.apply_status_transition(task, previous_status="in_progress", completed_date_supplied=False, now=now)
    assert task.completed_date == now


def test_status_transition_other_statuses_do_nothing():
    for status in ("pending", "in_progress", "cancelled"):
        task = Task(status=status)
        task_service.apply_status_transition(task, previous_status=None, completed_date_supplied=False)
        assert task.completed_date is None


def test_today_bounds_respect_timezone():
    now = datetime(2026, 3, 10, 3, 0, tzinfo=timezone.utc)  # 2026-03-09 23:00 in New York
    start, end = task_service.today_bounds(now, tz_name="America/New_York")
    assert start == datetime(2026, 3, 9, 4, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 3, 10, 4, 0, tzinfo=timezone.utc)

    utc_start, utc_end = task_service.today_bounds(now, tz_name="UTC")
    assert utc_start == datetime(2026, 3, 10, tzinfo=timezone.utc)
    assert utc_end - utc_start == timedelta(days=1)


# =============================================================================
# CRUD
# =============================================================================

@pytest.mark.asyncio
async def test_create_task_stamps_owner_and_creator(client: AsyncClient, sales_auth):
    task = await _create_task(client, sales_auth.headers, estimated_hours="1.5")
    assert task["status"] == "pending"
    assert task["priority"] == "medium"
    assert task["assigned_user_id"] == sales_auth.user.id
    assert task["created_by_user_id"] == sales_auth.user.id
    assert task["created_by_user"]["first_name"] == "Sally"
    assert task["completed_date"] is None
    assert Decimal(task["estimated_hours"]) == Decimal("1.5")


@pytest.mark.asyncio
async def test_create_completed_task_sets_completed_date(client: AsyncClient, sales_auth):
    task = await _create_task(client, sales_auth.headers, status="completed")
    assert task["completed_date"] is not None


@pytest.mark.asyncio
async def test_create_task_links_records(client: AsyncClient, sales_auth):
    org = (await client.post("/organizations", headers=sales_auth.headers, json={"name": "Acme"})).json()["organization"]
    contact = (
        await client.post(
            "/contacts",
            headers=sales_auth.headers,
            json={"first_name": "Bob", "last_name": "Lee", "email": "bob@example.com"},
        )
    ).json()["contact"]
    deal = (
        await client.post("/deals", headers=sales_auth.headers, json={"title": "Renewal", "value": "10"})
    ).json()["deal"]

    task = await _create_task(
        client,
        sales_auth.headers,
        organization_id=org["id"],
        contact_id=contact["id"],
        deal_id=deal["id"],
    )
    assert task["organization"] == {"id": org["id"], "name": "Acme"}
    assert task["deal"] == {"id": deal["id"], "title": "Renewal"}
    assert task["contact"]["first_name"] == "Bob"

    detail = await client.get(f"/tasks/{task['id']}", headers=sales_auth.headers)
    assert detail.json()["task"]["contact"]["email"] == "bob@example.com"


@pytest.mark.asyncio
async def test_create_task_missing_deal_writes_nothing(client: AsyncClient, sales_auth, db):
    response = await client.post("/tasks", headers=sales_auth.headers, json={"title": "X", "deal_id": 31337})
    assert response.status_code == 400
    assert response.json() == {"error": "Deal not found"}
    assert db.query(Task).count() == 0


@pytest.mark.asyncio
async def test_update_to_completed_sets_completed_date(client: AsyncClient, sales_auth):
    task = await _create_task(client, sales_auth.headers)

    progressing = await client.put(f"/tasks/{task['id']}", headers=sales_auth.headers, json={"status": "in_progress"})
    assert progressing.json()["task"]["completed_date"] is None

    done = await client.put(f"/tasks/{task['id']}", headers=sales_auth.headers, json={"status": "completed"})
    assert done.status_code == 200
    assert done.json()["message"] == "Task updated successfully"
    assert done.json()["task"]["completed_date"] is not None


@pytest.mark.asyncio
async def test_update_to_completed_keeps_supplied_date(client: AsyncClient, sales_auth):
    task = await _create_task(client, sales_auth.headers)
    response = await client.put(
        f"/tasks/{task['id']}",
        headers=sales_auth.headers,
        json={"status": "completed", "completed_date": "2026-01-05T10:00:00Z"},
    )
    assert response.json()["task"]["completed_date"].startswith("2026-01-05T10:00:00")


@pytest.mark.asyncio
async def test_update_task_clears_link(client: AsyncClient, sales_auth):
    org = (await client.post("/organizations", headers=sales_auth.headers, json={"name": "Acme"})).json()["organization"]
    task = await _create_task(client, sales_auth.headers, organization_id=org["id"])

    response = await client.put(f"/tasks/{task['id']}", headers=sales_auth.headers, json={"organization_id": None})
    assert response.status_code == 200
    assert response.json()["task"]["organization"] is None
    assert response.json()["task"]["organization_id"] is None


@pytest.mark.asyncio
async def test_list_tasks_order_and_filters(client: AsyncClient, sales_auth, manager_auth):
    base = utcnow().replace(microsecond=0)
    await _create_task(client, sales_auth.headers, title="No due date")
    await _create_task(client, sales_auth.headers, title="Due later", due_date=_iso(base + timedelta(days=5)), priority="high")
    await _create_task(client, manager_auth.headers, title="Due soon", due_date=_iso(base + timedelta(days=1)), status="in_progress")

    response = await client.get("/tasks", headers=sales_auth.headers)
    assert [t["title"] for t in response.json()["tasks"]] == ["Due soon", "Due later", "No due date"]

    by_status = await client.get("/tasks", headers=sales_auth.headers, params={"status": "in_progress"})
    assert [t["title"] for t in by_status.json()["tasks"]] == ["Due soon"]

    by_priority = await client.get("/tasks", headers=sales_auth.headers, params={"priority": "high"})
    assert [t["title"] for t in by_priority.json()["tasks"]] == ["Due later"]

    by_owner = await client.get("/tasks", headers=sales_auth.headers, params={"assigned_user_id": manager_auth.user.id})
    assert [t["title"] for t in by_owner.json()["tasks"]] == ["Due soon"]

    by_search = await client.get("/tasks", headers=sales_auth.headers, params={"search": "LATER"})
    assert [t["title"] for t in by_search.json()["tasks"]] == ["Due later"]


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.asyncio
async def test_dashboard_counts(client: AsyncClient, sales_auth, db):
    now = utcnow()
    start, end = task_service.today_bounds(now)
    yesterday = start - timedelta(hours=1)
    later_today = now + (end - now) / 2
    next_week = now + timedelta(days=7)

    await _create_task(client, sales_auth.headers, title="Overdue", due_date=_iso(yesterday))
    await _create_task(client, sales_auth.headers, title="Overdue but done", due_date=_iso(yesterday), status="completed")
    await _create_task(client, sales_auth.headers, title="Later today", due_date=_iso(later_today), status="in_progress")
    await _create_task(client, sales_auth.headers, title="Cancelled today", due_date=_iso(later_today), status="cancelled")
    await _create_task(client, sales_auth.headers, title="Next week", due_date=_iso(next_week))

    response = await client.get("/tasks/dashboard", headers=sales_auth.headers)
    assert response.status_code == 200
    data = response.json()

    assert data["overdue_tasks"] == 1
    assert data["today_tasks"] == 1
    assert data["summary"] == [
        {"status": "pending", "count": 2},
        {"status": "in_progress", "count": 1},
        {"status": "completed", "count": 1},
        {"status": "cancelled", "count": 1},
    ]


@pytest.mark.asyncio
async def test_dashboard_empty(client: AsyncClient, sales_auth):
    response = await client.get("/tasks/dashboard", headers=sales_auth.headers)
    assert response.json() == {"summary": [], "overdue_tasks": 0, "today_tasks": 0}


@pytest.mark.asyncio
async def test_oversized_task_references_rejected(client: AsyncClient, sales_auth, manager_auth, db):
    response = await client.post(
        "/tasks",
        headers=sales_auth.headers,
        json={"title": "X", "deal_id": 10**20},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "deal_id"
    assert db.query(Task).count() == 0

    missing = await client.delete(f"/tasks/{10**20}", headers=manager_auth.headers)
    assert missing.status_code == 400
    assert missing.json()["errors"][0]["param"] == "task_id"
