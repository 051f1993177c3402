"""Tests for the bearer-token gate and role checks."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import AsyncClient

from app.core.config import settings
from app.db.enums import Role


PROTECTED_ROUTES = [
    ("GET", "/contacts"),
    ("GET", "/organizations"),
    ("GET", "/deals"),
    ("GET", "/deals/pipeline"),
    ("GET", "/tasks"),
    ("GET", "/tasks/dashboard"),
    ("GET", "/auth/me"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
async def test_routes_require_bearer_token(client: AsyncClient, method, path):
    response = await client.request(method, path)
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_auth_checked_before_body_validation(client: AsyncClient):
    """An invalid body on a protected route still yields 401, not 400."""
    response = await client.post("/contacts", json={"first_name": ""})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_rejected(client: AsyncClient):
    response = await client.get("/contacts", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, sales_auth):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {
            "sub": str(sales_auth.user.id),
            "role": "sales",
            "token_version": 1,
            "iat": past - timedelta(hours=1),
            "exp": past,
        },
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    response = await client.get("/contacts", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_rejected(client: AsyncClient, sales_auth):
    token = jwt.encode(
        {
            "sub": str(sales_auth.user.id),
            "token_version": 1,
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        "some-other-secret",
        algorithm="HS256",
    )
    response = await client.get("/contacts", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_inactive_user_token_rejected(client: AsyncClient, sales_auth, db):
    sales_auth.user.is_active = False
    db.commit()
    response = await client.get("/contacts", headers=sales_auth.headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_deleted_user_token_rejected(client: AsyncClient, sales_auth, db):
    db.delete(sales_auth.user)
    db.commit()
    response = await client.get("/contacts", headers=sales_auth.headers)
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("entity", ["contacts", "organizations", "deals", "tasks"])
async def test_sales_and_support_cannot_delete(
    client: AsyncClient, sales_auth, support_auth, entity
):
    payloads = {
        "contacts": {"first_name": "Ann", "last_name": "Lee"},
        "organizations": {"name": "Acme"},
        "deals": {"title": "Deal", "value": "10"},
        "tasks": {"title": "Call"},
    }
    created = await client.post(f"/{entity}", headers=sales_auth.headers, json=payloads[entity])
    assert created.status_code == 201
    record_id = created.json()[entity[:-1]]["id"]

    for auth in (sales_auth, support_auth):
        response = await client.delete(f"/{entity}/{record_id}", headers=auth.headers)
        assert response.status_code == 403
        assert "error" in response.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [Role.ADMIN, Role.MANAGER])
async def test_admin_and_manager_can_delete(client: AsyncClient, make_user, auth_headers, role):
    headers = auth_headers(make_user(role))
    created = await client.post("/tasks", headers=headers, json={"title": "Call"})
    task_id = created.json()["task"]["id"]

    response = await client.delete(f"/tasks/{task_id}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    missing = await client.get(f"/tasks/{task_id}", headers=headers)
    assert missing.status_code == 404
