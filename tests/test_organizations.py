"""Tests for organization endpoints."""
from decimal import Decimal

import pytest
from httpx import AsyncClient

from app.db.models import Organization


async def _create_org(client, headers, **fields):
    payload = {"name": "Acme Corp", **fields}
    response = await client.post("/organizations", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["organization"]


@pytest.mark.asyncio
async def test_create_organization(client: AsyncClient, sales_auth):
    response = await client.post(
        "/organizations",
        headers=sales_auth.headers,
        json={
            "name": "Acme Corp",
            "industry": "Manufacturing",
            "website": "https://acme.example.com",
            "email": "Info@Acme.example.com",
            "revenue": "1250000.50",
            "employees": 120,
            "tags": ["key-account"],
            "address": {"street": "1 Main St", "city": "Springfield"},
            "social_profiles": {"twitter": "https://twitter.com/acme"},
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Organization created successfully"
    org = data["organization"]
    assert org["size"] == "small"
    assert org["status"] == "prospect"
    assert org["email"] == "info@acme.example.com"
    assert Decimal(org["revenue"]) == Decimal("1250000.50")
    assert org["assigned_user"]["id"] == sales_auth.user.id
    assert org["address"]["street"] == "1 Main St"


@pytest.mark.asyncio
async def test_empty_website_stored_as_null(client: AsyncClient, sales_auth):
    org = await _create_org(client, sales_auth.headers, website="")
    assert org["website"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("website", ["acme.example.com", "ftp://acme.example.com", "https://"])
async def test_invalid_website_rejected(client: AsyncClient, sales_auth, website):
    response = await client.post(
        "/organizations", headers=sales_auth.headers, json={"name": "Acme", "website": website}
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "website"


@pytest.mark.asyncio
async def test_negative_revenue_and_employees_rejected(client: AsyncClient, sales_auth):
    response = await client.post(
        "/organizations",
        headers=sales_auth.headers,
        json={"name": "Acme", "revenue": "-1", "employees": -5},
    )
    assert response.status_code == 400
    params = {e["param"] for e in response.json()["errors"]}
    assert params == {"revenue", "employees"}


@pytest.mark.asyncio
async def test_get_organization_lists_contacts(client: AsyncClient, sales_auth):
    org = await _create_org(client, sales_auth.headers)
    for first in ("Alice", "Bob"):
        await client.post(
            "/contacts",
            headers=sales_auth.headers,
            json={
                "first_name": first,
                "last_name": "Smith",
                "email": f"{first.lower()}@acme.example.com",
                "organization_id": org["id"],
            },
        )

    response = await client.get(f"/organizations/{org['id']}", headers=sales_auth.headers)
    assert response.status_code == 200
    contacts = response.json()["organization"]["contacts"]
    assert [c["first_name"] for c in contacts] == ["Alice", "Bob"]
    assert contacts[0]["email"] == "alice@acme.example.com"
    assert set(contacts[0]) == {"id", "first_name", "last_name", "email"}


@pytest.mark.asyncio
async def test_get_organization_not_found(client: AsyncClient, sales_auth):
    response = await client.get("/organizations/77", headers=sales_auth.headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Organization not found"}


@pytest.mark.asyncio
async def test_update_organization(client: AsyncClient, sales_auth):
    org = await _create_org(client, sales_auth.headers, industry="Retail")
    response = await client.put(
        f"/organizations/{org['id']}",
        headers=sales_auth.headers,
        json={"status": "customer", "size": "enterprise", "industry": None},
    )
    assert response.status_code == 200
    updated = response.json()["organization"]
    assert updated["status"] == "customer"
    assert updated["size"] == "enterprise"
    assert updated["industry"] is None
    assert updated["name"] == "Acme Corp"


@pytest.mark.asyncio
async def test_update_organization_rejects_null_name(client: AsyncClient, sales_auth):
    org = await _create_org(client, sales_auth.headers)
    response = await client.put(
        f"/organizations/{org['id']}", headers=sales_auth.headers, json={"name": None}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_organizations_filters(client: AsyncClient, sales_auth):
    await _create_org(client, sales_auth.headers, name="Acme Corp", industry="Manufacturing")
    await _create_org(client, sales_auth.headers, name="Globex", industry="Energy", size="large")
    await _create_org(client, sales_auth.headers, name="Initech", email="hello@initech.example.com", status="partner")

    by_search = await client.get("/organizations", headers=sales_auth.headers, params={"search": "initech"})
    assert [o["name"] for o in by_search.json()["organizations"]] == ["Initech"]

    by_industry_search = await client.get("/organizations", headers=sales_auth.headers, params={"search": "ENERGY"})
    assert [o["name"] for o in by_industry_search.json()["organizations"]] == ["Globex"]

    by_industry = await client.get("/organizations", headers=sales_auth.headers, params={"industry": "Manufacturing"})
    assert [o["name"] for o in by_industry.json()["organizations"]] == ["Acme Corp"]

    by_size = await client.get("/organizations", headers=sales_auth.headers, params={"size": "large"})
    assert [o["name"] for o in by_size.json()["organizations"]] == ["Globex"]

    by_status = await client.get("/organizations", headers=sales_auth.headers, params={"status": "partner"})
    assert [o["name"] for o in by_status.json()["organizations"]] == ["Initech"]

    everything = await client.get("/organizations", headers=sales_auth.headers)
    assert [o["name"] for o in everything.json()["organizations"]] == ["Initech", "Globex", "Acme Corp"]


@pytest.mark.asyncio
async def test_delete_organization_blocked_by_contacts(client: AsyncClient, sales_auth, admin_auth):
    org = await _create_org(client, sales_auth.headers)
    await client.post(
        "/contacts",
        headers=sales_auth.headers,
        json={"first_name": "Alice", "last_name": "Smith", "organization_id": org["id"]},
    )

    response = await client.delete(f"/organizations/{org['id']}", headers=admin_auth.headers)
    assert response.status_code == 400
    assert "contacts" in response.json()["error"]

    still_there = await client.get(f"/organizations/{org['id']}", headers=admin_auth.headers)
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_delete_organization(client: AsyncClient, sales_auth, admin_auth):
    org = await _create_org(client, sales_auth.headers)
    response = await client.delete(f"/organizations/{org['id']}", headers=admin_auth.headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Organization deleted successfully"}


@pytest.mark.asyncio
async def test_oversized_employees_rejected(client: AsyncClient, sales_auth):
    response = await client.post(
        "/organizations", headers=sales_auth.headers, json={"name": "Acme", "employees": 10**20}
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "employees"

    org = await _create_org(client, sales_auth.headers)
    update = await client.put(
        f"/organizations/{org['id']}", headers=sales_auth.headers, json={"employees": 10**20}
    )
    assert update.status_code == 400


@pytest.mark.asyncio
async def test_oversized_organization_id_rejected(client: AsyncClient, sales_auth):
    response = await client.get(f"/organizations/{10**20}", headers=sales_auth.headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "organization_id"


@pytest.mark.asyncio
async def test_long_organization_email_fits_column(client: AsyncClient, sales_auth):
    email = "info" + "x" * 56 + "@" + "d" * 50 + "." + "e" * 40 + ".com"
    assert len(email) > 100
    assert Organization.__table__.c.email.type.length >= 254

    org = await _create_org(client, sales_auth.headers, email=email)
    assert org["email"] == email


@pytest.mark.asyncio
async def test_overlong_organization_email_rejected(client: AsyncClient, sales_auth):
    labels = ".".join(["d" * 60] * 4)
    response = await client.post(
        "/organizations",
        headers=sales_auth.headers,
        json={"name": "Acme", "email": f"{'x' * 64}@{labels}.com"},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "email"
