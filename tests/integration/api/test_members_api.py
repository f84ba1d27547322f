from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, Membership, MembershipRole, MembershipStatus

NEW_CUSTOMER = {
    "display_name": "Jo",
    "kind": "individual",
    "roles": [{"role_type": "customer_individual"}],
}


@pytest.mark.asyncio
async def test_create_farm_makes_caller_owner(client: AsyncClient, seed, auth_headers, db_session):
    user_id = await seed.user("founder@farm.io")

    response = await client.post(
        "/api/farms", json={"farm_name": "Sunny Acres"}, headers=auth_headers(user_id)
    )

    assert response.status_code == 201
    farm = response.json()
    assert farm["role"] == "owner"
    assert farm["status"] == "active"

    access = await client.get(f"/api/farms/{farm['id']}/access", headers=auth_headers(user_id))
    assert access.json()["role"] == "owner"

    actions = (
        await db_session.exec(
            select(AuditEvent.action).where(AuditEvent.farm_id == UUID(farm["id"]))
        )
    ).all()
    assert actions == ["farm_created"]


@pytest.mark.asyncio
async def test_create_farm_requires_identity(client: AsyncClient):
    response = await client.post("/api/farms", json={"farm_name": "Sunny Acres"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_add_member_and_list(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    hand_id = await seed.user("hand@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)

    added = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(hand_id), "role": "viewer"},
        headers=auth_headers(owner_id),
    )
    assert added.status_code == 201
    assert added.json()["email"] == "hand@farm.io"

    again = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(hand_id), "role": "viewer"},
        headers=auth_headers(owner_id),
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_MEMBER"

    listed = await client.get(f"/api/farms/{farm_id}/members", headers=auth_headers(hand_id))
    assert listed.status_code == 200
    roles = {m["email"]: m["role"] for m in listed.json()["members"]}
    assert roles == {"owner@farm.io": "owner", "hand@farm.io": "viewer"}


@pytest.mark.asyncio
async def test_member_management_needs_admin(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    manager_id = await seed.user("manager@farm.io")
    admin_id = await seed.user("admin@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)
    await seed.membership(manager_id, farm_id, MembershipRole.manager)
    await seed.membership(admin_id, farm_id, MembershipRole.admin)
    outsider_id = await seed.user("outsider@farm.io")

    by_manager = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(outsider_id), "role": "viewer"},
        headers=auth_headers(manager_id),
    )
    grant_owner = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(outsider_id), "role": "owner"},
        headers=auth_headers(admin_id),
    )
    unknown_user = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(uuid4()), "role": "viewer"},
        headers=auth_headers(admin_id),
    )

    assert by_manager.status_code == 403
    assert grant_owner.status_code == 403
    assert unknown_user.status_code == 404
    assert unknown_user.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_role_change_applies_to_next_request(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    hand_id = await seed.user("hand@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)
    await seed.membership(hand_id, farm_id, MembershipRole.viewer)

    before = await client.post(
        f"/api/farms/{farm_id}/parties", json=NEW_CUSTOMER, headers=auth_headers(hand_id)
    )
    assert before.status_code == 403

    changed = await client.put(
        f"/api/farms/{farm_id}/members/{hand_id}",
        json={"role": "team_member"},
        headers=auth_headers(owner_id),
    )
    assert changed.status_code == 200
    assert changed.json() == {
        "status": "updated",
        "membership": {"user_id": str(hand_id), "role": "team_member"},
    }

    after = await client.post(
        f"/api/farms/{farm_id}/parties", json=NEW_CUSTOMER, headers=auth_headers(hand_id)
    )
    assert after.status_code == 201


@pytest.mark.asyncio
async def test_only_owner_changes_roles(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    admin_id = await seed.user("admin@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)
    await seed.membership(admin_id, farm_id, MembershipRole.admin)

    by_admin = await client.put(
        f"/api/farms/{farm_id}/members/{admin_id}",
        json={"role": "owner"},
        headers=auth_headers(admin_id),
    )
    self_demotion = await client.put(
        f"/api/farms/{farm_id}/members/{owner_id}",
        json={"role": "viewer"},
        headers=auth_headers(owner_id),
    )

    assert by_admin.status_code == 403
    assert self_demotion.status_code == 409
    assert self_demotion.json()["error"]["code"] == "CANNOT_DEMOTE_SELF"


@pytest.mark.asyncio
async def test_revoked_member_is_denied_on_next_request(
    client: AsyncClient, seed, auth_headers, db_session
):
    owner_id = await seed.user("owner@farm.io")
    hand_id = await seed.user("hand@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)
    await seed.membership(hand_id, farm_id, MembershipRole.team_member)

    before = await client.get(f"/api/farms/{farm_id}/parties", headers=auth_headers(hand_id))
    assert before.status_code == 200

    removed = await client.delete(
        f"/api/farms/{farm_id}/members/{hand_id}", headers=auth_headers(owner_id)
    )
    assert removed.status_code == 200
    assert removed.json() == {"status": "removed"}

    after = await client.get(f"/api/farms/{farm_id}/parties", headers=auth_headers(hand_id))
    assert after.status_code == 403

    membership = (
        await db_session.exec(
            select(Membership).where(Membership.user_id == hand_id, Membership.farm_id == farm_id)
        )
    ).one()
    assert membership.status == MembershipStatus.revoked


@pytest.mark.asyncio
async def test_revoked_member_can_be_re_added(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    hand_id = await seed.user("hand@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)
    await seed.membership(hand_id, farm_id, MembershipRole.viewer, MembershipStatus.revoked)

    response = await client.post(
        f"/api/farms/{farm_id}/members",
        json={"user_id": str(hand_id), "role": "manager"},
        headers=auth_headers(owner_id),
    )
    access = await client.get(f"/api/farms/{farm_id}/access", headers=auth_headers(hand_id))

    assert response.status_code == 201
    assert access.json()["role"] == "manager"


@pytest.mark.asyncio
async def test_last_owner_stays(client: AsyncClient, seed, auth_headers):
    owner_id = await seed.user("owner@farm.io")
    farm_id = await seed.farm("Sunny Acres", owner_id=owner_id)

    response = await client.delete(
        f"/api/farms/{farm_id}/members/{owner_id}", headers=auth_headers(owner_id)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
