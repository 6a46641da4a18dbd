ROLES = "/api/admin/v1/roles"


async def create_role(client, headers, name):
    response = await client.post(ROLES, json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_and_list_roles(client, admin_headers):
    role = await create_role(client, admin_headers, "cashier")

    response = await client.get(ROLES, headers=admin_headers)
    assert role in response.json()["data"]


async def test_duplicate_role_name_conflicts(client, admin_headers):
    await create_role(client, admin_headers, "cashier")
    response = await client.post(ROLES, json={"name": "cashier"}, headers=admin_headers)
    assert response.status_code == 409


async def test_update_role(client, admin_headers):
    role = await create_role(client, admin_headers, "cashier")

    response = await client.put(f"{ROLES}/{role['id']}", json={"name": "manager"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "manager"

    response = await client.put(f"{ROLES}/{role['id']}", json={"name": "moderator"}, headers=admin_headers)
    assert response.status_code == 409


async def test_delete_unused_role(client, admin_headers):
    role = await create_role(client, admin_headers, "cashier")

    response = await client.delete(f"{ROLES}/{role['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"{ROLES}/{role['id']}", headers=admin_headers)
    assert response.status_code == 404


async def test_delete_role_in_use_conflicts(client, admin_headers):
    role = await create_role(client, admin_headers, "cashier")
    response = await client.post("/api/admin/v1/users", headers=admin_headers, json={
        "name": "Cash Desk", "email": "cash@test.com", "password": "password123", "role_id": role["id"],
    })
    assert response.status_code == 201

    response = await client.delete(f"{ROLES}/{role['id']}", headers=admin_headers)
    assert response.status_code == 409


async def test_role_held_by_deleted_user_still_conflicts(client, admin_headers):
    role = await create_role(client, admin_headers, "cashier")
    response = await client.post("/api/admin/v1/users", headers=admin_headers, json={
        "name": "Cash Desk", "email": "cash@test.com", "password": "password123", "role_id": role["id"],
    })
    user_id = response.json()["data"]["id"]
    await client.delete(f"/api/admin/v1/users/{user_id}", headers=admin_headers)

    response = await client.delete(f"{ROLES}/{role['id']}", headers=admin_headers)
    assert response.status_code == 409


async def test_admin_role_is_always_forbidden(client, admin_headers, roles):
    # the seeded admin user holds the role, protection is checked first
    response = await client.delete(f"{ROLES}/{roles['admin'].id}", headers=admin_headers)
    assert response.status_code == 403

    response = await client.delete(f"{ROLES}/{roles['user'].id}", headers=admin_headers)
    assert response.status_code == 403


async def test_protected_roles_cannot_be_renamed(client, admin_headers, roles):
    response = await client.put(f"{ROLES}/{roles['admin'].id}", json={"name": "staff"}, headers=admin_headers)
    assert response.status_code == 403

    response = await client.put(f"{ROLES}/{roles['user'].id}", json={"name": "customer"}, headers=admin_headers)
    assert response.status_code == 403

    # the admin session still passes the role check
    response = await client.get(ROLES, headers=admin_headers)
    assert response.status_code == 200
    assert {"admin", "user"} <= {role["name"] for role in response.json()["data"]}

    response = await client.put(f"{ROLES}/{roles['admin'].id}", json={"name": "admin"}, headers=admin_headers)
    assert response.status_code == 200


async def test_protected_role_without_users_is_forbidden(client, admin_headers):
    role = await create_role(client, admin_headers, "superadmin")

    response = await client.delete(f"{ROLES}/{role['id']}", headers=admin_headers)
    assert response.status_code == 403


async def test_unprotected_seed_role_can_be_deleted(client, admin_headers, roles):
    response = await client.delete(f"{ROLES}/{roles['moderator'].id}", headers=admin_headers)
    assert response.status_code == 200


async def test_role_users(client, admin_headers, roles, regular_user):
    response = await client.get(f"{ROLES}/{roles['user'].id}/users", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["role"]["name"] == "user"
    assert [u["email"] for u in data["users"]] == [regular_user.email]


async def test_role_name_validation(client, admin_headers):
    response = await client.post(ROLES, json={"name": "x"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["success"] is False
