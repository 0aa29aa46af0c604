"""Integration tests for signup, login, token refresh and role changes."""


async def test_signup_then_login(client):
    signup = await client.post(
        "/api/auth/signup", json={"username": "erin", "password": "pw123"}
    )
    assert signup.status_code == 201
    body = signup.json()
    assert body["user"]["role"] == "Employee"
    assert body["accessToken"] and body["refreshToken"]

    login = await client.post("/api/auth/login", json={"username": "erin", "password": "pw123"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == body["user"]["id"]


async def test_duplicate_signup_conflicts(client, employee):
    response = await client.post(
        "/api/auth/signup", json={"username": "employee", "password": "pw"}
    )
    assert response.status_code == 409


async def test_bad_login(client, employee):
    response = await client.post(
        "/api/auth/login", json={"username": "employee", "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password"


async def test_refresh_token_issues_new_pair(client):
    signup = await client.post("/api/auth/signup", json={"username": "frank", "password": "pw"})
    refresh = signup.json()["refreshToken"]

    response = await client.post(
        "/api/auth/refresh-token", headers={"Authorization": f"Bearer {refresh}"}
    )
    assert response.status_code == 200
    body = response.json()
    assert "message" not in body
    assert body["user"]["username"] == "frank"


async def test_refresh_rejects_access_token(client, employee, auth_headers):
    response = await client.post("/api/auth/refresh-token", headers=auth_headers(employee))
    assert response.status_code == 403
    assert response.json()["code"] == "REFRESH_TOKEN_INVALID"


async def test_refresh_requires_token(client):
    response = await client.post("/api/auth/refresh-token")
    assert response.status_code == 401
    assert response.json()["message"] == "Refresh token not found"


async def test_get_user(client, employee):
    response = await client.get(f"/api/auth/get-user/{employee.id}")
    assert response.status_code == 200
    assert response.json()["user"] == {"id": employee.id, "username": "employee", "role": "Employee"}

    missing = await client.get("/api/auth/get-user/nobody")
    assert missing.status_code == 404


async def test_admin_promotes_employee_to_manager(client, admin, employee, auth_headers):
    response = await client.patch(
        f"/api/auth/update-role/{employee.id}",
        json={"role": "Manager"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "Manager"


async def test_manager_cannot_change_roles(client, manager, employee, auth_headers):
    response = await client.patch(
        f"/api/auth/update-role/{employee.id}",
        json={"role": "Admin"},
        headers=auth_headers(manager),
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. Admin role required."
