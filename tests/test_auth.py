from conftest import API


async def test_register_starts_with_empty_balances(client):
    response = await client.post(f"{API}/auth/register", json={
        "username": "thao",
        "email": "thao@gmail.com",
        "password": "matkhau123",
        "full_name": "Thảo",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "thao"
    assert data["role"] == "user"
    assert data["diamonds"] == 0
    assert data["xp"] == 0
    assert data["level"] == 1
    assert data["consecutive_check_in_days"] == 0
    assert data["last_check_in_at"] is None


async def test_register_duplicate_username(client, user):
    response = await client.post(f"{API}/auth/register", json={
        "username": "linh",
        "email": "another@gmail.com",
        "password": "matkhau123",
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "Tên đăng nhập đã tồn tại"


async def test_login_returns_token_and_sets_cookie(client, user):
    response = await client.post(f"{API}/auth/login", json={"username": "linh", "password": "secret123"})

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert "access_token=" in response.headers["set-cookie"]

    me = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == user.id


async def test_login_wrong_password(client, user):
    response = await client.post(f"{API}/auth/login", json={"username": "linh", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Tên đăng nhập hoặc mật khẩu không đúng"


async def test_me_reports_level_from_xp(client, db, user, user_headers):
    user.xp = 250
    user.diamonds = 40
    await db.commit()

    response = await client.get(f"{API}/auth/me", headers=user_headers)

    data = response.json()
    assert data["level"] == 3
    assert data["diamonds"] == 40


async def test_invalid_token(client):
    response = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "token_not_valid"


async def test_missing_token(client):
    response = await client.get(f"{API}/auth/me")

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "token_missing"


async def test_inactive_account(client, db, user, user_headers):
    user.is_active = False
    await db.commit()

    response = await client.get(f"{API}/auth/me", headers=user_headers)

    assert response.status_code == 400
