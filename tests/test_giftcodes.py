from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from conftest import API, auth_headers, load_user, make_user
from src.giftcodes.models import GiftCode, GiftCodeRedemption
from src.transactions.models import DiamondTransactionLog

ADMIN_URL = f"{API}/admin/gift-codes/"


async def create_code(db, code="WELCOME", **fields) -> GiftCode:
    values = dict(diamond_reward=100, xp_reward=50, max_per_user=1, is_active=True)
    values.update(fields)
    gift_code = GiftCode(code=code, **values)
    db.add(gift_code)
    await db.commit()
    await db.refresh(gift_code)
    return gift_code


async def test_admin_creates_code_uppercased(client, admin_headers):
    response = await client.post(
        ADMIN_URL,
        json={"code": "  summer2026 ", "diamond_reward": 30, "usage_limit": 10},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["code"] == "SUMMER2026"
    assert data["usage_count"] == 0
    assert data["max_per_user"] == 1
    assert data["is_active"] is True


async def test_admin_create_duplicate_code(client, db, admin_headers):
    await create_code(db)

    response = await client.post(ADMIN_URL, json={"code": "welcome", "xp_reward": 5}, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Mã WELCOME đã tồn tại."


async def test_admin_create_without_reward(client, admin_headers):
    response = await client.post(ADMIN_URL, json={"code": "EMPTY"}, headers=admin_headers)
    assert response.status_code == 422


async def test_admin_routes_require_admin(client, user_headers):
    listed = await client.get(ADMIN_URL, headers=user_headers)
    created = await client.post(ADMIN_URL, json={"code": "HACK", "diamond_reward": 999}, headers=user_headers)

    assert listed.status_code == 403
    assert created.status_code == 403


async def test_admin_lists_and_deactivates(client, db, admin_headers):
    gift_code = await create_code(db)

    listed = await client.get(ADMIN_URL, headers=admin_headers)
    assert listed.status_code == 200
    assert listed.json()["total"] == 1

    response = await client.delete(f"{ADMIN_URL}{gift_code.id}", headers=admin_headers)

    assert response.status_code == 200
    await db.refresh(gift_code)
    assert gift_code.is_active is False


async def test_redeem_credits_and_logs(client, db, user, user_headers):
    gift_code = await create_code(db)

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "welcome"}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Nhận thành công 100 Kim Cương & 50 XP!"
    assert data["newDiamonds"] == 100
    assert data["newXp"] == 50

    entry = (await db.execute(
        select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id)
    )).scalar_one()
    assert entry.transaction_type == "GIFTCODE"
    assert entry.amount == 100
    assert entry.xp_amount == 50
    assert entry.description == "Nhập giftcode WELCOME"

    await db.refresh(gift_code)
    assert gift_code.usage_count == 1
    redemption = (await db.execute(select(GiftCodeRedemption))).scalar_one()
    assert redemption.transaction_id == entry.id


async def test_redeem_for_deleted_user(client, db, deleted_user):
    gift_code = await create_code(db)

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"})

    assert response.status_code == 404
    await db.refresh(gift_code)
    assert gift_code.usage_count == 0
    assert (await load_user(db, deleted_user.id)).diamonds == 0
    assert (await db.execute(select(GiftCodeRedemption))).scalars().all() == []
    assert (await db.execute(select(DiamondTransactionLog))).scalars().all() == []


async def test_redeem_twice_is_rejected(client, db, user, user_headers):
    await create_code(db)
    await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    assert response.status_code == 409
    await db.refresh(user)
    assert user.diamonds == 100


async def test_redeem_multiple_times_within_per_user_limit(client, db, user, user_headers):
    await create_code(db, max_per_user=2)

    first = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)
    second = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)
    third = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    assert [first.status_code, second.status_code, third.status_code] == [200, 200, 409]
    assert second.json()["newDiamonds"] == 200


async def test_redeem_unknown_code(client, user_headers):
    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "NOPE"}, headers=user_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Giftcode không tồn tại."


async def test_redeem_inactive_code(client, db, user_headers):
    await create_code(db, is_active=False)

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Giftcode đã bị vô hiệu hóa."


async def test_redeem_expired_code(client, db, user_headers):
    await create_code(db, expires_at=datetime.now(timezone.utc) - timedelta(days=1))

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Giftcode đã hết hạn."


async def test_redeem_exhausted_code(client, db, user_headers):
    await create_code(db, usage_limit=1)
    other = await make_user(db, "minh")
    await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=auth_headers(other))

    response = await client.post(f"{API}/gift-codes/redeem", json={"code": "WELCOME"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Giftcode đã hết lượt sử dụng."
