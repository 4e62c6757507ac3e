from datetime import timedelta

import pytest
from sqlalchemy import select

from conftest import API
from src.transactions.models import DiamondTransactionLog
from src.transactions.service import TransactionService
from src.transactions.exceptions import EmptyTransactionException
from src.users.models import User


async def test_history_is_newest_first(client, db, user, user_headers, clock, default_rewards):
    await client.post(f"{API}/check-in", headers=user_headers)
    clock.set(clock.now + timedelta(days=1))
    await client.post(f"{API}/check-in", headers=user_headers)
    await client.post(f"{API}/leveling/xp", json={"amount": 3}, headers=user_headers)

    response = await client.get(f"{API}/transactions/history", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 1
    types = [item["transaction_type"] for item in data["items"]]
    assert types == ["XP_GAIN", "DAILY_CHECK_IN", "DAILY_CHECK_IN"]
    assert data["items"][1]["description"] == "Điểm danh ngày thứ 2"


async def test_history_filter_by_type(client, user_headers, clock, default_rewards):
    await client.post(f"{API}/check-in", headers=user_headers)
    await client.post(f"{API}/leveling/xp", json={"minutes": 2}, headers=user_headers)

    response = await client.get(
        f"{API}/transactions/history",
        params={"transaction_type": "XP_GAIN"},
        headers=user_headers,
    )

    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["xp_amount"] == 2


async def test_history_pagination(client, user_headers):
    for _ in range(3):
        await client.post(f"{API}/leveling/xp", json={"amount": 1}, headers=user_headers)

    response = await client.get(f"{API}/transactions/history", params={"page": 2, "size": 2}, headers=user_headers)

    data = response.json()
    assert data["total"] == 3
    assert data["pages"] == 2
    assert len(data["items"]) == 1


async def test_admin_adjust_credits_and_logs(client, db, user, admin_headers):
    response = await client.post(
        f"{API}/admin/transactions/adjust",
        json={"user_id": user.id, "amount": 40, "description": "Bồi thường sự cố"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["newDiamonds"] == 40
    assert data["transaction"]["transaction_type"] == "ADMIN_ADJUSTMENT"

    history = await client.get(f"{API}/admin/transactions/users/{user.id}", headers=admin_headers)
    assert history.json()["total"] == 1


async def test_admin_adjust_cannot_go_negative(client, db, user, admin_headers):
    user.diamonds = 10
    await db.commit()

    response = await client.post(
        f"{API}/admin/transactions/adjust",
        json={"user_id": user.id, "amount": -15, "description": "Thu hồi"},
        headers=admin_headers,
    )

    assert response.status_code == 402
    await db.refresh(user)
    assert user.diamonds == 10
    result = await db.execute(select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id))
    assert result.scalars().all() == []


async def test_admin_adjust_rejects_empty_entry(client, user, admin_headers):
    response = await client.post(
        f"{API}/admin/transactions/adjust",
        json={"user_id": user.id, "amount": 0, "description": "Không đổi"},
        headers=admin_headers,
    )
    assert response.status_code == 400


async def test_admin_adjust_unknown_user(client, admin_headers):
    response = await client.post(
        f"{API}/admin/transactions/adjust",
        json={"user_id": 9999, "amount": 5, "description": "Test"},
        headers=admin_headers,
    )
    assert response.status_code == 404


async def test_user_cannot_view_other_history(client, user, user_headers):
    response = await client.get(f"{API}/admin/transactions/users/{user.id}", headers=user_headers)
    assert response.status_code == 403


async def test_post_entry_guard_blocks_stale_write(db, user):
    service = TransactionService()

    entry = await service.post_entry(
        db,
        user_id=user.id,
        amount=5,
        transaction_type="DAILY_CHECK_IN",
        conditions=(User.consecutive_check_in_days == 3,),
    )
    await db.commit()

    assert entry is None
    await db.refresh(user)
    assert user.diamonds == 0


async def test_has_entry_since(db, user):
    service = TransactionService()
    await service.post_entry(db, user_id=user.id, amount=0, xp_amount=4, transaction_type="XP_GAIN")
    await db.commit()

    entry = (await db.execute(select(DiamondTransactionLog))).scalar_one()
    assert await service.has_entry_since(db, user.id, "XP_GAIN", entry.created_at - timedelta(minutes=1))
    assert not await service.has_entry_since(db, user.id, "XP_GAIN", entry.created_at + timedelta(minutes=1))
    assert not await service.has_entry_since(db, user.id, "GIFTCODE", entry.created_at - timedelta(minutes=1))


async def test_append_rejects_zero_delta(db, user):
    with pytest.raises(EmptyTransactionException):
        await TransactionService().append(db, user_id=user.id, amount=0, transaction_type="XP_GAIN")
