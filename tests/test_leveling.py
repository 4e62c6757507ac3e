from datetime import timedelta

import pytest
from sqlalchemy import func, select

from conftest import API, app, load_user
from src.leveling.dependencies import get_leveling_service
from src.leveling.exceptions import InvalidXpAmountException
from src.leveling.service import LevelingService
from src.leveling.utils import level_for_xp, level_progress, xp_for_level
from src.transactions.constants import XP_GAIN
from src.transactions.models import DiamondTransactionLog
from src.transactions.service import TransactionService
from src.users.exceptions import UserNotFoundException
from src.utils.local_time import utc_now


@pytest.mark.parametrize("xp,level", [
    (0, 1),
    (99, 1),
    (100, 2),
    (250, 3),
    (999, 10),
    (1000, 11),
])
def test_level_for_xp(xp, level):
    assert level_for_xp(xp) == level


def test_level_for_negative_xp_clamps_to_one():
    assert level_for_xp(-50) == 1


def test_level_is_monotonic():
    levels = [level_for_xp(xp) for xp in range(0, 2000, 7)]
    assert levels == sorted(levels)


def test_level_progress():
    progress = level_progress(250)
    assert progress.level == 3
    assert progress.level_start_xp == 200
    assert progress.next_level_xp == 300
    assert progress.xp_into_level == 50
    assert progress.xp_to_next_level == 50
    assert xp_for_level(1) == 0


async def test_get_my_level(client, db, user, user_headers):
    user.xp = 180
    await db.commit()

    response = await client.get(f"{API}/leveling/me", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["level"] == 2
    assert data["xpIntoLevel"] == 80
    assert data["xpToNextLevel"] == 20


async def test_increment_xp_by_minutes_is_logged(client, db, user, user_headers):
    response = await client.post(f"{API}/leveling/xp", json={"minutes": 5}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["xpAdded"] == 5
    assert data["newXp"] == 5
    assert data["level"] == 1

    result = await db.execute(
        select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id)
    )
    entries = result.scalars().all()
    assert len(entries) == 1
    assert entries[0].transaction_type == XP_GAIN
    assert entries[0].amount == 0
    assert entries[0].xp_amount == 5


async def count_xp_rows(db, user_id):
    result = await db.execute(
        select(func.count(DiamondTransactionLog.id)).where(
            DiamondTransactionLog.user_id == user_id,
            DiamondTransactionLog.transaction_type == XP_GAIN,
        )
    )
    return result.scalar()


class NoRowTransactions(TransactionService):
    """Guarded update that never matches a row"""

    async def post_entry(self, db, **kwargs):
        return None


async def test_increment_xp_level_up(client, db, user, user_headers):
    user.xp = 99
    await db.commit()

    response = await client.post(f"{API}/leveling/xp", json={"minutes": 1}, headers=user_headers)

    data = response.json()
    assert data["newXp"] == 100
    assert data["level"] == 2
    assert data["leveledUp"] is True


async def test_increment_xp_minutes_are_clamped(client, user_headers):
    response = await client.post(f"{API}/leveling/xp", json={"minutes": 30}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["xpAdded"] == 5


async def test_increment_xp_defaults_to_one_minute(client, user_headers):
    response = await client.post(f"{API}/leveling/xp", json={}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["xpAdded"] == 1


async def test_increment_xp_ignores_client_amount(client, db, user, user_headers):
    responses = [
        await client.post(f"{API}/leveling/xp", json={"amount": 600}, headers=user_headers)
        for _ in range(5)
    ]

    assert responses[0].status_code == 200
    assert responses[0].json()["xpAdded"] == 1
    assert [r.status_code for r in responses[1:]] == [429] * 4
    await db.refresh(user)
    assert user.xp == 1
    assert await count_xp_rows(db, user.id) == 1


async def test_increment_xp_cooldown(client, db, user, user_headers):
    await client.post(f"{API}/leveling/xp", json={"minutes": 5}, headers=user_headers)

    response = await client.post(f"{API}/leveling/xp", json={"minutes": 5}, headers=user_headers)

    assert response.status_code == 429
    assert response.json()["detail"] == "Bạn vừa nhận XP, vui lòng thử lại sau 240 giây"
    await db.refresh(user)
    assert user.xp == 5


async def test_increment_xp_after_cooldown(client, db, user, user_headers):
    await client.post(f"{API}/leveling/xp", json={"minutes": 5}, headers=user_headers)
    app.dependency_overrides[get_leveling_service] = lambda: LevelingService(
        clock=lambda: utc_now() + timedelta(minutes=10)
    )

    response = await client.post(f"{API}/leveling/xp", json={"minutes": 5}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["newXp"] == 10
    assert await count_xp_rows(db, user.id) == 2


async def test_increment_xp_rejects_zero(client, user_headers):
    response = await client.post(f"{API}/leveling/xp", json={"minutes": 0}, headers=user_headers)
    assert response.status_code == 422


@pytest.mark.parametrize("minutes", [0, -3, None])
def test_resolve_xp_delta_rejects_non_positive(minutes):
    with pytest.raises(InvalidXpAmountException):
        LevelingService.resolve_xp_delta(minutes)


async def test_increment_xp_for_deleted_user(client, db, deleted_user):
    response = await client.post(f"{API}/leveling/xp", json={"minutes": 5})

    assert response.status_code == 404
    assert (await load_user(db, deleted_user.id)).xp == 0
    assert await count_xp_rows(db, deleted_user.id) == 0


async def test_my_level_for_deleted_user(client, deleted_user):
    response = await client.get(f"{API}/leveling/me")
    assert response.status_code == 404


async def test_increment_xp_when_user_row_vanishes(db, user):
    service = LevelingService(transaction_service=NoRowTransactions())

    with pytest.raises(UserNotFoundException):
        await service.increment_xp(user.id, db, minutes=5)

    assert (await load_user(db, user.id)).xp == 0
    assert await count_xp_rows(db, user.id) == 0
