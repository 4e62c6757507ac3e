from datetime import timedelta

import pytest
from sqlalchemy import func, select

from conftest import API, TestSessionLocal, app, load_user
from src.milestones.dependencies import get_milestone_service
from src.milestones.models import MilestoneClaim
from src.milestones.service import MilestoneService, is_valid_milestone
from src.transactions.models import DiamondTransactionLog
from src.transactions.service import TransactionService


async def set_streak(db, user, days, occurrence=1):
    user.consecutive_check_in_days = days
    user.streak_occurrence_id = occurrence
    await db.commit()


async def count_rows(db, model, user_id):
    result = await db.execute(select(func.count(model.id)).where(model.user_id == user_id))
    return result.scalar()


class RivalFirstTransactions(TransactionService):
    """Lets another request commit right before this one writes"""

    def __init__(self, rival):
        self.rival = rival

    async def post_entry(self, db, **kwargs):
        if self.rival is not None:
            rival, self.rival = self.rival, None
            await rival()
        return await super().post_entry(db, **kwargs)


class FailingLogTransactions(TransactionService):
    """Balance update goes through, the log insert does not"""

    async def append(self, db, **kwargs):
        raise RuntimeError("log insert failed")


async def test_claim_seven_day_milestone(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 7)

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["newDiamonds"] == 20
    assert data["newXp"] == 50
    assert data["message"] == "Nhận thành công 20 Kim Cương & 50 XP!"

    result = await db.execute(select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id))
    entries = result.scalars().all()
    assert len(entries) == 1
    assert entries[0].transaction_type == "MILESTONE_REWARD_7"
    assert entries[0].amount == 20
    assert entries[0].xp_amount == 50
    assert entries[0].reference_key == "milestone:7:1"


async def test_claim_twice_is_rejected(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 7)
    await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Bạn đã nhận thưởng mốc này rồi."
    await db.refresh(user)
    assert user.diamonds == 20


async def test_claim_without_enough_streak(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 5)

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Bạn chưa đạt chuỗi 7 ngày."
    await db.refresh(user)
    assert user.diamonds == 0
    assert user.xp == 0


async def test_claim_invalid_threshold(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 10)

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 10}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Mốc thưởng không hợp lệ."


async def test_claim_unconfigured_milestone(client, db, user, user_headers):
    await set_streak(db, user, 14)

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 14}, headers=user_headers)

    assert response.status_code == 404


async def test_claim_again_after_streak_reset(client, db, user, user_headers, default_rewards, clock):
    await set_streak(db, user, 7, occurrence=1)
    first = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)
    assert first.status_code == 200

    # Missed days: the next check-in starts a new streak occurrence
    user.last_check_in_at = clock.now - timedelta(days=3)
    await db.commit()
    check_in = await client.post(f"{API}/check-in", headers=user_headers)
    assert check_in.json()["consecutiveDays"] == 1

    await db.refresh(user)
    assert user.streak_occurrence_id == 2
    blocked = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)
    assert blocked.status_code == 403

    # Re-reach seven days in the new occurrence
    user.consecutive_check_in_days = 7
    await db.commit()
    second = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert second.status_code == 200
    result = await db.execute(
        select(MilestoneClaim.streak_occurrence_id)
        .where(MilestoneClaim.user_id == user.id)
        .order_by(MilestoneClaim.id)
    )
    assert result.scalars().all() == [1, 2]


async def test_claim_balance_matches_logged_amounts(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 30)

    for days in (7, 14, 30):
        response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": days}, headers=user_headers)
        assert response.status_code == 200

    await db.refresh(user)
    result = await db.execute(select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id))
    entries = result.scalars().all()
    assert len(entries) == 3
    assert user.diamonds == sum(entry.amount for entry in entries) == 170
    assert user.xp == sum(entry.xp_amount for entry in entries) == 350


async def test_milestone_status(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 14)
    await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    response = await client.get(f"{API}/milestones", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["consecutiveDays"] == 14
    by_days = {m["milestoneDays"]: m for m in data["milestones"]}
    assert by_days[7]["claimed"] is True
    assert by_days[14]["reached"] is True
    assert by_days[14]["claimed"] is False
    assert by_days[30]["reached"] is False
    assert by_days[30]["diamondReward"] == 100


@pytest.mark.parametrize("body", [
    {"milestoneDays": "abc"},
    {"milestoneDays": {}},
    {"milestoneDays": True},
    {"milestoneDays": "7"},
    {"milestoneDays": None},
    {},
])
async def test_claim_malformed_threshold(client, db, user, user_headers, default_rewards, body):
    await set_streak(db, user, 30)

    response = await client.post(f"{API}/milestones/claim", json=body, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Mốc thưởng không hợp lệ."
    await db.refresh(user)
    assert user.diamonds == 0


def test_is_valid_milestone():
    assert all(is_valid_milestone(days) for days in (7, 14, 30))
    assert not any(is_valid_milestone(value) for value in (0, 10, 7.0, "7", True, None, [7]))


async def test_concurrent_claim_credits_once(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 7)

    async def rival():
        async with TestSessionLocal() as other:
            await MilestoneService().claim(user.id, 7, other)

    app.dependency_overrides[get_milestone_service] = lambda: MilestoneService(
        transaction_service=RivalFirstTransactions(rival)
    )

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "Bạn đã nhận thưởng mốc này rồi."
    await db.refresh(user)
    assert user.diamonds == 20
    assert user.xp == 50
    assert await count_rows(db, DiamondTransactionLog, user.id) == 1
    assert await count_rows(db, MilestoneClaim, user.id) == 1


async def test_failed_log_insert_writes_nothing(client, db, user, user_headers, default_rewards):
    await set_streak(db, user, 7)
    app.dependency_overrides[get_milestone_service] = lambda: MilestoneService(
        transaction_service=FailingLogTransactions()
    )

    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7}, headers=user_headers)

    assert response.status_code == 500
    await db.refresh(user)
    assert user.diamonds == 0
    assert user.xp == 0
    assert user.consecutive_check_in_days == 7
    assert await count_rows(db, DiamondTransactionLog, user.id) == 0
    assert await count_rows(db, MilestoneClaim, user.id) == 0


async def test_claim_for_deleted_user(client, db, deleted_user, default_rewards):
    response = await client.post(f"{API}/milestones/claim", json={"milestoneDays": 7})

    assert response.status_code == 404
    assert (await load_user(db, deleted_user.id)).diamonds == 0
    assert await count_rows(db, DiamondTransactionLog, deleted_user.id) == 0
    assert await count_rows(db, MilestoneClaim, deleted_user.id) == 0


async def test_milestone_status_for_deleted_user(client, deleted_user, default_rewards):
    response = await client.get(f"{API}/milestones")
    assert response.status_code == 404
