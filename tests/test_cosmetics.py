from types import SimpleNamespace

from sqlalchemy import select

from conftest import API
from src.cosmetics.constants import UnlockCondition
from src.cosmetics.models import UserInventoryItem
from src.cosmetics.service import evaluate_unlock
from src.transactions.models import DiamondTransactionLog


def fake_user(**fields):
    values = dict(level=1, xp=0, diamonds=0, creation_count=0, consecutive_check_in_days=0)
    values.update(fields)
    return SimpleNamespace(**values)


def test_evaluate_unlock_without_condition():
    assert evaluate_unlock(None, fake_user()) == (True, [])


def test_evaluate_unlock_reports_every_missing_requirement():
    condition = UnlockCondition(level=5, streak=7, creation_count=10)
    unlocked, missing = evaluate_unlock(condition, fake_user(level=6, consecutive_check_in_days=3))

    assert unlocked is False
    assert missing == ["creation_count 10", "streak 7"]


def test_evaluate_unlock_all_met():
    condition = UnlockCondition(level=2, diamonds=100)
    assert evaluate_unlock(condition, fake_user(level=2, diamonds=150)) == (True, [])


async def test_list_cosmetics(client, db, user, user_headers):
    user.xp = 450  # level 5
    await db.commit()

    response = await client.get(f"{API}/cosmetics", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["level"] == 5
    items = {item["id"]: item for item in data["items"]}
    assert items["neon-blue"]["unlocked"] is True
    assert items["neon-pink"]["unlocked"] is False
    assert items["neon-pink"]["missingRequirements"] == ["level 10"]
    assert items["shop-frame-01"]["price"] == 50
    assert items["shop-frame-01"]["owned"] is False


async def test_purchase_debits_and_logs_negative_amount(client, db, user, user_headers):
    user.diamonds = 120
    await db.commit()

    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-frame-01"}, headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["newDiamonds"] == 70
    assert data["message"] == 'Mua "Neon Cyan" thành công!'

    entry = (await db.execute(
        select(DiamondTransactionLog).where(DiamondTransactionLog.user_id == user.id)
    )).scalar_one()
    assert entry.transaction_type == "SHOP_PURCHASE"
    assert entry.amount == -50
    assert entry.description == "Mua vật phẩm: Neon Cyan"

    owned = (await db.execute(
        select(UserInventoryItem.item_id).where(UserInventoryItem.user_id == user.id)
    )).scalars().all()
    assert owned == ["shop-frame-01"]


async def test_purchase_insufficient_diamonds(client, db, user, user_headers):
    user.diamonds = 10
    await db.commit()

    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-frame-01"}, headers=user_headers)

    assert response.status_code == 402
    await db.refresh(user)
    assert user.diamonds == 10


async def test_purchase_level_locked(client, db, user, user_headers):
    user.diamonds = 1000
    await db.commit()

    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-frame-04"}, headers=user_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Bạn cần đạt cấp độ 10 để mua vật phẩm này."


async def test_purchase_twice(client, db, user, user_headers):
    user.diamonds = 200
    await db.commit()
    await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-title-10"}, headers=user_headers)

    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-title-10"}, headers=user_headers)

    assert response.status_code == 400
    await db.refresh(user)
    assert user.diamonds == 180


async def test_purchase_unknown_item(client, user_headers):
    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "nope"}, headers=user_headers)
    assert response.status_code == 404


async def test_purchase_earned_item_is_not_for_sale(client, user_headers):
    response = await client.post(f"{API}/cosmetics/purchase", json={"itemId": "neon-blue"}, headers=user_headers)
    assert response.status_code == 400


async def test_equip_unlocked_frame_and_owned_title(client, db, user, user_headers):
    user.xp = 150  # level 2
    user.diamonds = 50
    await db.commit()
    await client.post(f"{API}/cosmetics/purchase", json={"itemId": "shop-title-10"}, headers=user_headers)

    frame = await client.post(f"{API}/cosmetics/equip", json={"itemId": "wood-basic"}, headers=user_headers)
    title = await client.post(f"{API}/cosmetics/equip", json={"itemId": "shop-title-10"}, headers=user_headers)

    assert frame.status_code == 200
    assert title.status_code == 200
    assert title.json()["equippedFrameId"] == "wood-basic"
    assert title.json()["equippedTitleId"] == "shop-title-10"


async def test_equip_locked_item(client, user_headers):
    locked = await client.post(f"{API}/cosmetics/equip", json={"itemId": "mythic-fire"}, headers=user_headers)
    not_owned = await client.post(f"{API}/cosmetics/equip", json={"itemId": "shop-frame-02"}, headers=user_headers)

    assert locked.status_code == 403
    assert not_owned.status_code == 403
