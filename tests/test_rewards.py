from conftest import API


async def test_public_list_sorted_by_streak_length(client, admin_headers):
    for days in (30, 1, 7):
        response = await client.post(
            f"{API}/admin/check-in-rewards/",
            json={"consecutive_days": days, "diamond_reward": days, "xp_reward": 0},
            headers=admin_headers,
        )
        assert response.status_code == 201

    response = await client.get(f"{API}/rewards/check-in")

    assert response.status_code == 200
    rewards = response.json()
    assert [r["consecutive_days"] for r in rewards] == [1, 7, 30]
    assert [r["is_milestone"] for r in rewards] == [False, True, True]


async def test_duplicate_active_streak_length_conflicts(client, admin_headers, default_rewards):
    response = await client.post(
        f"{API}/admin/check-in-rewards/",
        json={"consecutive_days": 7, "diamond_reward": 99, "xp_reward": 0},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Đã có cấu hình thưởng cho mốc 7 ngày"


async def test_recreate_after_delete(client, admin_headers, default_rewards):
    seven_day = next(r for r in default_rewards if r.consecutive_days == 7)

    deleted = await client.delete(f"{API}/admin/check-in-rewards/{seven_day.id}", headers=admin_headers)
    assert deleted.status_code == 200

    created = await client.post(
        f"{API}/admin/check-in-rewards/",
        json={"consecutive_days": 7, "diamond_reward": 25, "xp_reward": 60},
        headers=admin_headers,
    )
    assert created.status_code == 201

    rewards = (await client.get(f"{API}/rewards/check-in")).json()
    seven = [r for r in rewards if r["consecutive_days"] == 7]
    assert len(seven) == 1
    assert seven[0]["diamond_reward"] == 25


async def test_delete_unknown_reward(client, admin_headers):
    response = await client.delete(f"{API}/admin/check-in-rewards/999", headers=admin_headers)
    assert response.status_code == 404


async def test_empty_reward_is_rejected(client, admin_headers):
    response = await client.post(
        f"{API}/admin/check-in-rewards/",
        json={"consecutive_days": 3, "diamond_reward": 0, "xp_reward": 0},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_non_positive_days_rejected(client, admin_headers):
    response = await client.post(
        f"{API}/admin/check-in-rewards/",
        json={"consecutive_days": 0, "diamond_reward": 5, "xp_reward": 0},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_admin_routes_forbidden_for_users(client, user_headers):
    response = await client.post(
        f"{API}/admin/check-in-rewards/",
        json={"consecutive_days": 2, "diamond_reward": 5, "xp_reward": 0},
        headers=user_headers,
    )
    assert response.status_code == 403

    listed = await client.get(f"{API}/admin/check-in-rewards/", headers=user_headers)
    assert listed.status_code == 403
