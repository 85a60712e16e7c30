"""Transfer endpoints: propose, respond, pending and history lists."""

from httpx import AsyncClient

TASKS = "/api/v1/tasks"
TRANSFERS = "/api/v1/transfers"


async def _alice_task(client: AsyncClient, org, headers_for) -> dict:
    response = await client.post(
        TASKS,
        json={"title": "Prepare demo", "task_type": "personal", "assignee_id": org.alice},
        headers=headers_for(org.manager),
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _propose(client, org, headers_for, task_id: str, transfer_type: str) -> dict:
    response = await client.post(
        TRANSFERS,
        json={
            "task_id": task_id,
            "to_user_id": org.bob,
            "transfer_type": transfer_type,
            "reason": "Alice is on leave",
        },
        headers=headers_for(org.manager),
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_transfer_accept_reassigns_task(client, org, headers_for) -> None:
    task = await _alice_task(client, org, headers_for)
    transfer = await _propose(client, org, headers_for, task["id"], "transfer")
    assert transfer["status"] == "pending"
    assert transfer["from_user_id"] == org.alice

    pending = await client.get(f"{TRANSFERS}/pending", headers=headers_for(org.bob))
    assert [t["id"] for t in pending.json()] == [transfer["id"]]

    accepted = await client.post(
        f"{TRANSFERS}/{transfer['id']}/respond",
        json={"action": "accept"},
        headers=headers_for(org.bob),
    )
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    moved = await client.get(f"{TASKS}/{task['id']}", headers=headers_for(org.bob))
    assert moved.json()["assignee_id"] == org.bob
    assert moved.json()["previous_assignee_id"] == org.alice
    assert moved.json()["transfer_reason"] == "Alice is on leave"

    again = await client.post(
        f"{TRANSFERS}/{transfer['id']}/respond",
        json={"action": "reject", "response_reason": "too late"},
        headers=headers_for(org.bob),
    )
    assert again.status_code == 409


async def test_reject_without_reason_is_400(client, org, headers_for) -> None:
    task = await _alice_task(client, org, headers_for)
    transfer = await _propose(client, org, headers_for, task["id"], "delegation")
    response = await client.post(
        f"{TRANSFERS}/{transfer['id']}/respond",
        json={"action": "reject"},
        headers=headers_for(org.bob),
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "response_reason"}


async def test_only_recipient_may_respond(client, org, headers_for) -> None:
    task = await _alice_task(client, org, headers_for)
    transfer = await _propose(client, org, headers_for, task["id"], "delegation")
    response = await client.post(
        f"{TRANSFERS}/{transfer['id']}/respond",
        json={"action": "accept"},
        headers=headers_for(org.alice),
    )
    assert response.status_code == 403


async def test_invalid_transfer_type_is_422(client, org, headers_for) -> None:
    task = await _alice_task(client, org, headers_for)
    response = await client.post(
        TRANSFERS,
        json={"task_id": task["id"], "to_user_id": org.bob, "transfer_type": "handover"},
        headers=headers_for(org.manager),
    )
    assert response.status_code == 422


async def test_history_lists_both_sides(client, org, headers_for) -> None:
    task = await _alice_task(client, org, headers_for)
    transfer = await _propose(client, org, headers_for, task["id"], "delegation")
    for user_id in (org.alice, org.bob, org.manager):
        response = await client.get(f"{TRANSFERS}/history", headers=headers_for(user_id))
        assert [t["id"] for t in response.json()] == [transfer["id"]]
    carol = await client.get(f"{TRANSFERS}/history", headers=headers_for(org.carol))
    assert carol.json() == []
