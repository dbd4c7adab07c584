"""Tests for workout session, set and exercise API endpoints."""

from datetime import datetime

from httpx import AsyncClient

from gymjournal.models.routine import Routine
from gymjournal.models.workout import WorkoutSession
from tests.conftest import OTHER_USER_ID, USER_ID, test_session

BENCH = 10


async def _start(client: AsyncClient, **body: object) -> dict:
    response = await client.post("/api/workouts", json=body)
    assert response.status_code == 201
    return response.json()


async def _add_set(client: AsyncClient, session_id: int, **body: object) -> dict:
    payload = {"exercise_id": BENCH, "exercise_name": "Bench Press"} | body
    response = await client.post(f"/api/workouts/{session_id}/sets", json=payload)
    assert response.status_code == 201
    return response.json()


async def _other_users_session() -> WorkoutSession:
    async with test_session() as session:
        workout = WorkoutSession(
            user_id=OTHER_USER_ID, name="Not mine", started_at=datetime(2025, 1, 1, 9, 0)
        )
        session.add(workout)
        await session.commit()
        return workout


def _sets_by_id(session_data: dict) -> dict[int, dict]:
    return {s["id"]: s for group in session_data["exercises"] for s in group["sets"]}


# ── POST /api/workouts ──────────────────────────────────────────────


async def test_start_session_with_default_name(client: AsyncClient) -> None:
    data = await _start(client)
    assert data["name"] == f"Free Workout - {datetime.utcnow().date().isoformat()}"
    assert data["status"] == "IN_PROGRESS"
    assert data["completed_at"] is None
    assert data["exercises"] == []
    assert data["routine_id"] is None
    assert data["routine_name"] == ""


async def test_start_session_with_name(client: AsyncClient) -> None:
    data = await _start(client, name="  Push day ", started_at="2025-01-10T08:00:00")
    assert data["name"] == "Push day"
    assert data["started_at"] == "2025-01-10T08:00:00"


async def _routine(owner: str, is_public: bool = False) -> Routine:
    async with test_session() as session:
        routine = Routine(
            name="Push",
            items=[
                {
                    "order": 0,
                    "item_type": "EXERCISE",
                    "exercise_id": BENCH,
                    "exercise_name": "Bench Press",
                    "sets": 3,
                    "reps_per_set": 8,
                    "weight_kg": "80",
                },
                {"order": 0, "item_type": "REST", "duration_seconds": 90},
                {"order": 0, "item_type": "CARDIO", "cardio_name": "Bike", "duration_minutes": 10},
            ],
            is_public=is_public,
            created_by=owner,
        )
        session.add(routine)
        await session.commit()
        return routine


async def test_start_session_from_routine(client: AsyncClient) -> None:
    routine = await _routine(USER_ID)
    data = await _start(client, routine_id=routine.id)

    assert data["name"] == f"Push - {datetime.utcnow().date().isoformat()}"
    assert data["routine_id"] == routine.id
    assert data["routine_name"] == "Push"
    groups = data["exercises"]
    assert [g["item_type"] for g in groups] == ["EXERCISE", "REST", "CARDIO"]
    assert [g["order_in_session"] for g in groups] == [1, 2, 3]

    bench = groups[0]["sets"]
    assert [s["set_number"] for s in bench] == [1, 2, 3]
    assert {s["planned_reps"] for s in bench} == {8}
    assert {s["planned_weight_kg"] for s in bench} == {"80"}
    assert groups[1]["sets"][0]["duration_seconds"] == 90
    assert groups[2]["exercise_name"] == "Bike"
    assert groups[2]["sets"][0]["duration_seconds"] == 600


async def test_start_session_from_routine_keeps_given_name(client: AsyncClient) -> None:
    routine = await _routine(OTHER_USER_ID, is_public=True)
    data = await _start(client, routine_id=routine.id, name="Heavy push")
    assert data["name"] == "Heavy push"
    assert data["routine_name"] == "Push"


async def test_start_session_from_private_routine_forbidden(client: AsyncClient) -> None:
    routine = await _routine(OTHER_USER_ID)
    response = await client.post("/api/workouts", json={"routine_id": routine.id})
    assert response.status_code == 403


async def test_start_session_from_missing_routine(client: AsyncClient) -> None:
    response = await client.post("/api/workouts", json={"routine_id": 999})
    assert response.status_code == 404

    response = await client.get("/api/workouts")
    assert response.json()["total"] == 0


# ── GET /api/workouts ───────────────────────────────────────────────


async def test_list_sessions_newest_first(client: AsyncClient) -> None:
    await _start(client, name="Old", started_at="2025-01-01T08:00:00")
    await _start(client, name="New", started_at="2025-01-03T08:00:00")
    await _start(client, name="Mid", started_at="2025-01-02T08:00:00")
    await _other_users_session()

    response = await client.get("/api/workouts", params={"per_page": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["per_page"] == 2
    assert [s["name"] for s in data["items"]] == ["New", "Mid"]

    response = await client.get("/api/workouts", params={"per_page": 2, "page": 2})
    assert [s["name"] for s in response.json()["items"]] == ["Old"]


async def test_list_sessions_by_status(client: AsyncClient) -> None:
    done = await _start(client, name="Done")
    await _start(client, name="Open")
    await client.post(f"/api/workouts/{done['id']}/complete")

    response = await client.get("/api/workouts", params={"status": "completed"})
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Done"


async def test_list_sessions_invalid_status(client: AsyncClient) -> None:
    response = await client.get("/api/workouts", params={"status": "paused"})
    assert response.status_code == 422


# ── GET / PATCH / DELETE /api/workouts/{id} ─────────────────────────


async def test_get_session_groups_sets_by_slot(client: AsyncClient) -> None:
    workout = await _start(client)
    await _add_set(client, workout["id"], order_in_session=1, set_number=1)
    await _add_set(client, workout["id"], order_in_session=1, set_number=2)
    await _add_set(
        client, workout["id"], item_type="rest", exercise_id=0, exercise_name="",
        order_in_session=2, duration_seconds=90,
    )

    response = await client.get(f"/api/workouts/{workout['id']}")
    assert response.status_code == 200
    groups = response.json()["exercises"]
    assert [g["item_type"] for g in groups] == ["EXERCISE", "REST"]
    assert [s["set_number"] for s in groups[0]["sets"]] == [1, 2]
    assert groups[1]["sets"][0]["duration_seconds"] == 90


async def test_get_session_not_found(client: AsyncClient) -> None:
    response = await client.get("/api/workouts/999")
    assert response.status_code == 404


async def test_get_session_of_other_user_is_forbidden(client: AsyncClient) -> None:
    workout = await _other_users_session()
    response = await client.get(f"/api/workouts/{workout.id}")
    assert response.status_code == 403


async def test_patch_session(client: AsyncClient) -> None:
    workout = await _start(client, name="Legs")
    response = await client.patch(
        f"/api/workouts/{workout['id']}", json={"notes": "Knee felt fine"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Legs"
    assert data["notes"] == "Knee felt fine"


async def test_delete_session(client: AsyncClient) -> None:
    workout = await _start(client)
    await _add_set(client, workout["id"])

    response = await client.delete(f"/api/workouts/{workout['id']}")
    assert response.status_code == 204

    response = await client.get(f"/api/workouts/{workout['id']}")
    assert response.status_code == 404


# ── Sets ────────────────────────────────────────────────────────────


async def test_add_set(client: AsyncClient) -> None:
    workout = await _start(client)
    data = await _add_set(client, workout["id"], planned_reps=5, planned_weight_kg="60")
    assert data["session_id"] == workout["id"]
    assert data["item_type"] == "EXERCISE"
    assert data["planned_reps"] == 5
    assert data["actual_reps"] == 0
    assert data["is_personal_best"] is False


async def test_add_set_invalid_item_type(client: AsyncClient) -> None:
    workout = await _start(client)
    response = await client.post(
        f"/api/workouts/{workout['id']}/sets", json={"item_type": "SUPERSET"}
    )
    assert response.status_code == 422


async def test_add_set_to_other_users_session_is_forbidden(client: AsyncClient) -> None:
    workout = await _other_users_session()
    response = await client.post(f"/api/workouts/{workout.id}/sets", json={"exercise_id": 1})
    assert response.status_code == 403


async def test_update_set(client: AsyncClient) -> None:
    workout = await _start(client)
    workout_set = await _add_set(client, workout["id"], planned_reps=5)

    response = await client.put(
        f"/api/workouts/{workout['id']}/sets/{workout_set['id']}",
        json={"actual_reps": 5, "actual_weight_kg": "62.5", "rpe": 8},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["actual_reps"] == 5
    assert data["actual_weight_kg"] == "62.5"
    assert data["rpe"] == 8
    assert data["planned_reps"] == 5


async def test_update_set_in_wrong_session(client: AsyncClient) -> None:
    first = await _start(client)
    second = await _start(client)
    workout_set = await _add_set(client, first["id"])

    response = await client.put(
        f"/api/workouts/{second['id']}/sets/{workout_set['id']}", json={"actual_reps": 1}
    )
    assert response.status_code == 404


async def test_delete_set(client: AsyncClient) -> None:
    workout = await _start(client)
    workout_set = await _add_set(client, workout["id"])

    response = await client.delete(f"/api/workouts/{workout['id']}/sets/{workout_set['id']}")
    assert response.status_code == 204

    response = await client.get(f"/api/workouts/{workout['id']}")
    assert response.json()["exercises"] == []


# ── POST /api/workouts/{id}/complete ────────────────────────────────


async def _performed(
    client: AsyncClient, session_id: int, reps: int, weight: str, at: str
) -> dict:
    return await _add_set(
        client, session_id, actual_reps=reps, actual_weight_kg=weight, completed_at=at
    )


async def test_complete_flags_personal_bests(client: AsyncClient) -> None:
    first = await _start(client, started_at="2025-01-01T08:00:00")
    heavy_eight = await _performed(client, first["id"], 8, "50", "2025-01-01T08:10:00")
    heavy_five = await _performed(client, first["id"], 5, "60", "2025-01-01T08:20:00")

    response = await client.post(f"/api/workouts/{first['id']}/complete")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "COMPLETED"
    assert data["completed_at"] is not None
    flags = {i: s["is_personal_best"] for i, s in _sets_by_id(data).items()}
    assert flags == {heavy_eight["id"]: True, heavy_five["id"]: True}

    second = await _start(client, started_at="2025-01-08T08:00:00")
    better = await _performed(client, second["id"], 5, "65", "2025-01-08T08:10:00")
    worse = await _performed(client, second["id"], 5, "55", "2025-01-08T08:20:00")
    skipped = await _add_set(client, second["id"], planned_reps=5, planned_weight_kg="100")
    bodyweight = await _add_set(
        client, second["id"], exercise_id=20, exercise_name="Pull-up",
        actual_reps=10, actual_weight_kg="0", completed_at="2025-01-08T08:30:00",
    )

    response = await client.post(f"/api/workouts/{second['id']}/complete")
    flags = {i: s["is_personal_best"] for i, s in _sets_by_id(response.json()).items()}
    assert flags == {
        better["id"]: True,
        worse["id"]: False,
        skipped["id"]: False,
        bodyweight["id"]: False,
    }


async def test_complete_is_idempotent(client: AsyncClient) -> None:
    workout = await _start(client)
    await _performed(client, workout["id"], 5, "60", "2025-01-01T08:10:00")

    first = (await client.post(f"/api/workouts/{workout['id']}/complete")).json()
    second = (await client.post(f"/api/workouts/{workout['id']}/complete")).json()

    assert second["completed_at"] == first["completed_at"]
    assert second["exercises"] == first["exercises"]


async def test_complete_other_users_session_is_forbidden(client: AsyncClient) -> None:
    workout = await _other_users_session()
    response = await client.post(f"/api/workouts/{workout.id}/complete")
    assert response.status_code == 403


# ── GET /api/exercises/{id}/history & /pbs ──────────────────────────


async def test_exercise_history_and_personal_bests(client: AsyncClient) -> None:
    first = await _start(client)
    await _performed(client, first["id"], 8, "50", "2025-01-01T08:10:00")
    await _performed(client, first["id"], 5, "60", "2025-01-01T08:20:00")
    second = await _start(client)
    await _performed(client, second["id"], 5, "65", "2025-01-08T08:10:00")
    await _performed(client, second["id"], 5, "55", "2025-01-08T08:20:00")
    await _add_set(client, second["id"], planned_reps=5)  # never completed

    response = await client.get(f"/api/exercises/{BENCH}/history", params={"per_page": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert [s["actual_weight_kg"] for s in data["items"]] == ["55", "65"]

    response = await client.get(f"/api/exercises/{BENCH}/pbs")
    assert response.status_code == 200
    pbs = response.json()
    assert [(s["actual_reps"], s["actual_weight_kg"]) for s in pbs] == [(8, "50"), (5, "65")]


async def test_exercise_history_empty(client: AsyncClient) -> None:
    response = await client.get("/api/exercises/42/history")
    assert response.json() == {"items": [], "total": 0, "page": 1, "per_page": 50}

    response = await client.get("/api/exercises/42/pbs")
    assert response.json() == []
