from datetime import date, time

from sqlalchemy import select

from cinema_admin.models import Screening


SCREENINGS = "/api/admin/v1/screenings"


def payload(catalog, show_time="10:00:00", end_time="12:00:00", **overrides):
    data = {
        "movie_id": catalog["movie_id"],
        "screen_id": catalog["screen_id"],
        "language_id": catalog["language_id"],
        "show_date": "2025-06-01",
        "show_time": show_time,
        "end_time": end_time,
        "base_price": 180,
    }
    data.update(overrides)
    return data


async def test_create_defaults_available_seats_to_capacity(client, admin_headers, catalog):
    response = await client.post(SCREENINGS, json=payload(catalog), headers=admin_headers)

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["available_seats"] == 10
    assert data["movie"]["original_title"] == "Test Movie"
    assert data["language"]["code"] == "en"
    assert data["is_active"] is True


async def test_overlapping_screening_conflicts(client, admin_headers, catalog):
    first = (await client.post(SCREENINGS, json=payload(catalog), headers=admin_headers)).json()["data"]

    response = await client.post(SCREENINGS, json=payload(catalog, "11:59:00", "13:00:00"), headers=admin_headers)

    assert response.status_code == 409
    assert f"screening {first['id']}" in response.json()["message"]


async def test_back_to_back_screenings_are_allowed(client, admin_headers, catalog):
    await client.post(SCREENINGS, json=payload(catalog), headers=admin_headers)

    response = await client.post(SCREENINGS, json=payload(catalog, "12:00:00", "14:00:00"), headers=admin_headers)
    assert response.status_code == 201


async def test_end_before_start_is_rejected(client, admin_headers, catalog):
    response = await client.post(SCREENINGS, json=payload(catalog, "12:00:00", "10:00:00"), headers=admin_headers)
    assert response.status_code == 400

    response = await client.post(SCREENINGS, json=payload(catalog, "12:00:00", "12:00:00"), headers=admin_headers)
    assert response.status_code == 400


async def test_unknown_references_are_rejected(client, admin_headers, catalog):
    for field in ("movie_id", "screen_id", "language_id", "subtitle_language_id"):
        response = await client.post(SCREENINGS, json=payload(catalog, **{field: 9999}), headers=admin_headers)
        assert response.status_code == 400, field


async def test_update_into_occupied_slot_conflicts(client, admin_headers, catalog, make_screening):
    await make_screening(time(10, 0), time(12, 0))
    later = await make_screening(time(12, 0), time(14, 0))

    response = await client.put(f"{SCREENINGS}/{later.id}", json={"show_time": "11:00:00"}, headers=admin_headers)
    assert response.status_code == 409

    response = await client.put(f"{SCREENINGS}/{later.id}", json={"end_time": "15:00:00"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["end_time"] == "15:00:00"


async def test_update_with_inverted_times_is_rejected(client, admin_headers, make_screening):
    screening = await make_screening(time(10, 0), time(12, 0))

    response = await client.put(f"{SCREENINGS}/{screening.id}", json={"end_time": "09:00:00"}, headers=admin_headers)
    assert response.status_code == 400


async def test_update_price_keeps_schedule(client, admin_headers, make_screening):
    screening = await make_screening(time(10, 0), time(12, 0))

    response = await client.put(f"{SCREENINGS}/{screening.id}", json={"base_price": 250}, headers=admin_headers)

    data = response.json()["data"]
    assert data["base_price"] == 250
    assert data["show_time"] == "10:00:00"


async def test_public_list_shows_bookable_screenings_in_order(client, make_screening):
    late = await make_screening(time(18, 0), time(20, 0))
    early = await make_screening(time(9, 0), time(11, 0))
    next_day = await make_screening(time(8, 0), time(10, 0), show_date=date(2025, 6, 2))
    await make_screening(time(12, 0), time(14, 0), is_active=False)
    await make_screening(time(14, 0), time(16, 0), available_seats=0)

    response = await client.get("/api/v1/screenings")

    body = response.json()
    assert body["total"] == 3
    assert [s["id"] for s in body["data"]] == [early.id, late.id, next_day.id]


async def test_public_list_filters(client, catalog, make_screening):
    await make_screening(time(9, 0), time(11, 0))
    next_day = await make_screening(time(9, 0), time(11, 0), show_date=date(2025, 6, 2))

    response = await client.get("/api/v1/screenings", params={"date": "2025-06-02"})
    assert [s["id"] for s in response.json()["data"]] == [next_day.id]

    response = await client.get("/api/v1/screenings", params={"theater_id": catalog["theater_id"]})
    assert response.json()["total"] == 2

    response = await client.get("/api/v1/screenings", params={"theater_id": 9999})
    assert response.json()["total"] == 0

    response = await client.get("/api/v1/screenings", params={"movie_id": catalog["movie_id"], "limit": 1})
    body = response.json()
    assert body["total"] == 2
    assert body["pages"] == 2
    assert len(body["data"]) == 1


async def test_soft_delete_frees_the_slot(client, admin_headers, catalog, db_session, make_screening):
    screening = await make_screening(time(10, 0), time(12, 0))

    response = await client.delete(f"{SCREENINGS}/{screening.id}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/screenings/{screening.id}")
    assert response.status_code == 404

    row = (await db_session.execute(
        select(Screening).where(Screening.id == screening.id).execution_options(populate_existing=True)
    )).scalar_one()
    assert row.deleted_at is not None

    response = await client.post(SCREENINGS, json=payload(catalog), headers=admin_headers)
    assert response.status_code == 201


async def test_screen_with_screenings_cannot_be_deleted(client, admin_headers, catalog, make_screening):
    await make_screening(time(10, 0), time(12, 0))

    response = await client.delete(f"/api/admin/v1/screens/{catalog['screen_id']}", headers=admin_headers)
    assert response.status_code == 409


async def test_screening_routes_require_admin(client, user_headers, catalog):
    response = await client.post(SCREENINGS, json=payload(catalog), headers=user_headers)
    assert response.status_code == 403
