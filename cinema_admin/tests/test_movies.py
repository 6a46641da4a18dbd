import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_admin.models import Genre, Language, Person


MOVIES = "/api/admin/v1/movies"


@pytest.fixture
async def refs(db_session):
    genres = (await db_session.execute(select(Genre).order_by(Genre.id))).scalars().all()
    people = (await db_session.execute(select(Person).order_by(Person.id))).scalars().all()
    languages = {lang.code: lang for lang in (await db_session.execute(select(Language))).scalars().all()}
    return {"genres": [g.id for g in genres], "people": [p.id for p in people], "languages": languages}


def movie_payload(refs, **overrides):
    data = {
        "original_title": "Vikram",
        "duration_minutes": 175,
        "release_date": "2022-06-03",
        "rating": "U/A",
        "description": "Action thriller",
        "genre_ids": refs["genres"][:2],
        "cast": [
            {"person_id": refs["people"][0], "role": "Actor", "character_name": "Agent Vikram"},
            {"person_id": refs["people"][1], "role": "Director"},
        ],
    }
    data.update(overrides)
    return data


async def create_movie(client, headers, refs, **overrides):
    response = await client.post(MOVIES, json=movie_payload(refs, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_movie_with_associations(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)

    assert movie["rating"] == "U/A"
    assert sorted(g["id"] for g in movie["genres"]) == sorted(refs["genres"][:2])
    assert {(c["person"]["id"], c["role"]) for c in movie["cast"]} == {
        (refs["people"][0], "Actor"), (refs["people"][1], "Director"),
    }
    assert movie["movie_languages"] == []


async def test_unknown_genre_or_person_is_rejected(client, admin_headers, refs):
    response = await client.post(MOVIES, json=movie_payload(refs, genre_ids=[9999]), headers=admin_headers)
    assert response.status_code == 400

    response = await client.post(MOVIES, json=movie_payload(refs, cast=[{"person_id": 9999}]), headers=admin_headers)
    assert response.status_code == 400


async def test_duplicate_cast_entry_is_rejected(client, admin_headers, refs):
    member = {"person_id": refs["people"][0], "role": "Actor"}
    response = await client.post(MOVIES, json=movie_payload(refs, cast=[member, member]), headers=admin_headers)
    assert response.status_code == 400


async def test_update_replaces_associations(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)

    response = await client.put(f"{MOVIES}/{movie['id']}", headers=admin_headers, json={
        "genre_ids": [refs["genres"][3]],
        "cast": [{"person_id": refs["people"][0], "role": "Producer"}],
    })

    data = response.json()["data"]
    assert response.status_code == 200
    assert [g["id"] for g in data["genres"]] == [refs["genres"][3]]
    assert [(c["person"]["id"], c["role"]) for c in data["cast"]] == [(refs["people"][0], "Producer")]
    assert data["original_title"] == "Vikram"


async def test_update_without_associations_keeps_them(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)

    response = await client.put(f"{MOVIES}/{movie['id']}", headers=admin_headers,
                                json={"duration_minutes": 170, "original_title": None})

    data = response.json()["data"]
    assert data["duration_minutes"] == 170
    assert data["original_title"] == "Vikram"
    assert len(data["genres"]) == 2
    assert len(data["cast"]) == 2


async def test_failed_update_keeps_genres_and_cast(client, admin_headers, refs, monkeypatch):
    movie = await create_movie(client, admin_headers, refs)

    async def failing_commit(self):
        await self.flush()
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    response = await client.put(f"{MOVIES}/{movie['id']}", headers=admin_headers, json={
        "original_title": "Vikram 2",
        "genre_ids": [refs["genres"][3]],
        "cast": [{"person_id": refs["people"][2], "role": "Producer"}],
    })
    monkeypatch.undo()
    assert response.status_code == 500

    data = (await client.get(f"{MOVIES}/{movie['id']}", headers=admin_headers)).json()["data"]
    assert data["original_title"] == "Vikram"
    assert sorted(g["id"] for g in data["genres"]) == sorted(refs["genres"][:2])
    assert {(c["person"]["id"], c["role"]) for c in data["cast"]} == {
        (refs["people"][0], "Actor"), (refs["people"][1], "Director"),
    }


async def test_movie_languages(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)
    path = f"{MOVIES}/{movie['id']}/languages"
    tamil = refs["languages"]["ta"]

    response = await client.post(path, headers=admin_headers, json={
        "language_id": tamil.id, "title": "Vikram (Tamil)", "has_audio": True,
    })
    assert response.status_code == 201
    entry = response.json()["data"]
    assert entry["language"]["code"] == "ta"

    response = await client.post(path, headers=admin_headers, json={"language_id": tamil.id, "title": "Again"})
    assert response.status_code == 409

    response = await client.post(path, headers=admin_headers, json={"language_id": 9999, "title": "Nope"})
    assert response.status_code == 400

    response = await client.put(f"{path}/{entry['id']}", headers=admin_headers, json={"has_subtitles": True})
    assert response.json()["data"]["has_subtitles"] is True
    assert response.json()["data"]["title"] == "Vikram (Tamil)"

    response = await client.get(path, headers=admin_headers)
    assert [e["id"] for e in response.json()["data"]] == [entry["id"]]

    response = await client.delete(f"{path}/{entry['id']}", headers=admin_headers)
    assert response.status_code == 200
    response = await client.get(path, headers=admin_headers)
    assert response.json()["data"] == []


async def test_localized_movie(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)
    await client.post(f"{MOVIES}/{movie['id']}/languages", headers=admin_headers, json={
        "language_id": refs["languages"]["hi"].id, "title": "Vikram (Hindi)", "description": "Hindi dub",
    })

    response = await client.get(f"/api/v1/movies/{movie['id']}", params={"lang": "hi"})
    data = response.json()["data"]
    assert data["title"] == "Vikram (Hindi)"
    assert data["description"] == "Hindi dub"
    assert data["language_code"] == "hi"

    response = await client.get(f"/api/v1/movies/{movie['id']}", params={"lang": "fr"})
    data = response.json()["data"]
    assert data["title"] == "Vikram"
    assert data["language_code"] is None


async def test_soft_delete_hides_movie(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)

    response = await client.delete(f"{MOVIES}/{movie['id']}", headers=admin_headers)
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/movies/{movie['id']}")).status_code == 404
    assert (await client.get(f"{MOVIES}/{movie['id']}", headers=admin_headers)).status_code == 404
    assert (await client.get("/api/v1/movies")).json()["total"] == 0


async def test_inactive_movie_is_admin_only(client, admin_headers, refs):
    movie = await create_movie(client, admin_headers, refs)
    await client.put(f"{MOVIES}/{movie['id']}", headers=admin_headers, json={"is_active": False})

    assert (await client.get(f"/api/v1/movies/{movie['id']}")).status_code == 404
    response = await client.get(MOVIES, headers=admin_headers)
    assert response.json()["total"] == 1
