import pytest

from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.user_repository import UserRepository
from coursehub.services.rating_service import RatingService


def test_rating_upsert_keeps_a_single_entry(client, db, make_user, make_course, auth):
    course_id = make_course()
    make_user("u1", enrolled=[course_id])
    headers = auth("u1")

    first = client.post("/api/user/add-rating", json={"courseId": course_id, "rating": 3}, headers=headers)
    second = client.post("/api/user/add-rating", json={"courseId": course_id, "rating": 5}, headers=headers)

    assert first.json() == {"success": True, "message": "Rating added successfully"}
    assert second.json()["success"] is True
    ratings = db["courses"].find_one({})["courseRatings"]
    assert ratings == [{"userId": "u1", "rating": 5}]


def test_ratings_from_different_users_are_kept(client, db, make_user, make_course, auth):
    course_id = make_course()
    make_user("u1", enrolled=[course_id])
    make_user("u2", enrolled=[course_id])

    client.post("/api/user/add-rating", json={"courseId": course_id, "rating": 2}, headers=auth("u1"))
    client.post("/api/user/add-rating", json={"courseId": course_id, "rating": 4}, headers=auth("u2"))

    ratings = db["courses"].find_one({})["courseRatings"]
    assert sorted(r["rating"] for r in ratings) == [2, 4]


@pytest.mark.parametrize("rating", [0, 6])
def test_out_of_range_rating_is_rejected(client, db, make_user, make_course, auth, rating):
    course_id = make_course()
    make_user("u1", enrolled=[course_id])

    body = client.post("/api/user/add-rating", json={"courseId": course_id, "rating": rating}, headers=auth("u1")).json()

    assert body["success"] is False
    assert body["message"].startswith("Invalid details")
    assert db["courses"].find_one({})["courseRatings"] == []


def test_rating_requires_enrollment(client, db, make_user, make_course, auth):
    course_id = make_course()
    make_user("u1")

    body = client.post("/api/user/add-rating", json={"courseId": course_id, "rating": 4}, headers=auth("u1")).json()

    assert body == {"success": False, "message": "You are not enrolled in this course"}
    assert db["courses"].find_one({})["courseRatings"] == []


def test_rating_unknown_course(client, make_user, auth):
    make_user("u1")

    body = client.post("/api/user/add-rating",
                       json={"courseId": "64b000000000000000000000", "rating": 4}, headers=auth("u1")).json()

    assert body == {"success": False, "message": "Course not found"}


@pytest.mark.parametrize("rating", [0, 6, 2.5, True, None])
def test_service_validates_rating_directly(db, make_user, make_course, rating):
    course_id = make_course()
    make_user("u1", enrolled=[course_id])
    svc = RatingService(courses=MongoRepository("courses", db), users=UserRepository(db))

    with pytest.raises(ValueError, match="Invalid details"):
        svc.add_rating("u1", course_id, rating)
