"""
Shared fixtures. mongomock and fakeredis are injected into the database module
before the application is imported, so every module-level service binds to them.
"""
import uuid
from datetime import datetime, timedelta

import fakeredis
import mongomock
import pytest
from bson import ObjectId

from coursehub.config import database

_mongo = mongomock.MongoClient()["coursehub_test"]
_redis = fakeredis.FakeRedis()
database.set_mongo_db(_mongo)
database.set_redis_client(_redis)

from fastapi.testclient import TestClient  # noqa: E402

import main  # noqa: E402
from tests.sample_data import sample_content  # noqa: E402


@pytest.fixture
def db():
    yield _mongo
    for name in _mongo.list_collection_names():
        _mongo[name].delete_many({})


@pytest.fixture
def redis_client():
    yield _redis
    _redis.flushall()


@pytest.fixture
def client(db, redis_client):
    return TestClient(main.app)


@pytest.fixture
def make_user(db):
    def _make(user_id=None, name="Ada Student", role="student", enrolled=None):
        user_id = user_id or f"user_{uuid.uuid4().hex[:8]}"
        doc = {
            "_id": user_id,
            "name": name,
            "email": f"{user_id}@example.com",
            "imageUrl": f"https://img.example.com/{user_id}.png",
            "enrolledCourses": list(enrolled or []),
            "role": role,
            "createdAt": datetime.utcnow(),
            "updatedAt": datetime.utcnow(),
        }
        db["users"].insert_one(doc)
        return doc
    return _make


@pytest.fixture
def make_course(db):
    def _make(educator="edu_1", price=100, discount=20, published=True, title="Python from zero",
              content=None, ratings=None):
        doc = {
            "_id": ObjectId(),
            "courseTitle": title,
            "courseDescription": "<p>Learn it</p>",
            "coursePrice": price,
            "discount": discount,
            "courseThumbnail": "https://img.example.com/thumb.png",
            "isPublished": published,
            "educator": educator,
            "courseContent": sample_content() if content is None else content,
            "courseRatings": list(ratings or []),
            "enrolledStudents": ["someone"],
            "createdAt": datetime.utcnow(),
            "updatedAt": datetime.utcnow(),
        }
        db["courses"].insert_one(doc)
        return str(doc["_id"])
    return _make


@pytest.fixture
def make_purchase(db):
    def _make(user_id, course_id, amount, status="completed", minutes_ago=0):
        created = datetime.utcnow() - timedelta(minutes=minutes_ago)
        res = db["purchases"].insert_one({
            "courseId": course_id,
            "userId": user_id,
            "amount": amount,
            "status": status,
            "createdAt": created,
            "updatedAt": created,
        })
        return str(res.inserted_id)
    return _make


@pytest.fixture
def auth(redis_client):
    """Returns Authorization headers for a user by seeding the session cache."""
    def _auth(user_id):
        token = f"tok_{uuid.uuid4().hex}"
        redis_client.set(f"session:{token}", user_id, ex=300)
        return {"Authorization": f"Bearer {token}"}
    return _auth
