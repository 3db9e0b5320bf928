import io
import json

from coursehub.utils import media


def _course_payload():
    return {
        "courseTitle": "Data Engineering",
        "courseDescription": "<p>Pipelines</p>",
        "coursePrice": 50,
        "discount": 10,
        "isPublished": True,
        "courseContent": [
            {"chapterTitle": "Intro", "chapterContent": [
                {"lectureTitle": "Hello", "lectureDuration": 12, "lectureUrl": "https://v.example.com/1", "isPreviewFree": True},
                {"lectureTitle": "Tools", "lectureDuration": 8, "lectureUrl": "https://v.example.com/2"},
            ]},
        ],
    }


def test_update_role_to_educator(client, db, make_user, auth):
    make_user("u1")

    body = client.get("/api/educator/update-role", headers=auth("u1")).json()

    assert body == {"success": True, "message": "You can publish a course now"}
    assert db["users"].find_one({"_id": "u1"})["role"] == "educator"


def test_educator_routes_reject_students(client, make_user, auth):
    make_user("u1")

    res = client.get("/api/educator/dashboard", headers=auth("u1"))

    assert res.status_code == 403


def test_add_course_uploads_thumbnail_and_stores_course(client, db, make_user, auth, monkeypatch):
    make_user("edu_1", role="educator")
    uploaded = []

    def fake_upload(file):
        uploaded.append(file.read())
        return "https://res.cloudinary.com/demo/thumb.png"

    monkeypatch.setattr(media, "upload_thumbnail", fake_upload)

    res = client.post(
        "/api/educator/add-course",
        data={"courseData": json.dumps(_course_payload())},
        files={"image": ("thumb.png", io.BytesIO(b"png-bytes"), "image/png")},
        headers=auth("edu_1"),
    )

    body = res.json()
    assert body["success"] is True and body["message"] == "Course Added"
    assert uploaded == [b"png-bytes"]
    stored = db["courses"].find_one({})
    assert stored["educator"] == "edu_1"
    assert stored["courseThumbnail"] == "https://res.cloudinary.com/demo/thumb.png"
    lectures = stored["courseContent"][0]["chapterContent"]
    assert [l["lectureOrder"] for l in lectures] == [1, 2]
    assert stored["courseContent"][0]["chapterOrder"] == 1


def test_add_course_without_thumbnail(client, db, make_user, auth):
    make_user("edu_1", role="educator")

    body = client.post(
        "/api/educator/add-course",
        data={"courseData": json.dumps(_course_payload())},
        headers=auth("edu_1"),
    ).json()

    assert body == {"success": False, "message": "Thumbnail Not Attached"}
    assert db["courses"].count_documents({}) == 0


def test_add_course_with_invalid_data(client, db, make_user, auth, monkeypatch):
    make_user("edu_1", role="educator")
    monkeypatch.setattr(media, "upload_thumbnail", lambda f: "https://res.cloudinary.com/demo/x.png")
    payload = _course_payload()
    payload["discount"] = 150

    body = client.post(
        "/api/educator/add-course",
        data={"courseData": json.dumps(payload)},
        files={"image": ("thumb.png", io.BytesIO(b"x"), "image/png")},
        headers=auth("edu_1"),
    ).json()

    assert body["success"] is False
    assert body["message"].startswith("Invalid course data: discount")
    assert db["courses"].count_documents({}) == 0


def test_dashboard_totals_and_recent_enrollments(client, make_user, make_course, make_purchase, auth):
    make_user("edu_1", role="educator")
    make_user("s1", name="First Student")
    make_user("s2", name="Second Student")
    mine = make_course(educator="edu_1", title="Mine")
    other = make_course(educator="edu_2", title="Not mine")

    make_purchase("s1", mine, 80.0, minutes_ago=30)
    make_purchase("s2", mine, 80.0, minutes_ago=5)
    make_purchase("s2", mine, 80.0, status="pending")
    make_purchase("s1", other, 40.0)
    for i in range(12):
        make_purchase("s1", mine, 1.5, minutes_ago=100 + i)

    data = client.get("/api/educator/dashboard", headers=auth("edu_1")).json()["dashboardData"]

    assert data["totalCourses"] == 1
    assert data["totalEarnings"] == 178.0
    recent = data["enrolledStudentsData"]
    assert len(recent) == 10
    assert recent[0] == {
        "courseTitle": "Mine",
        "student": {"_id": "s2", "name": "Second Student", "imageUrl": "https://img.example.com/s2.png"},
    }
    assert recent[1]["student"]["_id"] == "s1"


def test_courses_with_stats(client, make_user, make_course, make_purchase, auth):
    make_user("edu_1", role="educator")
    popular = make_course(educator="edu_1", title="Popular")
    quiet = make_course(educator="edu_1", title="Quiet")
    make_purchase("s1", popular, 80.0)
    make_purchase("s2", popular, 72.5)
    make_purchase("s3", popular, 80.0, status="failed")

    courses = client.get("/api/educator/courses", headers=auth("edu_1")).json()["courses"]

    stats = {c["_id"]: c["purchaseStats"] for c in courses}
    assert stats[popular] == {"totalEarnings": 152.5, "enrollmentCount": 2}
    assert stats[quiet] == {"totalEarnings": 0, "enrollmentCount": 0}


def test_enrolled_students(client, make_user, make_course, make_purchase, auth):
    make_user("edu_1", role="educator")
    make_user("s1", name="First Student")
    course_id = make_course(educator="edu_1", title="Mine")
    make_purchase("s1", course_id, 80.0)

    rows = client.get("/api/educator/enrolled-students", headers=auth("edu_1")).json()["enrolledStudents"]

    assert len(rows) == 1
    assert rows[0]["student"]["name"] == "First Student"
    assert rows[0]["courseTitle"] == "Mine"
    assert rows[0]["purchaseDate"]
