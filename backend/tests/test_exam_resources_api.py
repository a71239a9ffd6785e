from __future__ import annotations


def _hierarchy(client) -> dict:
    college = client.post("/api/colleges/", json={"name": "College of Science", "code": "COS"}).json()
    dept = client.post("/api/departments/", json={"name": "Earth Sciences", "college_id": college["id"]}).json()
    physics = client.post("/api/programs/", json={"name": "Physics", "department_id": dept["id"]}).json()
    geology = client.post("/api/programs/", json={"name": "Geology", "department_id": dept["id"]}).json()
    physics_one = client.post(
        "/api/levels/", json={"program_id": physics["id"], "level": 1, "students_count": 100}
    ).json()
    geology_one = client.post(
        "/api/levels/", json={"program_id": geology["id"], "level": 1, "students_count": 40}
    ).json()
    course = client.post(
        "/api/courses/",
        json={"level_id": physics_one["id"], "course_code": "PHY101", "course_name": "Mechanics"},
    ).json()
    return {
        "college": college,
        "dept": dept,
        "physics": physics,
        "geology": geology,
        "physics_one": physics_one,
        "geology_one": geology_one,
        "course": course,
    }


def test_venue_crud(client):
    r = client.post("/api/venues/", json={"code": "lt1", "name": "Lecture Theatre 1", "capacity": 300})
    assert r.status_code == 200
    venue = r.json()
    assert venue["code"] == "LT1"
    assert venue["venue_type"] == "Written"

    dup = client.post("/api/venues/", json={"code": "LT1", "name": "Other", "capacity": 10})
    assert dup.status_code == 409
    assert dup.json()["detail"] == "VENUE_CODE_ALREADY_EXISTS"

    assert client.post("/api/venues/", json={"code": "X", "name": "Closet", "capacity": 0}).status_code == 422

    r = client.patch(f"/api/venues/{venue['id']}", json={"venue_type": "CBT", "radius": 25})
    assert r.status_code == 200
    assert r.json()["venue_type"] == "CBT"
    assert [v["code"] for v in client.get("/api/venues/", params={"venue_type": "CBT"}).json()] == ["LT1"]

    assert client.delete(f"/api/venues/{venue['id']}").json() == {"ok": True}
    assert client.delete(f"/api/venues/{venue['id']}").status_code == 404


def test_import_venues_endpoint(client):
    r = client.post(
        "/api/import/venues",
        json={"rows": [{"code": "HB", "name": "Hall B", "capacity": 150, "venue_type": "Written"}]},
    )
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["message"] == "1 venues imported successfully."


def test_staff_crud(client):
    h = _hierarchy(client)
    body = {
        "name": "Ada Obi",
        "email": "Ada@Unilag.Edu.ng",
        "phone": "0800",
        "position": "Lecturer",
        "college_id": h["college"]["id"],
        "department_id": h["dept"]["id"],
    }
    r = client.post("/api/staff/", json=body)
    assert r.status_code == 200
    staff = r.json()
    assert staff["email"] == "ada@unilag.edu.ng"

    dup = client.post("/api/staff/", json={**body, "name": "Someone Else", "email": "ADA@unilag.edu.ng"})
    assert dup.status_code == 409
    assert dup.json()["detail"] == "STAFF_EMAIL_ALREADY_EXISTS"

    assert client.post("/api/staff/", json={**body, "email": "not-an-email"}).status_code == 422

    r = client.patch(f"/api/staff/{staff['id']}", json={"position": "Senior Lecturer"})
    assert r.json()["position"] == "Senior Lecturer"
    assert client.delete(f"/api/staff/{staff['id']}").json() == {"ok": True}


def test_staff_department_must_belong_to_college(client):
    h = _hierarchy(client)
    other = client.post("/api/colleges/", json={"name": "College of Arts", "code": "COA"}).json()
    r = client.post(
        "/api/staff/",
        json={
            "name": "Ada Obi",
            "email": "ada@unilag.edu.ng",
            "phone": "0800",
            "position": "Lecturer",
            "college_id": other["id"],
            "department_id": h["dept"]["id"],
        },
    )
    assert r.status_code == 422
    assert r.json()["detail"] == "DEPARTMENT_NOT_IN_COLLEGE"


def test_combined_course_lifecycle(client):
    h = _hierarchy(client)
    offering = {"program_id": h["geology"]["id"], "level_id": h["geology_one"]["id"]}

    r = client.post("/api/combined-courses/", json={"course_id": h["course"]["id"], "offerings": [offering]})
    assert r.status_code == 200
    combined = r.json()
    assert combined["course_code"] == "PHY101"
    assert [o["program_name"] for o in combined["offerings"]] == ["Geology"]

    again = client.post("/api/combined-courses/", json={"course_id": h["course"]["id"], "offerings": [offering]})
    assert again.status_code == 409
    assert again.json()["detail"] == "COMBINED_COURSE_ALREADY_EXISTS"

    both = [offering, {"program_id": h["physics"]["id"], "level_id": h["physics_one"]["id"]}]
    r = client.put(f"/api/combined-courses/{combined['id']}/offerings", json={"offerings": both})
    assert r.status_code == 200
    assert [o["program_name"] for o in r.json()["offerings"]] == ["Geology", "Physics"]

    r = client.delete(f"/api/combined-courses/{combined['id']}")
    assert r.json()["ok"] is True
    assert client.get("/api/combined-courses/").json() == []
    assert client.delete(f"/api/combined-courses/{combined['id']}").status_code == 404


def test_combined_course_rejects_bad_offerings(client):
    h = _hierarchy(client)
    course_id = h["course"]["id"]

    r = client.post("/api/combined-courses/", json={"course_id": course_id, "offerings": []})
    assert r.status_code == 422

    mismatched = {"program_id": h["physics"]["id"], "level_id": h["geology_one"]["id"]}
    r = client.post("/api/combined-courses/", json={"course_id": course_id, "offerings": [mismatched]})
    assert r.status_code == 422
    assert r.json()["detail"] == "OFFERING_LEVEL_NOT_IN_PROGRAM"

    ghost = "00000000-0000-0000-0000-000000000000"
    r = client.post(
        "/api/combined-courses/",
        json={"course_id": ghost, "offerings": [{"program_id": h["geology"]["id"], "level_id": h["geology_one"]["id"]}]},
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "COURSE_NOT_FOUND"


def test_generation_data_endpoint(client):
    h = _hierarchy(client)
    client.post(
        "/api/combined-courses/",
        json={
            "course_id": h["course"]["id"],
            "offerings": [{"program_id": h["geology"]["id"], "level_id": h["geology_one"]["id"]}],
        },
    )
    client.post("/api/venues/", json={"code": "LT1", "name": "Lecture Theatre 1", "capacity": 300})

    r = client.get("/api/generation/data")
    assert r.status_code == 200
    data = r.json()
    assert len(data["courses"]) == 1
    assert data["courses"][0]["offering_programs"] == ["Physics", "Geology"]
    assert data["courses"][0]["students_count"] == 140
    assert [v["code"] for v in data["venues"]] == ["LT1"]
    assert data["staff"] == []
