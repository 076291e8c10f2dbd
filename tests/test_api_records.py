import time
from unittest.mock import patch

from campus_erp import tables


def test_hostel_assignment_view(client, store):
    store.seed(tables.HOSTEL_ASSIGNED, {"StudentID": "S1", "HostelID": "H001", "RoomNo": "7"})
    store.seed(tables.HOSTEL, {"HostelID": "H001", "HostelName": "Aryabhatta", "MonthlyFee": 4500})

    body = client.get("/api/hostel-assigned/S1").json()
    assert body["HostelName"] == "Aryabhatta"
    assert body["RoomNumber"] == "7"
    assert body["MonthlyFee"] == 4500
    assert body["WardenName"] == ""

    response = client.get("/api/hostel-assigned/S404")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_hostel_fee_payment(client, store):
    store.seed(tables.HOSTEL_FEE, {
        "StudentID": "S1",
        "Fees": [{"Item": "Mess", "Status": "Unpaid"}, {"Item": "Room", "Status": "Unpaid"}],
    })

    response = client.post("/api/hostel-fee/pay", json={"studentId": "S1", "item": "Room"})
    assert response.json() == {"success": True}

    fees = client.get("/api/hostel-fee/S1").json()["Fees"]
    assert fees == [{"Item": "Mess", "Status": "Unpaid"}, {"Item": "Room", "Status": "Paid"}]

    response = client.post("/api/hostel-fee/pay", json={"studentId": "S1", "item": "Gym"})
    assert response.json() == {"success": True}
    assert client.get("/api/hostel-fee/S1").json()["Fees"] == fees

    response = client.post("/api/hostel-fee/pay", json={"studentId": "S2", "item": "Room"})
    assert response.status_code == 404
    assert response.json() == {"error": "No record found"}

    assert client.get("/api/hostel-fee/S2").status_code == 404


def test_hostel_complaints(client, store):
    response = client.post("/api/hostel-complaint", json={
        "StudentID": "S1",
        "ComplaintID": "HC1",
        "Category": "Plumbing",
        "Description": "Leaking tap",
    })
    assert response.status_code == 201
    complaint = response.json()["complaint"]
    assert complaint["Status"] == "Pending"
    assert complaint["RaisedOn"]

    complaints = client.get("/api/hostel-complaint/S1").json()
    assert [c["ComplaintID"] for c in complaints] == ["HC1"]


def test_attendance_overall(client, store):
    assert client.get("/api/attendance-overall/S1").json() == {"overall": "--"}

    response = client.post("/api/attendance", json={"records": [
        {"StudentID": "S1", "Date": "2024-08-01", "SubjectCode": "CS301", "Status": "Present"},
        {"StudentID": "S1", "Date": "2024-08-01", "SubjectCode": "CS302", "Status": "Absent"},
        {"StudentID": "S1", "Date": "2024-08-02", "SubjectCode": "CS301", "Status": "present"},
    ]})
    assert response.json() == {"success": True}
    assert store.raw(tables.ATTENDANCE, {"StudentID": "S1", "Date#SubjectCode": "2024-08-01#CS302"})["Status"] == "Absent"

    assert client.get("/api/attendance-overall/S1").json() == {"overall": 67}
    assert len(client.get("/api/attendance", params={"studentId": "S1"}).json()) == 3


def test_attendance_requires_student(client):
    response = client.get("/api/attendance")
    assert response.status_code == 400
    assert response.json() == {"error": "studentId required"}


def test_results_for_semester(client, store):
    store.seed(
        tables.RESULTS,
        {"StudentID": "S1", "Semester#SubjectCode": "1#CS101", "Grade": "A"},
        {"StudentID": "S1", "Semester#SubjectCode": "11#CS999", "Grade": "B"},
    )
    store.seed(tables.SEMESTER_SUMMARY, {"StudentID": "S1", "Semester": 1, "SGPA": 9.1})

    body = client.get("/api/exams/results/S1", params={"semester": "1"}).json()
    assert [s["Semester#SubjectCode"] for s in body["subjects"]] == ["1#CS101"]
    assert body["summary"]["SGPA"] == 9.1

    assert client.get("/api/exams/results/S1", params={"semester": "2"}).json() == {"subjects": [], "summary": None}


def test_upcoming_exams_and_admit_cards(client, store):
    store.seed(
        tables.EXAM_SCHEDULE,
        {"CourseID": "BTECH", "Semester#ExamDateTime": "3#2024-11-20T10:00", "SubjectCode": "CS302"},
        {"CourseID": "BTECH", "Semester#ExamDateTime": "3#2024-11-18T10:00", "SubjectCode": "CS301"},
        {"CourseID": "BTECH", "Semester#ExamDateTime": "5#2024-11-18T10:00", "SubjectCode": "CS501"},
    )
    exams = client.get("/api/exams/upcoming", params={"courseId": "BTECH", "semester": "3"}).json()
    assert [e["SubjectCode"] for e in exams] == ["CS301", "CS302"]

    store.seed(tables.ADMIT_CARDS, {"StudentID": "S1", "Semester": 3, "Downloaded": False})
    response = client.post("/api/exams/admit-card/downloaded", json={"studentId": "S1", "semester": 3})
    assert response.json() == {"success": True}
    assert client.get("/api/exams/admit-card/S1").json()[0]["Downloaded"] is True


def test_placement_apply_once(client, store):
    payload = {"studentId": "S1", "companyId": "C1", "courseId": "BTECH"}
    assert client.post("/api/placement/apply", json=payload).json() == {"success": True}

    response = client.post("/api/placement/apply", json=payload)
    assert response.status_code == 409
    assert response.json() == {"error": "Already applied to this company"}

    applications = client.get("/api/placement/applications/S1").json()
    assert len(applications) == 1
    assert applications[0]["Status"] == "Applied"


def test_placement_stats_and_profile(client, store):
    assert client.get("/api/placement/stats/BTECH").json() == {}
    assert client.get("/api/placement/profile/S1").status_code == 404

    store.seed(tables.PLACEMENT_PROFILE, {"StudentID": "S1", "CGPA": 8.2})
    assert client.get("/api/placement/profile/S1").json()["CGPA"] == 8.2


def test_faculty_profile_update(client, store):
    store.seed(tables.FACULTY, {"FacultyID": "F1", "Department": "CSE", "Name": "Dr. Rao"})

    response = client.put("/api/faculty/F1", json={"PhoneNo": "12345"})
    assert response.status_code == 200
    assert response.json()["data"]["PhoneNo"] == "12345"
    assert store.raw(tables.FACULTY, {"FacultyID": "F1", "Department": "CSE"})["Name"] == "Dr. Rao"

    response = client.put("/api/faculty/F1", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No valid fields to update"}

    assert client.put("/api/faculty/F1", json={"Department": "ECE"}).status_code == 400
    assert client.put("/api/faculty/F404", json={"PhoneNo": "1"}).status_code == 404


def test_grievances_newest_first(client, store):
    store.seed(tables.GRIEVANCES, {"StudentID": "S1", "GrievanceID": "G1", "SubmittedAt": "2020-01-01"})

    response = client.post("/api/grievances", json={
        "StudentID": "S1",
        "Title": "Library timings",
        "Category": "Academic",
        "Priority": "Low",
        "Description": "Open longer before exams",
    })
    assert response.status_code == 201
    grievance = response.json()["grievance"]
    assert grievance["GrievanceID"].startswith("G")
    assert grievance["Status"] == "Under Review"

    listed = client.get("/api/grievances/S1").json()
    assert [g["GrievanceID"] for g in listed] == [grievance["GrievanceID"], "G1"]


def test_feedback_submission_and_roster(client, store):
    store.seed(tables.SUBJECTS, {"CourseID": "BTECH", "SubjectCode": "CS301", "SubjectName": "OS", "Semester": 3, "Branch": "CSE"})
    store.seed(tables.FACULTY_ASSIGNMENTS, {"CourseSemester": "BTECH#3", "SubjectCode#Section": "CS301#A", "SubjectCode": "CS301", "FacultyID": "F1"})
    store.seed(tables.FACULTY, {"FacultyID": "F1", "Department": "CSE", "Name": "Dr. Rao"})

    roster = client.get("/api/feedback/faculty/BTECH/3").json()
    assert roster == [{"FacultyID": "F1", "FacultyName": "Dr. Rao", "SubjectCode": "CS301", "SubjectName": "OS"}]

    response = client.post("/api/feedback", json={
        "StudentID": "S1",
        "FacultyID": "F1",
        "SubjectCode": "CS301",
        "Semester": 3,
        "Ratings": {"Clarity": 5},
    })
    assert response.json() == {"success": True}
    assert client.get("/api/feedback/S1").json()[0]["Semester#SubjectCode"] == "3#CS301"
    assert len(client.get("/api/faculty/feedback/F1").json()) == 1


def test_course_catalog(client, store):
    store.seed(tables.COURSE_DETAILS, {"CourseID": "BTECH", "Name": "B.Tech"})
    store.seed(tables.COURSE_SECTIONS, {"CourseID": "BTECH", "Semester": 3, "Sections": ["A", "B"]})
    store.seed(tables.FEES_STRUCTURE, {"CourseID": "BTECH", "Sem": 2, "Total": 60000}, {"CourseID": "BTECH", "Sem": 1, "Total": 55000})

    assert client.get("/api/courses").json() == client.get("/api/coursedetails").json()
    assert client.get("/coursedetails/BTECH").json()["Name"] == "B.Tech"
    assert client.get("/coursedetails/MBA").status_code == 404
    assert client.get("/api/course-sections", params={"courseId": "BTECH", "semester": "3"}).json() == ["A", "B"]
    assert [f["Sem"] for f in client.get("/api/feestructure", params={"courseId": "BTECH"}).json()] == [1, 2]

    response = client.get("/api/course-sections")
    assert response.json() == {"error": "courseId and semester required"}


def test_active_resources(client, store):
    store.seed(
        tables.RESOURCES,
        {"ResourceID": "R1", "CourseID": "BTECH", "Branch": "CSE", "Semester": 3, "IsActive": True},
        {"ResourceID": "R2", "CourseID": "BTECH", "Branch": "CSE", "Semester": 3, "IsActive": False},
        {"ResourceID": "R3", "CourseID": "BTECH", "Branch": "CSE", "Semester": 4, "IsActive": True},
    )
    resources = client.get("/api/resources", params={"courseId": "BTECH", "branch": "CSE", "semester": "3"}).json()
    assert [r["ResourceID"] for r in resources] == ["R1"]


def test_grievances_same_day_newest_first(client, store):
    store.seed(
        tables.GRIEVANCES,
        {"StudentID": "S1", "GrievanceID": "G1700000000000", "SubmittedAt": "2024-05-01"},
        {"StudentID": "S1", "GrievanceID": "G1700000005000", "SubmittedAt": "2024-05-01"},
        {"StudentID": "S1", "GrievanceID": "G1600000000000", "SubmittedAt": "2024-04-01"},
    )
    listed = client.get("/api/grievances/S1").json()
    assert [g["GrievanceID"] for g in listed] == ["G1700000005000", "G1700000000000", "G1600000000000"]


def test_grievances_in_same_millisecond_get_distinct_ids(client, store):
    payload = {
        "StudentID": "S1",
        "Title": "Wifi",
        "Category": "Infrastructure",
        "Priority": "High",
        "Description": "No signal in block C",
    }
    with patch("campus_erp.grievances.router.new_grievance_id", return_value="G1700000000000"):
        first = client.post("/api/grievances", json=payload).json()["grievance"]
        second = client.post("/api/grievances", json=payload).json()["grievance"]

    assert first["GrievanceID"] == "G1700000000000"
    assert second["GrievanceID"] == "G1700000000001"
    assert len(store.all(tables.GRIEVANCES)) == 2


def test_subjects_with_exponent_semester(client, store):
    store.seed(tables.SUBJECTS, {"CourseID": "BTECH", "SubjectCode": "CS301", "Semester": 3})

    started = time.monotonic()
    response = client.get("/api/subjects", params={"courseId": "BTECH", "semester": "1e1000000"})
    assert time.monotonic() - started < 5
    assert response.json() == []
