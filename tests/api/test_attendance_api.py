"""
Test suite for attendance endpoints.

System role: Verification of the attendance dialog over HTTP
"""

from fastapi import status


class TestGetAttendance:
    def test_mark_mode_without_stored_attendance(self, api_client) -> None:
        response = api_client.get("/api/v1/sessions/sess1/attendance", params={"batch_id": "b1"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["mode"] == "mark"
        assert [s["full_name"] for s in body["students"]] == ["Asha Rao", "Ben Ng", "Chen Li"]
        assert body["summary"] == {"total": 3, "present": 0, "absent": 3}

    def test_update_mode_seeds_present_flags(self, api_client, fake_backend) -> None:
        fake_backend.sessions["sess1"]["attendance"] = [
            {"studentId": "s2", "status": "present"},
            {"studentId": "s1", "status": "absent"},
        ]

        body = api_client.get(
            "/api/v1/sessions/sess1/attendance", params={"batch_id": "b1"}
        ).json()

        assert body["mode"] == "update"
        assert {s["student_id"]: s["present"] for s in body["students"]} == {
            "s1": False,
            "s2": True,
            "s3": False,
        }

    def test_batch_id_is_required(self, api_client) -> None:
        response = api_client.get("/api/v1/sessions/sess1/attendance")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestSubmitAttendance:
    def test_absentees_are_roster_complement(self, api_client, fake_backend) -> None:
        response = api_client.put(
            "/api/v1/sessions/sess1/attendance",
            json={"batch_id": "b1", "present_student_ids": ["s1", "s3"]},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["present_students"] == ["s1", "s3"]
        assert body["absent_students"] == ["s2"]
        assert body["notices"][-1]["description"] == "Attendance marked successfully"
        assert len(fake_backend.sessions["sess1"]["attendance"]) == 3

    def test_backend_rejection(self, api_client, fake_backend) -> None:
        fake_backend.fail("PUT", "/trainer/b1/sess1/attendance", 500)

        response = api_client.put(
            "/api/v1/sessions/sess1/attendance",
            json={"batch_id": "b1", "present_student_ids": ["s1"]},
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        body = response.json()
        assert body["success"] is False
        assert body["notices"][-1]["description"] == "Failed to submit attendance"

    def test_unenrolled_student_is_rejected(self, api_client, fake_backend) -> None:
        response = api_client.put(
            "/api/v1/sessions/sess1/attendance",
            json={"batch_id": "b1", "present_student_ids": ["s1", "stranger"]},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert not [r for r in fake_backend.requests if r.method == "PUT"]

    def test_roster_failure_keeps_stored_attendance(self, api_client, fake_backend) -> None:
        stored = [
            {"studentId": "s1", "status": "present"},
            {"studentId": "s3", "status": "present"},
        ]
        fake_backend.sessions["sess1"]["attendance"] = list(stored)
        fake_backend.fail("GET", "/admin/batches/b1")

        response = api_client.put(
            "/api/v1/sessions/sess1/attendance",
            json={"batch_id": "b1", "present_student_ids": ["s1", "s3"]},
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        body = response.json()
        assert body["success"] is False
        assert [n["level"] for n in body["notices"]] == ["error"]
        assert body["notices"][0]["description"] == "Failed to fetch batch students"
        assert fake_backend.sessions["sess1"]["attendance"] == stored
        assert not [r for r in fake_backend.requests if r.method == "PUT"]
