"""
Test suite for the attendance partition.

System role: Verification of complement-derived attendance
"""

import pytest

from session_desk.core.attendance import AttendancePartition, partition_attendance


class TestPartitionAttendance:
    """Absentees are always the roster complement."""

    @pytest.mark.parametrize(
        "present",
        [set(), {"s1"}, {"s1", "s3"}, {"s1", "s2", "s3"}],
    )
    def test_complement_covers_roster(self, present: set[str]) -> None:
        roster = ["s1", "s2", "s3"]

        partition = partition_attendance(roster, present)

        assert set(partition.absent_students) == set(roster) - present
        assert len(partition.present_students) + len(partition.absent_students) == len(roster)
        assert not set(partition.present_students) & set(partition.absent_students)

    def test_example_selection(self) -> None:
        partition = partition_attendance(["S1", "S2", "S3"], {"S3", "S1"})

        assert partition.to_payload() == {
            "presentStudents": ["S1", "S3"],
            "absentStudents": ["S2"],
        }

    def test_ids_outside_roster_are_ignored(self) -> None:
        partition = partition_attendance(["s1", "s2"], {"s1", "ghost"})

        assert partition.present_students == ("s1",)
        assert partition.absent_students == ("s2",)
        assert partition.total == 2

    def test_duplicate_roster_ids_count_once(self) -> None:
        partition = partition_attendance(["s1", "s1", "s2"], {"s1"})

        assert partition == AttendancePartition(("s1",), ("s2",))

    def test_empty_roster(self) -> None:
        partition = partition_attendance([], {"s1"})

        assert partition.total == 0
        assert partition.to_payload() == {"presentStudents": [], "absentStudents": []}
