"""
Attendance partition.

Absentees are never tracked on their own: they are the roster minus the
present-set, so every submission is a total partition of the roster.

Dependencies: None (pure domain layer)
System role: Complement-derived attendance computation
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class AttendancePartition:
    """Present/absent split of a batch roster for one session."""

    present_students: tuple[str, ...]
    absent_students: tuple[str, ...]

    @property
    def total(self) -> int:
        return len(self.present_students) + len(self.absent_students)

    def to_payload(self) -> dict[str, list[str]]:
        """Serialize to the backend's attendance body."""
        return {
            "presentStudents": list(self.present_students),
            "absentStudents": list(self.absent_students),
        }


def partition_attendance(
    roster_ids: Iterable[str],
    present_ids: Iterable[str],
) -> AttendancePartition:
    """
    Split a roster into present and absent students.

    Ids in ``present_ids`` that are not on the roster are ignored, and
    duplicate roster ids count once. Both halves keep roster order.

    Args:
        roster_ids: Student ids enrolled in the batch
        present_ids: Student ids marked present

    Returns:
        AttendancePartition: present ∪ absent == roster, present ∩ absent == ∅
    """
    present_set = set(present_ids)
    present: list[str] = []
    absent: list[str] = []
    seen: set[str] = set()
    for student_id in roster_ids:
        if student_id in seen:
            continue
        seen.add(student_id)
        if student_id in present_set:
            present.append(student_id)
        else:
            absent.append(student_id)
    return AttendancePartition(tuple(present), tuple(absent))
