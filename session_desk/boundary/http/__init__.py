"""HTTP clients for the live-courses backend."""

from session_desk.boundary.http.live_courses_client import LiveCoursesClient

__all__ = ["LiveCoursesClient"]
