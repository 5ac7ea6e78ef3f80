"""Trainer session-management workflow for the live-courses platform."""

__version__ = "0.1.0"
