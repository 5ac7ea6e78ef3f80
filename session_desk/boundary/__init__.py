"""
Boundary layer for external system integrations.

Handles all interactions with the live-courses REST backend.
"""
