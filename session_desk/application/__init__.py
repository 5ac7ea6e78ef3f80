"""
Application layer.

Per-view workflow controllers that sit between the HTTP API and the
live-courses backend client.
"""
