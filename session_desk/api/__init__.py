"""Session-management HTTP API."""
