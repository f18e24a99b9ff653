"""Runtime collaborators: logging setup, storage and the HTTP API."""
