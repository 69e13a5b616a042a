"""ASGI-facing pieces: dispatch, response sending, static serving, server startup."""
