"""ASGI-level components shared by every router."""
