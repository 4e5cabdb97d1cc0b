"""API v1 routers.

Resources:
    /api/v1/auth             - Login, one-time code, refresh, logout, me
    /api/v1/login-attempts   - Login attempt administration
    /api/v1/health           - Liveness

The assembled ``v1_router`` lives in ``portal_auth.presentation.routers``;
this package stays import-light so dependencies can import the error
helpers without pulling every router in.
"""
