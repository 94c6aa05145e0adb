"""
Auth API - OTP and password login, signup, token refresh and profile.

Successful login/verify/refresh responses carry `data.tokens`; those tokens
are stored in the client's TokenStore so later requests are authenticated.
"""

from typing import Any, Optional

import structlog

from haulbase.api.base import ResourceApi

logger = structlog.get_logger(component="auth")

REFRESH_PATH = "/v1/auth/refresh"


class AuthApi(ResourceApi):
    """Endpoints under /v1/auth."""

    def login(self, email: str) -> Any:
        """Request a one-time login code by email."""
        return self.client.post("/v1/auth/login", {"email": email})

    def login_with_password(self, email: str, password: str) -> Any:
        body = self.client.post("/v1/auth/login/password", {"email": email, "password": password})
        self._store_tokens(body)
        return body

    def signup(self, email: str) -> Any:
        """Request a one-time signup code by email."""
        return self.client.post("/v1/auth/signup", {"email": email})

    def verify(self, email: str, code: str) -> Any:
        """Exchange an emailed code for a session."""
        body = self.client.post("/v1/auth/verify", {"email": email, "code": code})
        self._store_tokens(body)
        return body

    def refresh(self) -> Any:
        body = self.client.post(
            REFRESH_PATH, {"refresh_token": self.client.tokens.refresh_token}
        )
        self._store_tokens(body)
        return body

    def logout(self) -> None:
        """Revoke the refresh token server-side. Local tokens are cleared even if that fails."""
        try:
            self.client.post("/v1/auth/logout", {"refresh_token": self.client.tokens.refresh_token})
        finally:
            self.client.tokens.clear()
            logger.info("logged_out")

    def me(self) -> Any:
        """Current user with memberships."""
        return self.client.get("/v1/auth/me")

    def driver_signup(self, data: dict[str, Any]) -> Any:
        return self.client.post("/v1/auth/driver-signup", data)

    def update_profile(self, data: dict[str, Any]) -> Any:
        return self.client.patch("/v1/auth/me", data)

    def _store_tokens(self, body: Optional[dict[str, Any]]) -> None:
        if not isinstance(body, dict) or not body.get("success"):
            return
        tokens = (body.get("data") or {}).get("tokens") or {}
        if tokens.get("accessToken"):
            self.client.tokens.set_tokens(tokens["accessToken"], tokens.get("refreshToken"))
            logger.info("session_started")
