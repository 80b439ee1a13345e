"""Login, signup and the locally stored session."""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

from ..exceptions import AuthApiError
from ..models.user import LoginCredentials, SignupRequest, TokenResponse, UserRole
from ..storage import TOKEN_KEY, USER_EMAIL_KEY, USER_ROLE_KEY, LocalStorage
from ..utils.http_client import HTTPRequestError
from .base import BaseService

logger = logging.getLogger(__name__)

TOKEN_PATH = "/user/token"
SIGNUP_PATH = "/user/user_details"


def decode_token_claims(token: str) -> Dict[str, Any]:
    """Read the claims of a JWT without verifying its signature.

    Only the backend verifies tokens; the client reads the ``role`` claim to
    decide which dashboard to show.
    """
    try:
        payload = token.split(".")[1]
        payload += "=" * (-len(payload) % 4)
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except (IndexError, ValueError, binascii.Error) as e:
        raise AuthApiError("Malformed access token") from e
    if not isinstance(claims, dict):
        raise AuthApiError("Malformed access token")
    return claims


class AuthService(BaseService):
    """Authenticate against the backend and keep the token in local storage."""

    error_class = AuthApiError

    @property
    def storage(self) -> LocalStorage:
        return self.api.storage

    async def login(self, credentials: LoginCredentials) -> Optional[UserRole]:
        """Exchange credentials for a token and remember the session.

        Returns:
            The role decoded from the token, or ``None`` if it carries no
            known role.
        """
        try:
            data = await self.api.post_form(TOKEN_PATH, credentials.to_form())
        except HTTPRequestError as e:
            raise self._error(e, "Please check your credentials and try again.") from e

        token = self._parse(TokenResponse, data)
        role = self._role_from_token(token.access_token)

        self.storage.set_item(TOKEN_KEY, token.access_token)
        self.storage.set_item(USER_EMAIL_KEY, credentials.email)
        if role is not None:
            self.storage.set_item(USER_ROLE_KEY, int(role))
        else:
            self.storage.remove_item(USER_ROLE_KEY)
        logger.info(f"Logged in as {credentials.email}")
        return role

    async def signup(self, request: SignupRequest) -> Any:
        try:
            return await self.api.post(SIGNUP_PATH, json_data=request.to_payload())
        except HTTPRequestError as e:
            raise self._error(e, "An error occurred during signup. Please try again.") from e

    def logout(self) -> None:
        for key in (TOKEN_KEY, USER_EMAIL_KEY, USER_ROLE_KEY):
            self.storage.remove_item(key)
        logger.info("Logged out")

    def current_user(self) -> Optional[str]:
        return self.storage.get_item(USER_EMAIL_KEY)

    def current_role(self) -> Optional[UserRole]:
        value = self.storage.get_item(USER_ROLE_KEY)
        try:
            return UserRole(int(value)) if value is not None else None
        except ValueError:
            return None

    def is_authenticated(self) -> bool:
        return bool(self.storage.get_token())

    @staticmethod
    def _role_from_token(token: str) -> Optional[UserRole]:
        role = decode_token_claims(token).get("role")
        try:
            return UserRole(int(role))
        except (TypeError, ValueError):
            logger.warning(f"Token carries no known role: {role!r}")
            return None
