# =============================================================================
# core/services/token_service.py - Access Token Issuing & Verification
# =============================================================================
# Signed, time-limited JWTs carrying the caller's identity claim:
#   {"sub": <user id>, "name": ..., "email": ..., "iat": ..., "exp": ...}
#
# Verification answers one question: is this a valid token, and if so who
# is it for? Every failure (malformed, tampered, expired, missing claims)
# yields None; the reason is only logged.
# =============================================================================

import logging
from datetime import timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from core.models.user import AuthUser, UserPublic
from lib.utils import utcnow

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies bearer tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = timedelta(minutes=expire_minutes)

    def issue(self, user: UserPublic | AuthUser) -> str:
        """
        Create a signed token for a user.

        Args:
            user: The identity to embed

        Returns:
            Encoded JWT string
        """
        issued_at = utcnow()
        claims = {
            "sub": user.id,
            "name": user.name,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + self._expires_in,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> AuthUser | None:
        """
        Decode a token and return its identity claim.

        Returns:
            AuthUser if the token is valid, None otherwise
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        user_id = payload.get("sub")
        name = payload.get("name")
        email = payload.get("email")

        if not user_id or name is None or email is None:
            logger.debug("Rejected token with incomplete identity claim")
            return None

        return AuthUser(id=str(user_id), name=name, email=email)
