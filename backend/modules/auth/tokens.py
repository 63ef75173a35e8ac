"""
Access token encoding and verification.

Tokens are HS256-signed JWTs carrying the identity claim set. They are never
stored server-side: a token is valid exactly as long as its signature checks
out against the process signing secret and its ``exp`` is in the future.
"""

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from shared.config import Settings
from shared.exceptions import ConfigurationError
from shared.models import Identity

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import JWTPayload, TokenClaims

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(days=7)
SUPPORTED_ALGORITHMS = ("HS256",)
REQUIRED_CLAIMS = ["sub", "email", "name", "iat", "exp"]
# Three unpadded base64url segments, nothing else
COMPACT_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Signs identity claims into bearer tokens and verifies them back.

    The signing secret is injected once at construction and never read from
    the environment here; use :meth:`from_settings` to build one from config.
    """

    def __init__(
        self,
        secret_key: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if not secret_key:
            raise ConfigurationError("Token signing secret must not be empty", code="MISSING_JWT_SECRET")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported token algorithm: {algorithm}",
                code="UNSUPPORTED_JWT_ALGORITHM",
                details={"supported": list(SUPPORTED_ALGORITHMS)},
            )
        self._secret_key = secret_key
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock or _utc_now

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        """
        Build the process-wide codec from settings.

        A missing secret is fatal in production. In development a random
        per-process secret is generated, which invalidates tokens on restart.
        """
        secret_key = settings.jwt_secret
        if not secret_key:
            if settings.is_production:
                raise ConfigurationError(
                    "AUTOSTYLE_JWT_SECRET must be set when AUTOSTYLE_ENVIRONMENT=production",
                    code="MISSING_JWT_SECRET",
                )
            logger.warning(
                "AUTOSTYLE_JWT_SECRET is not set; using a random signing secret for this process"
            )
            secret_key = secrets.token_urlsafe(48)

        return cls(secret_key, ttl=settings.token_ttl, algorithm=settings.jwt_algorithm)

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def encode(self, claims: TokenClaims, ttl: Optional[timedelta] = None) -> str:
        """
        Issue a signed token for ``claims``.

        ``issued_at`` is the current time truncated to whole seconds (JWT
        timestamps are integers), ``expires_at`` is ``issued_at + ttl``.
        """
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + (self._ttl if ttl is None else ttl)

        payload = JWTPayload(
            sub=str(claims.subject_id),
            email=claims.email,
            name=claims.display_name,
            iat=int(issued_at.timestamp()),
            exp=int(expires_at.timestamp()),
        )
        return jwt.encode(payload.model_dump(), self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> Identity:
        """
        Verify ``token`` and return the identity it carries.

        Raises:
            ExpiredTokenError: Signature is valid but ``exp`` has passed.
            InvalidTokenError: Anything else: bad signature, wrong key,
                unsupported algorithm, malformed structure or claims.
        """
        if not isinstance(token, str) or not COMPACT_TOKEN_RE.fullmatch(token):
            raise InvalidTokenError()

        try:
            raw = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
            return JWTPayload(**raw).to_identity()
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidTokenError()
        except (ValueError, TypeError) as e:
            # Signature was fine but the claims don't form a valid Identity
            logger.debug(f"Rejected token claims: {e}")
            raise InvalidTokenError()
