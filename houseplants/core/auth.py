"""House Plants Authenticator — bearer token to principal."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from jose import JWTError, jwt

from houseplants.core.config import Settings
from houseplants.core.errors import UnauthorizedError

logger = logging.getLogger("houseplants.auth")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller. Never persisted."""

    uid: str
    display_name: str | None = None
    email: str | None = None


class Authenticator(ABC):
    @abstractmethod
    async def verify(self, token: str) -> Principal:
        """Return the principal for ``token`` or raise ``UnauthorizedError``."""


class JWTAuthenticator(Authenticator):
    """Verifies signed JWTs issued by the identity provider.

    The uid is read from ``sub``, falling back to ``uid`` and ``user_id``.
    """

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.audience = settings.jwt_audience
        self.issuer = settings.jwt_issuer

    async def verify(self, token: str) -> Principal:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.error(f"Error while verifying bearer token: {e}")
            raise UnauthorizedError() from e

        uid = claims.get("sub") or claims.get("uid") or claims.get("user_id")
        if not uid:
            logger.error("Bearer token carries no subject")
            raise UnauthorizedError()

        logger.debug(f"Bearer token decoded for user {uid}")
        return Principal(uid=str(uid), display_name=claims.get("name"), email=claims.get("email"))
