# storefront/services/auth_service.py
from typing import List, Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from storefront.domain.errors import InvalidToken, Unauthenticated
from storefront.utils.settings import AUTH_SECRET_KEY, AUTH_ALGORITHMS, AUTH_AUDIENCE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Identity(BaseModel):
    subject_id: str
    email: Optional[str] = None


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated("No token provided")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidToken("Invalid token")
    return token.strip()


class TokenVerifier:
    """Weryfikacja tokenu i wyciagniecie (subject id, email)."""

    def __init__(
        self,
        secret_key: str = AUTH_SECRET_KEY,
        algorithms: List[str] | None = None,
        audience: Optional[str] = AUTH_AUDIENCE,
    ):
        self.secret_key = secret_key
        self.algorithms = algorithms or AUTH_ALGORITHMS
        self.audience = audience

    def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=self.algorithms,
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise InvalidToken("Invalid token") from e

        subject = claims.get("sub") or claims.get("uid")
        if not subject:
            raise InvalidToken("Token has no subject")
        return Identity(subject_id=str(subject), email=claims.get("email"))
