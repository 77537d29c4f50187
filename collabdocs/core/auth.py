"""
Идентификация вызывающего.

Ядро работает только с именем пользователя. Проверка подписи токена
вынесена в отдельный верификатор, который подставляется в роутеры через
зависимость FastAPI и может быть заменен (например, в тестах).
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from collabdocs.core.config import settings
from collabdocs.core.exceptions import AuthenticationException

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class JWTVerifier:
    """Проверка JWT и извлечение имени пользователя из claim `sub`"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            logger.warning("Rejected token with invalid signature or claims")
            raise AuthenticationException("Invalid token")

        username = payload.get("sub")
        if not username:
            raise AuthenticationException("Token has no subject")
        return username


def get_token_verifier() -> JWTVerifier:
    return JWTVerifier(settings.jwt_secret, settings.jwt_algorithm)


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Извлечение токена из заголовка Authorization"""
    if not authorization:
        return None

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


async def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: JWTVerifier = Depends(get_token_verifier),
) -> str:
    """Зависимость для получения имени текущего пользователя"""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    return verifier.verify(credentials.credentials)
