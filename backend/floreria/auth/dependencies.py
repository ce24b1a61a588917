"""
Dépendances FastAPI pour l'authentification.

- L'obtention de l'utilisateur courant à partir du token JWT
- La vérification des droits admin (is_admin)
"""
import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from floreria.auth.constants import OAUTH2_TOKEN_URL
from floreria.auth.exceptions import PermissionDeniedException, TokenInvalidException, TokenMissingException
from floreria.auth.security import decode_access_token
from floreria.users.dependencies import UserRepositoryDep
from floreria.users.models import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=OAUTH2_TOKEN_URL, auto_error=False)


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    user_repository: UserRepositoryDep,
) -> User:
    """
    Vérifie le token JWT et retourne l'utilisateur courant.

    Raises:
        TokenMissingException: Si le token est manquant
        TokenInvalidException: Si le token est invalide ou l'utilisateur inexistant
    """
    if token is None:
        logger.warning("Token manquant dans la requête.")
        raise TokenMissingException()

    user_id = decode_access_token(token)
    if user_id is None:
        raise TokenInvalidException()

    user = await user_repository.get_by_id(user_id)
    if user is None:
        logger.warning(f"Token valide mais utilisateur ID {user_id} introuvable.")
        raise TokenInvalidException()

    logger.debug(f"Utilisateur authentifié: ID {user.id}")
    return user


async def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)]
) -> User:
    """Vérifie que l'utilisateur courant est un administrateur."""
    if not current_user.is_admin:
        logger.warning(f"Tentative d'accès à une ressource admin par un utilisateur non-admin: ID {current_user.id}")
        raise PermissionDeniedException()
    return current_user
