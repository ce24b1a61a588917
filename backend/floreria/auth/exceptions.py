"""
Exceptions personnalisées pour le module d'authentification.
"""
from fastapi import HTTPException, status

from floreria.auth.constants import (
    ERROR_PERMISSION_DENIED,
    ERROR_TOKEN_INVALID,
    ERROR_TOKEN_MISSING,
    HEADER_WWW_AUTHENTICATE,
    HEADER_WWW_AUTHENTICATE_VALUE,
)


class TokenInvalidException(HTTPException):
    """Exception pour un token JWT invalide, expiré ou sans utilisateur."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ERROR_TOKEN_INVALID,
            headers={HEADER_WWW_AUTHENTICATE: HEADER_WWW_AUTHENTICATE_VALUE},
        )


class TokenMissingException(HTTPException):
    """Exception pour un token JWT manquant."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ERROR_TOKEN_MISSING,
            headers={HEADER_WWW_AUTHENTICATE: HEADER_WWW_AUTHENTICATE_VALUE},
        )


class PermissionDeniedException(HTTPException):
    """Exception pour un utilisateur authentifié sans le rôle admin."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ERROR_PERMISSION_DENIED,
        )
