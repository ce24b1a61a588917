"""Constantes pour le module d'authentification."""

# --- Messages d'erreur (exposés au client) ---
ERROR_TOKEN_INVALID = "Token de autenticación inválido"
ERROR_TOKEN_MISSING = "Token de autenticación requerido"
ERROR_PERMISSION_DENIED = "Acceso denegado: solo para administradores"

# --- En-têtes HTTP ---
HEADER_WWW_AUTHENTICATE = "WWW-Authenticate"
HEADER_WWW_AUTHENTICATE_VALUE = "Bearer"

# --- OAuth2 ---
OAUTH2_TOKEN_URL = "/api/users/login"
