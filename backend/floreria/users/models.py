"""
Modèles SQLModel pour l'entité User (table ``usuarios``).

Les comptes sont gérés par le service utilisateurs ; ce module n'en fait
qu'une lecture (destinataire des emails, affiliés, contrôle du rôle admin).
"""
from typing import Optional

from sqlmodel import SQLModel, Field

ROLE_ADMIN = "admin"
ROLE_CLIENT = "cliente"


class UserBase(SQLModel):
    nombre: str = Field(max_length=100)
    apellido: str = Field(default="", max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    # Code de parrainage, présent uniquement pour les affiliés
    codigo_afiliado: Optional[str] = Field(default=None, unique=True, index=True, max_length=50)
    rol: str = Field(default=ROLE_CLIENT, max_length=20)


class User(UserBase, table=True):
    """Modèle de table pour les utilisateurs."""
    __tablename__ = "usuarios"

    id: Optional[int] = Field(default=None, primary_key=True)

    @property
    def full_name(self) -> str:
        return f"{self.nombre} {self.apellido}".strip()

    @property
    def is_admin(self) -> bool:
        return self.rol == ROLE_ADMIN
