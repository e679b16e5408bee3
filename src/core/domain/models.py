"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde (longitud, tipos) sin acoplar el Core a Flask ni a
  la CLI.
- Los alias camelCase permiten que la API hable el mismo JSON que el
  frontend original sin duplicar modelos.

Nota:
- Estos modelos describen *qué* se pide y *qué* se devuelve, no *cómo* se
  genera ni dónde se guarda.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.charset import clamp_length


class LeakStatus(str, Enum):
    """Estado de la comprobación de brechas visto por el llamador."""

    LEAKED = "leaked"
    NOT_LEAKED = "not_leaked"
    UNKNOWN = "unknown"
    SKIPPED = "skipped"


class GenerationRequest(BaseModel):
    """Petición de generación.

    `desired_length` se ajusta a [12, 255] al validar; nunca se rechaza.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    site: str = Field(
        default="",
        alias="website",
        max_length=512,
        description="Sitio o propósito; solo se usa para nombrar el registro persistido.",
    )
    desired_length: int = Field(
        default=16,
        alias="length",
        description="Longitud deseada (se ajusta a [12, 255]).",
    )
    passphrase: str | None = Field(
        default=None,
        description="Entropía opcional aportada por el usuario.",
    )
    skip_leak_check: bool = Field(
        default=False,
        alias="disableLeakCheck",
        description="Desactiva la consulta al servicio de brechas.",
    )

    @field_validator("desired_length")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_length(value)


class LeakVerdict(BaseModel):
    """Resultado de una consulta k-anonymity. No se cachea entre peticiones."""

    model_config = ConfigDict(frozen=True)

    is_leaked: bool = Field(..., description="True si el sufijo aparece con count > 0.")
    count: int = Field(default=0, ge=0, description="Apariciones en el corpus de brechas.")


class GenerationResult(BaseModel):
    """Lo que el pipeline devuelve al llamador (CLI/API)."""

    password: str = Field(..., min_length=1)
    site: str = Field(default="")
    leak_status: LeakStatus = Field(default=LeakStatus.SKIPPED)
    file_name: str | None = Field(
        default=None,
        description="Nombre del fichero persistido (None si no se guardó).",
    )

    @property
    def is_leaked(self) -> bool:
        return self.leak_status is LeakStatus.LEAKED

    def to_api(self) -> dict[str, object]:
        """Payload JSON compatible con el contrato `/api/generate`."""

        return {
            "password": self.password,
            "website": self.site,
            "isLeaked": self.is_leaked,
            "leakStatus": self.leak_status.value,
            "fileName": self.file_name,
        }


class PersistedRecord(BaseModel):
    """Registro en texto plano guardado por el adaptador de almacenamiento."""

    label: str = Field(default="")
    password: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=datetime.now)

    def render(self) -> str:
        return (
            f"Website/Purpose: {self.label}\n"
            f"Password: {self.password}\n"
            f"Generated: {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
        )
