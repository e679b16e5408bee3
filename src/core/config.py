"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/disco) y la API lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pwgen-d2"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pwgen-d2"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pwgen-d2"
    return Path.home() / ".config" / "pwgen-d2"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# pwgen-d2 user config (.env)"]
    for key in sorted(existing):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/API/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PWGEN_D2_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de la consulta al servicio de brechas (segundos).",
    )
    user_agent: str = Field(
        default="pwgen-d2/0.1 (+https://local)",
        min_length=1,
        description="User-Agent descriptivo exigido por la API de Pwned Passwords.",
    )
    hibp_base_url: str = Field(
        default="https://api.pwnedpasswords.com",
        min_length=8,
        description="Base URL del rango k-anonymity (`<base>/range/<prefix>`).",
    )
    hibp_add_padding: bool = Field(
        default=True,
        description="Pide respuestas con relleno (entradas count=0) para ocultar el tamaño real.",
    )
    leak_check_fallback: Literal["unknown", "not_leaked"] = Field(
        default="unknown",
        description="Qué reporta el pipeline si la comprobación falla.",
    )

    max_generation_attempts: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Intentos máximos antes de abortar por complejidad.",
    )
    default_length: int = Field(
        default=16,
        ge=12,
        le=255,
        description="Longitud usada por la CLI si no se indica otra.",
    )

    passwords_dir: Path = Field(
        default=Path("passwords"),
        description="Directorio donde se guardan los registros generados.",
    )

    server_host: str = Field(default="127.0.0.1", min_length=1)
    server_port: int = Field(default=8080, ge=1, le=65535)

    log_level: LogLevel = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value
