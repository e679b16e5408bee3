"""Errores del dominio.

Por qué una jerarquía propia:
- Los adaptadores (HTTP, disco) traducen sus excepciones a estas clases, así
  la CLI y la API no dependen de httpx ni de `OSError`.
- Permite distinguir "no se pudo comprobar" de "comprobado y limpio".
"""

from __future__ import annotations


class PasswordGenError(Exception):
    """Base de todos los errores de la aplicación."""


class GenerationError(PasswordGenError):
    """La generación falló y no hay contraseña que devolver."""


class RandomSourceError(GenerationError):
    """La fuente de aleatoriedad criptográfica del sistema falló."""


class GenerationExhaustedError(GenerationError):
    """Ningún candidato superó el control de complejidad dentro del presupuesto."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"no candidate met the complexity requirements after {attempts} attempts")
        self.attempts = attempts


class LeakCheckError(PasswordGenError):
    """No se pudo determinar si la contraseña está filtrada."""


class LeakCheckNetworkError(LeakCheckError):
    """Fallo de red o respuesta no-200 del servicio de brechas."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LeakCheckTimeoutError(LeakCheckNetworkError):
    """El servicio de brechas no respondió a tiempo."""


class LeakCheckParseError(LeakCheckError):
    """Una línea de la respuesta no tiene el formato `SUFFIX:COUNT`."""

    def __init__(self, line: str) -> None:
        super().__init__(f"malformed range line: {line[:64]!r}")
        self.line = line


class StorageError(PasswordGenError):
    """No se pudo persistir el registro de la contraseña."""
