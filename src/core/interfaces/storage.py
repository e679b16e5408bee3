"""Contrato de persistencia de contraseñas.

Por qué una capacidad inyectada:
- El Core (generador + comprobador) no toca el disco; quien necesite guardar
  recibe un `PasswordStore` explícito.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordStore(Protocol):
    def save(self, site: str, password: str) -> str:
        """Guarda el registro y devuelve el nombre de fichero usado.

        Lanza `StorageError` si no se puede escribir.
        """

        ...
