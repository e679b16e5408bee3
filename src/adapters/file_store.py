"""Persistencia de contraseñas en ficheros de texto.

Por qué está en adapters:
- El disco es un detalle de infraestructura; el Core solo recibe un
  `PasswordStore`.

Reglas:
- Nombre = etiqueta saneada + `.txt`. Cada carácter fuera de `[A-Za-z0-9_-]`
  se sustituye por `_` (se conserva la longitud).
- La parte de la etiqueta se corta a `MAX_LABEL_CHARS`; con el sufijo
  `_<epoch>_<n>.txt` el nombre sigue por debajo de los 255 bytes de NAME_MAX.
- Si el fichero ya existe se añade el epoch Unix (`<label>_<epoch>.txt`);
  nunca se sobrescribe.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from core.domain.errors import StorageError
from core.domain.models import PersistedRecord
from core.interfaces.storage import PasswordStore

log = logging.getLogger(__name__)

EXTENSION = ".txt"
PLACEHOLDER = "_"
MAX_LABEL_CHARS = 200


def sanitize_label(value: str) -> str:
    """Sustituye cada carácter no permitido por `_` (misma longitud)."""

    return "".join(
        ch if (ch.isascii() and ch.isalnum()) or ch in ("-", "_") else PLACEHOLDER
        for ch in value
    )


class FilePasswordStore(PasswordStore):
    """Guarda cada contraseña en `<directory>/<label>.txt`."""

    def __init__(
        self,
        directory: Path,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._directory = Path(directory)
        self._clock = clock

    @property
    def directory(self) -> Path:
        return self._directory

    def base_name(self, site: str, now: datetime) -> str:
        if not site:
            return f"password_{now.strftime('%Y%m%d_%H%M%S')}"
        return sanitize_label(site)[:MAX_LABEL_CHARS]

    def save(self, site: str, password: str) -> str:
        now = self._clock()
        record = PersistedRecord(label=site, password=password, created_at=now)
        base = self.base_name(site, now)

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            for filename in self._candidates(base, now):
                path = self._directory / filename
                try:
                    # "x": creación exclusiva, dos peticiones nunca comparten fichero.
                    with path.open("x", encoding="utf-8") as fh:
                        fh.write(record.render())
                except FileExistsError:
                    continue
                log.info("password record saved: %s", filename)
                return filename
        except OSError as exc:
            raise StorageError(f"could not save password record: {exc}") from exc

        raise StorageError(f"no free filename for label {base!r}")

    def _candidates(self, base: str, now: datetime):
        yield f"{base}{EXTENSION}"
        epoch = int(now.timestamp())
        yield f"{base}_{epoch}{EXTENSION}"
        for n in range(1, 1000):
            yield f"{base}_{epoch}_{n}{EXTENSION}"
