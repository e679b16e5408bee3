"""Comprobación de contraseñas filtradas (Pwned Passwords, k-anonymity).

Protocolo:
- SHA-1 de la contraseña en hex mayúsculas.
- Solo los 5 primeros caracteres salen del proceso: `GET <base>/range/<prefix>`.
- La respuesta lista `SUFFIX:COUNT` de todos los hashes con ese prefijo; el
  sufijo se compara localmente.

Notas:
- Con `Add-Padding: true` el servicio añade entradas con count=0; nunca
  cuentan como filtradas.
- Un fallo de red se lanza como error; no se confunde con "no filtrada".
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Callable

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import (
    LeakCheckNetworkError,
    LeakCheckParseError,
    LeakCheckTimeoutError,
)
from core.domain.models import LeakVerdict
from core.interfaces.leak_checker import LeakChecker

log = logging.getLogger(__name__)

PREFIX_LENGTH = 5


def sha1_hex(password: str) -> str:
    # SHA-1 lo impone el protocolo de rangos, no se usa para almacenar nada.
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()  # nosec


def split_hash(digest: str) -> tuple[str, str]:
    """Divide un digest hex en (prefijo de 5, sufijo restante)."""

    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_line(line: str) -> tuple[str, int]:
    """Parsea `SUFFIX:COUNT`.

    Lanza `LeakCheckParseError` si la línea no tiene ese formato.
    """

    suffix, sep, count = line.strip().partition(":")
    suffix = suffix.strip()
    if not sep or not suffix:
        raise LeakCheckParseError(line)
    try:
        value = int(count.strip())
    except ValueError as exc:
        raise LeakCheckParseError(line) from exc
    if value < 0:
        raise LeakCheckParseError(line)
    return suffix, value


def find_suffix_count(body: str, suffix: str) -> int | None:
    """Busca `suffix` (sin distinguir mayúsculas) en el cuerpo de un rango.

    Devuelve el count o None si no aparece. Las líneas mal formadas se saltan.
    """

    wanted = suffix.upper()
    for line in body.splitlines():
        if not line.strip():
            continue
        try:
            candidate, count = parse_range_line(line)
        except LeakCheckParseError as exc:
            log.debug("skipping range line: %s", exc)
            continue
        if candidate.upper() == wanted:
            return count
    return None


class PwnedPasswordsChecker(LeakChecker):
    """Cliente del endpoint de rangos de Pwned Passwords.

    Si no se inyecta `client`, el checker crea y posee uno; `close()` (o el
    context manager) lo libera.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or AppSettings()
        self._clock = clock
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def __enter__(self) -> "PwnedPasswordsChecker":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def range_url(self, prefix: str) -> str:
        return f"{self._settings.hibp_base_url.rstrip('/')}/range/{prefix}"

    def fetch_range(self, prefix: str) -> str:
        """Descarga el rango para `prefix`. Un único intento, sin reintentos.

        `httpx.Timeout` acota cada fase por separado; el plazo total de
        `http_timeout_seconds` se comprueba aquí mientras llega el cuerpo.
        """

        headers: dict[str, str] = {}
        if self._settings.hibp_add_padding:
            headers["Add-Padding"] = "true"

        url = self.range_url(prefix)
        timeout = self._settings.http_timeout_seconds
        deadline = self._clock() + timeout
        try:
            with self._client.stream("GET", url, headers=headers) as response:
                if response.status_code != 200:
                    log.warning("breach API returned HTTP %d (prefix=%s)", response.status_code, prefix)
                    raise LeakCheckNetworkError(
                        f"breach API returned status code {response.status_code}",
                        status_code=response.status_code,
                    )
                chunks: list[bytes] = []
                for chunk in response.iter_bytes():
                    if self._clock() > deadline:
                        log.warning("breach range download exceeded %.1fs (prefix=%s)", timeout, prefix)
                        raise LeakCheckTimeoutError(f"breach range request exceeded {timeout:.1f}s")
                    chunks.append(chunk)
                encoding = response.encoding or "utf-8"
        except httpx.TimeoutException as exc:
            log.warning("breach range request timed out (prefix=%s)", prefix)
            raise LeakCheckTimeoutError(f"breach range request timed out: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("breach range request failed (prefix=%s): %s", prefix, exc)
            raise LeakCheckNetworkError(f"breach range request failed: {exc}") from exc

        return b"".join(chunks).decode(encoding, errors="replace")

    def check(self, password: str) -> LeakVerdict:
        prefix, suffix = split_hash(sha1_hex(password))
        body = self.fetch_range(prefix)
        count = find_suffix_count(body, suffix)
        if count is None:
            return LeakVerdict(is_leaked=False, count=0)
        return LeakVerdict(is_leaked=count > 0, count=count)
