"""Password generation.

Each character is an independent draw from the operating system CSPRNG
(`secrets`), XOR-folded against a per-candidate seed and reduced modulo the
alphabet size. The seed combines the nanosecond clock with a 64-byte random
buffer that, when a passphrase is given, has been XORed with the passphrase
bytes (repeated cyclically).

The passphrase is weak seasoning: it only touches the seed buffer, never the
per-character draws, so the same passphrase never makes the output
deterministic and never lowers entropy below the no-passphrase case.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import Callable

from core.domain.charset import ALPHABET, clamp_length, has_required_complexity
from core.domain.errors import GenerationExhaustedError, RandomSourceError

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100
SEED_BUFFER_SIZE = 64


def mix_passphrase(buffer: bytes, passphrase: str | None) -> bytes:
    """XOR `passphrase` (UTF-8, repeated cyclically) over `buffer`."""

    if not passphrase:
        return buffer
    key = passphrase.encode("utf-8")
    return bytes(b ^ key[i % len(key)] for i, b in enumerate(buffer))


class PasswordGenerator:
    """Generates passwords that satisfy the four-class complexity gate.

    The random source, clock and alphabet are injectable for tests; the
    defaults are the only sane production values.
    """

    def __init__(
        self,
        *,
        alphabet: str = ALPHABET,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        randbelow: Callable[[int], int] = secrets.randbelow,
        token_bytes: Callable[[int], bytes] = secrets.token_bytes,
        clock_ns: Callable[[], int] = time.time_ns,
    ) -> None:
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._alphabet = alphabet
        self._max_attempts = max_attempts
        self._randbelow = randbelow
        self._token_bytes = token_bytes
        self._clock_ns = clock_ns

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def generate(self, length: int, passphrase: str | None = None) -> str:
        """Return a password of `length` characters (clamped to [12, 255]).

        Raises:
            RandomSourceError: the CSPRNG failed; not retried.
            GenerationExhaustedError: no candidate passed the complexity gate
                within `max_attempts` full regenerations.
        """

        length = clamp_length(length)
        for attempt in range(1, self._max_attempts + 1):
            candidate = self._candidate(length, passphrase)
            if has_required_complexity(candidate):
                if attempt > 1:
                    log.debug("complexity gate passed after %d attempts", attempt)
                return candidate

        log.error(
            "complexity gate never satisfied (attempts=%d, alphabet_size=%d)",
            self._max_attempts,
            len(self._alphabet),
        )
        raise GenerationExhaustedError(self._max_attempts)

    def _seed(self, passphrase: str | None) -> int:
        buffer = mix_passphrase(self._random_bytes(SEED_BUFFER_SIZE), passphrase)
        return self._clock_ns() ^ int.from_bytes(buffer, "big")

    def _candidate(self, length: int, passphrase: str | None) -> str:
        # Fresh seed per candidate: a retry never reuses the previous fold.
        seed = self._seed(passphrase)
        size = len(self._alphabet)
        chars = []
        for _ in range(length):
            n = self._random_index(size)
            chars.append(self._alphabet[(n ^ seed) % size])
        return "".join(chars)

    def _random_index(self, size: int) -> int:
        try:
            return self._randbelow(size)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError(f"secure random source failed: {exc}") from exc

    def _random_bytes(self, count: int) -> bytes:
        try:
            return self._token_bytes(count)
        except (OSError, NotImplementedError) as exc:
            raise RandomSourceError(f"secure random source failed: {exc}") from exc


def generate_password(length: int, passphrase: str | None = None) -> str:
    """Module-level shortcut using the default generator."""

    return PasswordGenerator().generate(length, passphrase)
