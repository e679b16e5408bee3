"""Contrato del comprobador de brechas.

Por qué Protocol:
- El pipeline depende de este contrato, no de httpx ni de HIBP.
- En tests se sustituye por un stub sin red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import LeakVerdict


@runtime_checkable
class LeakChecker(Protocol):
    """Contrato mínimo para comprobar una contraseña.

    Reglas de diseño:
    - Nunca envía la contraseña ni el hash completo fuera del proceso.
    - Los fallos se lanzan como `LeakCheckError`; nunca se degradan a
      "no filtrada" aquí.
    """

    def check(self, password: str) -> LeakVerdict:
        """Devuelve el veredicto o lanza `LeakCheckError`."""

        ...
