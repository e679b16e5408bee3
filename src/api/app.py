"""HTTP entry-point (Flask).

Por qué un factory:
- Los tests crean la app con un checker/store propios, sin red ni disco real.
- La lógica vive en `PasswordPipeline`; aquí solo se traduce JSON <-> modelos
  y errores -> códigos HTTP.

Contrato:
- `POST /api/generate` con `{website, length, passphrase, disableLeakCheck}`.
- Respuesta `{password, website, isLeaked, leakStatus, fileName}`.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from pydantic import ValidationError

from adapters.breach_check import PwnedPasswordsChecker
from adapters.file_store import FilePasswordStore
from core.config import AppSettings
from core.domain.errors import GenerationError, StorageError
from core.domain.models import GenerationRequest
from core.interfaces.leak_checker import LeakChecker
from core.interfaces.storage import PasswordStore
from core.services.pipeline import PasswordPipeline

log = logging.getLogger(__name__)


def _error(message: str, status: int):
    resp = jsonify({"error": message})
    resp.status_code = status
    resp.headers["Cache-Control"] = "no-store"
    return resp


def create_app(
    settings: AppSettings | None = None,
    *,
    checker: LeakChecker | None = None,
    store: PasswordStore | None = None,
) -> Flask:
    """Crea la aplicación Flask.

    Sin `checker`/`store` explícitos se usan los adaptadores reales
    (Pwned Passwords y `settings.passwords_dir`).
    """

    settings = settings or AppSettings()
    pipeline = PasswordPipeline.from_settings(
        settings,
        checker=checker or PwnedPasswordsChecker(settings),
        store=store or FilePasswordStore(settings.passwords_dir),
    )

    app = Flask(__name__)
    app.extensions["pwgen_pipeline"] = pipeline

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.post("/api/generate")
    def generate():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _error("Invalid request", 400)

        try:
            req = GenerationRequest.model_validate(payload)
        except ValidationError:
            return _error("Invalid request", 400)

        try:
            result = pipeline.run(req)
        except GenerationError:
            log.exception("password generation failed")
            return _error("Failed to generate password", 500)
        except StorageError:
            log.exception("password record could not be saved")
            return _error("Failed to save password", 500)

        resp = jsonify(result.to_api())
        resp.headers["Cache-Control"] = "no-store"
        return resp

    return app
