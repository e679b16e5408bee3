"""Password generation orchestration.

The generator and the leak checker never know about each other; this module
is the caller that composes them, applies the leak-check fallback policy and
hands the result to an optional store. CLI and HTTP entry-points both
delegate here so the policy lives in one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from core.config import AppSettings
from core.domain.errors import LeakCheckError
from core.domain.models import GenerationRequest, GenerationResult, LeakStatus
from core.interfaces.leak_checker import LeakChecker
from core.interfaces.storage import PasswordStore
from core.services.generator import PasswordGenerator

log = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    warning: Callable[[str], None] | None = None


@dataclass
class PasswordPipeline:
    """Generate, optionally check, optionally persist.

    `store=None` skips persistence; `checker=None` behaves as if every request
    opted out of the leak check.
    """

    settings: AppSettings
    generator: PasswordGenerator
    checker: LeakChecker | None = None
    store: PasswordStore | None = None
    hooks: PipelineHooks = field(default_factory=PipelineHooks)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        checker: LeakChecker | None = None,
        store: PasswordStore | None = None,
        hooks: PipelineHooks | None = None,
    ) -> "PasswordPipeline":
        return cls(
            settings=settings,
            generator=PasswordGenerator(max_attempts=settings.max_generation_attempts),
            checker=checker,
            store=store,
            hooks=hooks or PipelineHooks(),
        )

    def run(self, request: GenerationRequest) -> GenerationResult:
        """Run one request end to end.

        Generation and storage errors propagate; leak-check errors are mapped
        by `leak_status_for`.
        """

        password = self.generator.generate(request.desired_length, request.passphrase)

        status = LeakStatus.SKIPPED
        if not request.skip_leak_check and self.checker is not None:
            status = self.leak_status_for(password)

        file_name = None
        if self.store is not None:
            file_name = self.store.save(request.site, password)

        return GenerationResult(
            password=password,
            site=request.site,
            leak_status=status,
            file_name=file_name,
        )

    def leak_status_for(self, password: str) -> LeakStatus:
        assert self.checker is not None
        try:
            verdict = self.checker.check(password)
        except LeakCheckError as exc:
            return self._fallback(exc)
        return LeakStatus.LEAKED if verdict.is_leaked else LeakStatus.NOT_LEAKED

    def _fallback(self, exc: LeakCheckError) -> LeakStatus:
        if self.settings.leak_check_fallback == "not_leaked":
            message = f"leak check failed, assuming not leaked: {exc}"
            status = LeakStatus.NOT_LEAKED
        else:
            message = f"leak check failed, status unknown: {exc}"
            status = LeakStatus.UNKNOWN

        log.warning(message)
        if self.hooks.warning:
            self.hooks.warning(message)
        return status
