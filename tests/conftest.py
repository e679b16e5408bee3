"""Root conftest for the pwgen-d2 test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Make ``src/`` importable without installing the package
# ---------------------------------------------------------------------------
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

from core.config import AppSettings  # noqa: E402
from core.domain.errors import LeakCheckNetworkError  # noqa: E402
from core.domain.models import LeakVerdict  # noqa: E402


class StubChecker:
    """In-memory leak checker recording every password it is asked about."""

    def __init__(self, verdict: LeakVerdict | None = None, error: Exception | None = None) -> None:
        self.verdict = verdict or LeakVerdict(is_leaked=False, count=0)
        self.error = error
        self.calls: list[str] = []

    def check(self, password: str) -> LeakVerdict:
        self.calls.append(password)
        if self.error is not None:
            raise self.error
        return self.verdict


class StubStore:
    def __init__(self) -> None:
        self.saved: list[tuple[str, str]] = []

    def save(self, site: str, password: str) -> str:
        self.saved.append((site, password))
        return f"{site or 'password'}.txt"


@pytest.fixture()
def settings(tmp_path: Path) -> AppSettings:
    """Settings isolated from any project or user ``.env`` file."""
    return AppSettings(_env_file=None, passwords_dir=tmp_path / "passwords")


@pytest.fixture()
def clean_checker() -> StubChecker:
    return StubChecker()


@pytest.fixture()
def leaked_checker() -> StubChecker:
    return StubChecker(verdict=LeakVerdict(is_leaked=True, count=42))


@pytest.fixture()
def failing_checker() -> StubChecker:
    return StubChecker(error=LeakCheckNetworkError("boom", status_code=503))


@pytest.fixture()
def stub_store() -> StubStore:
    return StubStore()
