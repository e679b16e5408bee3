"""Doctor command for environment diagnostics."""

from __future__ import annotations

import secrets
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.breach_check import PwnedPasswordsChecker
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import LeakCheckError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Any 5-hex prefix works; this one is a well-populated range.
_SAMPLE_PREFIX = "21BD1"


def _check_breach_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        with PwnedPasswordsChecker(settings) as checker:
            body = checker.fetch_range(_SAMPLE_PREFIX)
        return True, f"{len(body.splitlines())} entries for prefix {_SAMPLE_PREFIX}"
    except LeakCheckError as exc:
        return False, str(exc)


def _check_random_source() -> tuple[bool, str]:
    try:
        secrets.token_bytes(32)
        return True, "OK"
    except (OSError, NotImplementedError) as exc:
        return False, str(exc)


def _check_passwords_dir(path: Path) -> tuple[bool, str]:
    """Create the directory if needed and verify it is writable."""

    try:
        path.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=path, prefix=".doctor_", delete=True):
            pass
        return True, str(path.resolve())
    except OSError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="PWGEN-D2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Breach API", "OK", settings.hibp_base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:.1f}s")
    if settings.leak_check_fallback == "not_leaked":
        table.add_row("Fallback", "RISKY", "Failed checks are reported as not leaked")
    else:
        table.add_row("Fallback", "OK", "Failed checks are reported as unknown")

    ok_rng, detail_rng = _check_random_source()
    table.add_row("Random source", "OK" if ok_rng else "FAIL", detail_rng)

    ok_dir, detail_dir = _check_passwords_dir(settings.passwords_dir)
    table.add_row("Passwords dir", "OK" if ok_dir else "FAIL", detail_dir)

    # Connectivity (best-effort)
    ok_api, detail_api = _check_breach_api(settings)
    table.add_row("Breach API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Without connectivity `generate` still works; "
            "the leak status is reported as unknown."
        )
    if not (ok_rng and ok_dir):
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    passwords_dir = typer.prompt(
        "Passwords directory",
        default=str(settings.passwords_dir),
        show_default=True,
    ).strip()
    fallback = typer.prompt(
        "On leak-check failure report (unknown/not_leaked)",
        default=settings.leak_check_fallback,
        show_default=True,
    ).strip().lower()
    default_length = typer.prompt(
        "Default length",
        default=settings.default_length,
        show_default=True,
        type=int,
    )

    if not passwords_dir:
        raise typer.BadParameter("passwords directory is required")
    if fallback not in ("unknown", "not_leaked"):
        raise typer.BadParameter("fallback must be 'unknown' or 'not_leaked'")
    if not 12 <= default_length <= 255:
        raise typer.BadParameter("default length must be between 12 and 255")

    env_path = write_user_env_vars(
        {
            "PWGEN_D2_PASSWORDS_DIR": passwords_dir,
            "PWGEN_D2_LEAK_CHECK_FALLBACK": fallback,
            "PWGEN_D2_DEFAULT_LENGTH": str(default_length),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
