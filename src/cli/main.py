"""CLI principal (Typer).

Comandos:
- `generate`: genera, comprueba y guarda una contraseña.
- `check`: comprueba una contraseña existente contra Pwned Passwords.
- `serve`: levanta la API HTTP.
- `doctor`: diagnóstico del entorno.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.breach_check import PwnedPasswordsChecker
from adapters.file_store import FilePasswordStore
from cli import doctor
from cli.ui_components import build_result_table, build_verdict_panel, print_banner
from core.config import LOG_LEVELS, AppSettings
from core.domain.errors import GenerationError, LeakCheckError, StorageError
from core.domain.models import GenerationRequest
from core.services.pipeline import PasswordPipeline, PipelineHooks

app = typer.Typer(no_args_is_help=True, help="Leak-checked password generator.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_LEAKED = 2
EXIT_UNKNOWN = 3


def configure_logging(level: str) -> None:
    """Logging a stderr vía Rich; nunca se registran contraseñas."""

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=False, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override PWGEN_D2_LOG_LEVEL."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    level = (log_level or settings.log_level).strip().upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    configure_logging(level)


@app.command()
def generate(
    site: str = typer.Option("", "--site", "-s", help="Sitio/propósito (nombre del fichero)."),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Longitud (se ajusta a 12..255)."),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Entropía adicional opcional."),
    no_leak_check: bool = typer.Option(False, "--no-leak-check", help="No consultar Pwned Passwords."),
    no_save: bool = typer.Option(False, "--no-save", help="No guardar el registro en disco."),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Directorio de registros."),
    as_json: bool = typer.Option(False, "--json", help="Salida JSON (sin banner)."),
) -> None:
    """Genera una contraseña y la comprueba contra brechas conocidas."""

    settings = AppSettings()
    request = GenerationRequest(
        site=site,
        desired_length=length if length is not None else settings.default_length,
        passphrase=passphrase,
        skip_leak_check=no_leak_check,
    )

    store = None if no_save else FilePasswordStore(out_dir or settings.passwords_dir)
    hooks = PipelineHooks(warning=lambda msg: _err_console.print(f"[yellow]Warning:[/yellow] {msg}"))

    with PwnedPasswordsChecker(settings) as checker:
        pipeline = PasswordPipeline.from_settings(settings, checker=checker, store=store, hooks=hooks)
        try:
            result = pipeline.run(request)
        except (GenerationError, StorageError) as exc:
            _err_console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(result.to_api(), ensure_ascii=False))
        return

    print_banner(_console)
    _console.print(build_result_table(result))


@app.command()
def check(
    password: Optional[str] = typer.Argument(None, help="Contraseña (si se omite se pide sin eco)."),
) -> None:
    """Comprueba si una contraseña aparece en Pwned Passwords."""

    if password is None:
        password = typer.prompt("Password", hide_input=True)

    settings = AppSettings()
    with PwnedPasswordsChecker(settings) as checker:
        try:
            verdict = checker.check(password)
        except LeakCheckError as exc:
            _err_console.print(f"[yellow]Could not determine leak status:[/yellow] {exc}")
            raise typer.Exit(code=EXIT_UNKNOWN) from exc

    _console.print(build_verdict_panel(verdict))
    if verdict.is_leaked:
        raise typer.Exit(code=EXIT_LEAKED)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Override PWGEN_D2_SERVER_HOST."),
    port: Optional[int] = typer.Option(None, "--port", help="Override PWGEN_D2_SERVER_PORT."),
) -> None:
    """Levanta la API HTTP (`POST /api/generate`)."""

    from api.app import create_app  # noqa: PLC0415

    settings = AppSettings()
    settings.passwords_dir.mkdir(parents=True, exist_ok=True)
    bind_host = host or settings.server_host
    bind_port = port or settings.server_port
    logging.getLogger(__name__).info("server starting on %s:%d", bind_host, bind_port)
    create_app(settings).run(host=bind_host, port=bind_port)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
