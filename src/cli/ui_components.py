"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar paneles en `generate` y `check`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import GenerationResult, LeakStatus, LeakVerdict

_STATUS_STYLES: dict[LeakStatus, tuple[str, str]] = {
    LeakStatus.LEAKED: ("LEAKED", "bold red"),
    LeakStatus.NOT_LEAKED: ("not found in breaches", "green"),
    LeakStatus.UNKNOWN: ("unknown (check failed)", "yellow"),
    LeakStatus.SKIPPED: ("skipped", "dim"),
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("PWGEN-D2", style="bold cyan")
    subtitle = Text("Generación • Complejidad • Pwned Passwords", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def leak_status_text(status: LeakStatus) -> Text:
    label, style = _STATUS_STYLES[status]
    return Text(label, style=style)


def build_result_table(result: GenerationResult) -> Table:
    """Tabla con el resultado de una generación."""

    table = Table(title="Generated password", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Password", Text(result.password, style="bold"))
    table.add_row("Length", str(len(result.password)))
    table.add_row("Site", result.site or "-")
    table.add_row("Leak check", leak_status_text(result.leak_status))
    table.add_row("Saved as", result.file_name or "-")
    return table


def build_verdict_panel(verdict: LeakVerdict) -> Panel:
    """Panel para el veredicto de `check`."""

    if verdict.is_leaked:
        body = Text(f"Found in breach corpus {verdict.count:,} times.", style="bold red")
        return Panel(body, title="Leaked", border_style="red")
    body = Text("Not found in the breach corpus.", style="green")
    return Panel(body, title="Clean", border_style="green")
