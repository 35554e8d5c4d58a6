import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from memoproxy.domain.interfaces.user_interface import UserInterface
from memoproxy.domain.models.common import LargeDataPayload, PaymentResult, ProxyStats

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    "hit": "bold green",
    "miss": "bold yellow",
    "coalesced": "bold cyan",
}

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self._console = console or Console()
        self.result_count = 0

    @property
    def console(self) -> Console:
        """Get the Rich console instance for direct operations."""
        return self._console

    @staticmethod
    def format_result(result: Any) -> str:
        """Renders a result as a short human-readable string."""
        if isinstance(result, PaymentResult):
            outcome = "approved" if result.success else "declined"
            return f"{outcome}: {result.amount} {result.currency}"
        if isinstance(result, LargeDataPayload):
            return f"{len(result.data)} items: {list(result.data)}"
        return str(result)

    def display_result(self, label: str, result: Any, cache_status: str, **kwargs: Any) -> None:
        """Displays one proxied call as a single line with its cache status.

        Args:
            label: Short description of the request.
            result: The result returned by the proxy.
            cache_status: 'hit', 'miss' or 'coalesced'.
        """
        self.result_count += 1
        timestamp = datetime.now().strftime("%H:%M:%S")
        style = STATUS_STYLES.get(cache_status, "bold white")
        line = Text.assemble(
            (f"#{self.result_count} ", "dim"),
            (f"[{cache_status.upper():>9}] ", style),
            (f"{label} -> ", "white"),
            (self.format_result(result), "bold white"),
            (f"  {timestamp}", "dim"),
        )
        logger.debug(f"display_result: label={label}, status={cache_status}")
        self.console.print(line)

    def display_stats(self, stats: Mapping[str, ProxyStats], **kwargs: Any) -> None:
        """Displays a table of cache statistics per proxy."""
        table = Table(
            title=kwargs.get("title", "Cache statistics"),
            box=ROUNDED,
            header_style="bold blue",
        )
        table.add_column("Proxy", style="bold white")
        for column in ("Requests", "Hits", "Misses", "Coalesced", "Failures", "Entries"):
            table.add_column(column, justify="right")

        for name, snapshot in stats.items():
            table.add_row(
                name,
                str(snapshot.total_requests),
                str(snapshot.hits),
                str(snapshot.misses),
                str(snapshot.coalesced),
                str(snapshot.failures),
                str(snapshot.size),
            )
        self.console.print(table)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message.

        Args:
            info_message: The informational message to display.
        """
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)
