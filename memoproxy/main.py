"""Main entry point for the memoproxy application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from typing import Any, Coroutine, Dict

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from memoproxy.core.command_handler import CommandHandler
from memoproxy.core.services.key_derivation import ConstantKeyDeriver, FieldKeyDeriver
from memoproxy.core.services.lazy_proxy import LazyServiceProxy
from memoproxy.core.services.memoizing_proxy import MemoizingProxy

# --- Infrastructure Layer ---
from memoproxy.infrastructure.cache.memory_store import InMemoryCacheStore
from memoproxy.infrastructure.cli.display import ConsoleDisplay
from memoproxy.infrastructure.config.settings import (
    get_cache_failures, get_cache_max_entries, get_config,
    get_latency_seconds, load_configuration,
)
from memoproxy.infrastructure.monitoring.event_dispatcher import EventDispatcher
from memoproxy.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging
from memoproxy.infrastructure.services.payment_gateway import PaymentGateway, payment_declined
from memoproxy.infrastructure.services.remote_data_service import RemoteDataService

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for one CLI invocation.

    This acts as the Composition Root.
    """
    # 1. Load Configuration First
    load_configuration()
    setup_logging(
        log_level=resolve_log_level(get_config('logging.level')),
        log_format=get_config('logging.format'),
        log_file=get_config('logging.file'),
    )
    logger.info("Configuration and logging initialized.")

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['dispatcher'] = EventDispatcher()
    max_entries = get_cache_max_entries()
    cache_failures = get_cache_failures()

    # 2. Real services, built lazily behind virtual proxies
    gateway_latency = get_latency_seconds('gateway.latency_seconds')
    remote_latency = get_latency_seconds('remote.latency_seconds')
    dependencies['payment_service'] = LazyServiceProxy(
        lambda: PaymentGateway(latency_seconds=gateway_latency),
        publisher=dependencies['dispatcher'],
        name="PaymentGateway",
    )
    dependencies['data_service'] = LazyServiceProxy(
        lambda: RemoteDataService(latency_seconds=remote_latency),
        publisher=dependencies['dispatcher'],
        name="RemoteDataService",
    )

    # 3. Caching proxies in front of them
    dependencies['payment_proxy'] = MemoizingProxy(
        dependencies['payment_service'],
        key_deriver=FieldKeyDeriver("payment", fields=("amount", "currency")),
        store=InMemoryCacheStore(max_entries=max_entries),
        cache_failures=cache_failures,
        is_failure=payment_declined,
        publisher=dependencies['dispatcher'],
        name="payments",
    )
    dependencies['data_proxy'] = MemoizingProxy(
        dependencies['data_service'],
        key_deriver=ConstantKeyDeriver("large-data"),
        store=InMemoryCacheStore(max_entries=max_entries),
        publisher=dependencies['dispatcher'],
        name="large-data",
    )

    # 4. Command Handler
    dependencies['command_handler'] = CommandHandler(
        payment_proxy=dependencies['payment_proxy'],
        data_proxy=dependencies['data_proxy'],
        dispatcher=dependencies['dispatcher'],
        ui=dependencies['ui'],
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies

# --- Typer App Definition ---
app = typer.Typer(
    name="memoproxy",
    help="Caching and lazy proxies in front of expensive services.",
    add_completion=False,
)

def run_async(coro: Coroutine[Any, Any, None]) -> None:
    """Runs an async command handler from a sync Typer command."""
    asyncio.run(coro)

def _handler() -> CommandHandler:
    try:
        return create_dependencies()['command_handler']
    except Exception as e:
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        ConsoleDisplay().display_error(f"Application Initialization Failed: {e}")
        raise typer.Exit(code=1)

RepeatOption = Annotated[
    int,
    typer.Option("--repeat", "-r", min=1, help="How many times to send the same request.")
]

@app.command()
def pay(
    amount: Annotated[float, typer.Argument(help="Amount to charge.")],
    currency: Annotated[str, typer.Argument(help="Currency code, e.g. USD.")],
    repeat: RepeatOption = 1,
):
    """Make a payment through the caching proxy."""
    run_async(_handler().handle_pay(amount, currency, repeat))

@app.command()
def fetch(repeat: RepeatOption = 1):
    """Fetch the large remote data set through the caching proxy."""
    run_async(_handler().handle_fetch(repeat))

@app.command()
def demo():
    """Run repeated, distinct and concurrent requests and show cache statistics."""
    run_async(_handler().handle_demo())

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
