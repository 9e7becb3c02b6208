"""
Aggregator CLI entry point.

Usage:
    # Validate the default aggregator.toml and show the provider setup
    aggregator

    # Use another configuration and load the signing key right away
    aggregator -c /etc/aggregator/aggregator.toml --probe-key
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from aggregator import __version__
from aggregator.core.config import AggregatorConfig, ProviderSpec, load_config
from aggregator.core.errors import AggregatorError
from aggregator.core.http import client_policy
from aggregator.core.logging import get_logger, setup_logging
from aggregator.core.settings import get_settings

console = Console()
logger = get_logger("cli")


def display_config(cfg: AggregatorConfig, providers: Optional[list[ProviderSpec]] = None) -> None:
    """Display the resolved configuration, for all providers or the given ones."""
    table = Table(title="Aggregator")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Name", cfg.aggregator.name)
    table.add_row("Category", cfg.aggregator.category.value if cfg.aggregator.category else "")
    table.add_row("Namespace", cfg.aggregator.namespace)
    table.add_row("Domain", cfg.domain)
    table.add_row("Folder", cfg.folder)
    table.add_row("Web", cfg.web)
    table.add_row("Workers", str(cfg.workers))
    table.add_row("Key", cfg.key or "-")

    console.print(table)
    console.print()

    table = Table(title="Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Domain")
    table.add_column("Rate", justify="right")
    table.add_column("TLS")

    for p in cfg.providers if providers is None else providers:
        policy = client_policy(cfg, p)
        table.add_row(
            p.name,
            p.domain,
            f"{policy.rate:g}/s" if policy.rate is not None else "unlimited",
            "[red]insecure[/red]" if policy.insecure else "[green]verify[/green]",
        )

    console.print(table)


@click.command()
@click.option("--config", "-c", "config_path", default=None, help="Path to the TOML configuration")
@click.option("--provider", "-p", "provider_names", multiple=True, help="Only show these providers")
@click.option("--probe-key", is_flag=True, help="Load the OpenPGP key now instead of on first use")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="aggregator")
def main(
    config_path: Optional[str],
    provider_names: tuple[str, ...],
    probe_key: bool,
    verbose: bool,
) -> None:
    """Load and check the aggregator configuration."""
    settings = get_settings()
    setup_logging(settings, log_level="DEBUG" if verbose else None)

    try:
        cfg = load_config(config_path or settings.config_path)
        if probe_key and cfg.crypto_key() is not None:
            console.print(f"[green]Key {cfg.key} loaded[/green]")
    except AggregatorError as e:
        logger.debug(f"Startup failed: {e.to_dict()}")
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)

    selected = None
    if provider_names:
        selected = []
        for name in provider_names:
            provider = cfg.provider(name)
            if provider is None:
                console.print(f"[bold red]Error:[/bold red] unknown provider '{name}'")
                sys.exit(1)
            selected.append(provider)

    display_config(cfg, selected)


if __name__ == "__main__":
    main()
