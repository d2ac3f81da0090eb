"""
Auctioneer CLI - Command Line Interface for the auction expiry service.

Main entry point for all CLI commands.
"""

import logging
import signal
import threading

import click

from auctioneer.core.auction import AuctionStatus, ProductCondition, create_auction
from auctioneer.core.config import load_config
from auctioneer.core.errors import AuctionError, AuctionNotFoundError
from auctioneer.core.repository import AuctionRepository
from auctioneer.utils.logger import get_logger, setup_logging

logger = get_logger("cli")


def _open_repository(ctx) -> AuctionRepository:
    return AuctionRepository.from_config(ctx.obj["config"])


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--env-file", default=None, help="Path to a .env file")
@click.option("--log-to-file", is_flag=True, help="Also write logs to <log_dir>/auctioneer.log")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, env_file, log_to_file):
    """Auctioneer - auction storage with automatic expiry"""
    config = load_config(env_file)

    level = logging.DEBUG if debug else logging.INFO
    setup_logging(level=level, log_dir=str(config.log_dir), log_to_file=log_to_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# =============================================================================
# Service Commands
# =============================================================================


@cli.command("run")
@click.pass_context
def run(ctx):
    """Sweep expired auctions until interrupted"""
    config = ctx.obj["config"]
    shutdown = threading.Event()

    def _request_shutdown(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        shutdown.set()

    signal.signal(signal.SIGINT, _request_shutdown)
    signal.signal(signal.SIGTERM, _request_shutdown)

    repo = _open_repository(ctx)
    click.echo(f"✓ Sweeping every {config.sweep_interval}s "
               f"(auction duration {repo.resolver.resolve()})")
    try:
        while not shutdown.wait(1.0):
            pass
    finally:
        repo.stop()
        click.echo("✓ Stopped")


@cli.command("sweep")
@click.pass_context
def sweep(ctx):
    """Close expired auctions once and exit"""
    with _open_repository(ctx) as repo:
        closed = repo.sweep_now()
    click.echo(f"✓ Closed {closed} expired auction(s)")


@cli.command("status")
@click.pass_context
def status(ctx):
    """Show auction counts by status"""
    with _open_repository(ctx) as repo:
        active = repo.count(AuctionStatus.ACTIVE)
        completed = repo.count(AuctionStatus.COMPLETED)
    click.echo(f"Active:    {active}")
    click.echo(f"Completed: {completed}")


# =============================================================================
# Auction Commands
# =============================================================================


@cli.command("create")
@click.option("--name", "product_name", required=True, help="Product name")
@click.option("--category", required=True, help="Product category")
@click.option("--description", required=True, help="Product description")
@click.option(
    "--condition",
    type=click.Choice([c.name.lower() for c in ProductCondition]),
    default="new",
    show_default=True,
    help="Product condition",
)
@click.pass_context
def create(ctx, product_name, category, description, condition):
    """Create a new active auction"""
    try:
        auction = create_auction(
            product_name=product_name,
            category=category,
            description=description,
            condition=ProductCondition[condition.upper()],
        )
        with _open_repository(ctx) as repo:
            repo.create(auction)
    except AuctionError as e:
        raise click.ClickException(str(e))

    click.echo(f"✓ Auction created: {auction.auction_id}")


@cli.command("show")
@click.argument("auction_id")
@click.pass_context
def show(ctx, auction_id):
    """Show one auction"""
    try:
        with _open_repository(ctx) as repo:
            auction = repo.find_by_id(auction_id)
    except AuctionNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"ID:          {auction.auction_id}")
    click.echo(f"Product:     {auction.product_name}")
    click.echo(f"Category:    {auction.category}")
    click.echo(f"Description: {auction.description}")
    click.echo(f"Condition:   {auction.condition.name.lower()}")
    click.echo(f"Status:      {auction.status.name.lower()}")
    click.echo(f"Started:     {auction.timestamp}")


if __name__ == "__main__":
    cli()
