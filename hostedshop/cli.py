import json
from typing import Any

import click

from .client import DEFAULT_STATUS, HostedShopClient


def _client(ctx: click.Context) -> HostedShopClient:
    ctx.ensure_object(dict)
    if "client" not in ctx.obj:
        from hostedshop import create_client

        ctx.obj["client"] = create_client()
    return ctx.obj["client"]


def _echo(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group("hostedshop")
def cli() -> None:
    """HostedShop lookups. Credentials come from HOSTEDSHOP_USER/HOSTEDSHOP_PASS."""


@cli.command("users")
@click.pass_context
def users_command(ctx: click.Context) -> None:
    _echo([u.to_dict() for u in _client(ctx).get_users().values()])


@cli.command("orders")
@click.option("--days", default=1, show_default=True, help="Look back this many days")
@click.pass_context
def orders_command(ctx: click.Context, days: int) -> None:
    _echo([o.to_dict() for o in _client(ctx).get_orders(days=days)])


@cli.command("orders-from")
@click.argument("start", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option(
    "--status",
    default=",".join(str(s) for s in DEFAULT_STATUS),
    show_default=True,
    help="Comma separated status codes",
)
@click.pass_context
def orders_from_command(ctx: click.Context, start, status: str) -> None:
    """All orders placed since START, fetched one month at a time."""
    _echo([o.to_dict() for o in _client(ctx).fetch_orders_from(start.date(), status)])


@cli.command("product")
@click.argument("product_id", type=int)
@click.pass_context
def product_command(ctx: click.Context, product_id: int) -> None:
    product = _client(ctx).get_product(product_id)
    if product is None:
        raise click.ClickException(f"no product with id {product_id}")
    _echo(product.to_dict())


@cli.command("images")
@click.argument("product_id", type=int)
@click.pass_context
def images_command(ctx: click.Context, product_id: int) -> None:
    _echo([i.to_dict() for i in _client(ctx).get_product_images(product_id)])


@cli.command("search")
@click.argument("term")
@click.pass_context
def search_command(ctx: click.Context, term: str) -> None:
    _echo([p.to_dict() for p in _client(ctx).search_products(term)])


def main() -> None:
    cli(obj={})
