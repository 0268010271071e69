"""Coupon management CLI commands."""

from datetime import datetime

import httpx
import typer
from rich.table import Table

from src.storefront.cli.coupon_store import CouponApiError, CouponStore
from src.storefront.cli.settings import AdminCliSettings
from src.storefront.cli.utils import console, format_day
from src.storefront.entities.coupon import Coupon, CouponStatus

coupons_app = typer.Typer(help="Manage discount coupons")

DELETE_CONFIRMATION = "Are you sure you want to delete this coupon?"


def get_coupon_store() -> CouponStore:
    """Build a coupon store from environment settings."""
    settings = AdminCliSettings()
    if not settings.access_token:
        console.print(
            "[yellow]⚠️  STOREFRONT_ACCESS_TOKEN is not set; the API will reject the request[/yellow]"
        )
    return CouponStore(settings)


def render_coupons(coupons: list[Coupon]) -> None:
    if not coupons:
        console.print("[yellow]No coupons found[/yellow]")
        return

    table = Table(title="Coupons")
    table.add_column("Code", style="cyan")
    table.add_column("Discount", style="green")
    table.add_column("Usage", style="blue")
    table.add_column("Start Date", style="magenta")
    table.add_column("End Date", style="magenta")
    table.add_column("Status")
    table.add_column("ID", style="dim")

    for coupon in coupons:
        status = coupon.status
        status_style = "green" if status is CouponStatus.ACTIVE else "red"
        table.add_row(
            coupon.code,
            f"{coupon.discount_percent:g}%",
            f"{coupon.usage_count}/{coupon.usage_limit}",
            format_day(coupon.start_date),
            format_day(coupon.end_date),
            f"[{status_style}]{status.value}[/{status_style}]",
            coupon.id,
        )

    console.print(table)


def _load_coupons(store: CouponStore) -> list[Coupon]:
    try:
        return store.fetch_all_coupons()
    except (CouponApiError, httpx.HTTPError) as e:
        console.print(f"[red]❌ Failed to fetch coupons: {e}[/red]")
        raise typer.Exit(code=1) from e


@coupons_app.command("list")
def list_coupons() -> None:
    """List all coupons."""
    with get_coupon_store() as store:
        render_coupons(_load_coupons(store))


@coupons_app.command("delete")
def delete_coupon(
    coupon_id: str = typer.Argument(..., help="ID of the coupon to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a coupon and show the refreshed list."""
    if not yes and not typer.confirm(DELETE_CONFIRMATION):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    with get_coupon_store() as store:
        if not store.delete_coupon(coupon_id):
            console.print(f"[red]❌ Failed to delete coupon '{coupon_id}'[/red]")
            raise typer.Exit(code=1)

        console.print("[green]✅ Coupon deleted successfully[/green]")
        render_coupons(_load_coupons(store))


@coupons_app.command("add")
def add_coupon(
    code: str = typer.Option(..., "--code", "-c", help="Coupon code"),
    discount: float = typer.Option(..., "--discount", "-d", help="Discount percent"),
    usage_limit: int = typer.Option(..., "--usage-limit", "-u", help="Maximum redemptions"),
    start_date: datetime = typer.Option(..., "--start", help="Start date (YYYY-MM-DD)"),
    end_date: datetime = typer.Option(..., "--end", help="End date (YYYY-MM-DD)"),
) -> None:
    """Create a coupon."""
    with get_coupon_store() as store:
        try:
            coupon = store.create_coupon(
                code=code,
                discount_percent=discount,
                usage_limit=usage_limit,
                start_date=start_date,
                end_date=end_date,
            )
        except ValueError as e:
            # pydantic rejects the payload before it is sent
            console.print(f"[red]❌ Invalid coupon: {e}[/red]")
            raise typer.Exit(code=1) from e
        except (CouponApiError, httpx.HTTPError) as e:
            console.print(f"[red]❌ Failed to create coupon: {e}[/red]")
            raise typer.Exit(code=1) from e

        console.print(f"[green]✅ Coupon '{coupon.code}' created ({coupon.id})[/green]")
