"""Storefront admin console."""

import typer

from .coupon_commands import coupons_app

app = typer.Typer(
    help="🛒 Storefront admin console",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(coupons_app, name="coupons")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
