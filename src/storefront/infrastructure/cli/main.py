import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_breadcrumb,
    category_delete,
    category_list,
    category_tree,
    category_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_checkout,
    order_show,
    order_stats,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog, cart and order engine"""
    configure_logging(get_settings())


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage the category tree."""


@cli.group()
def cart() -> None:
    """Manage a session's cart."""


@cli.group()
def order() -> None:
    """Check out and administer orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
category.add_command(category_add)
category.add_command(category_update)
category.add_command(category_delete)
category.add_command(category_tree)
category.add_command(category_list)
category.add_command(category_breadcrumb)
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_clear)
order.add_command(order_checkout)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_stats)
