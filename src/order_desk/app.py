"""
Reflex application entry point for the Order Desk dashboard.

This module initializes the Reflex app and registers one page per screen.
"""

import reflex as rx

from order_desk.components import catalog, dashboard, invoices, login, orders
from order_desk.components.layout import page
from order_desk.config import get_settings
from order_desk.lib import logs
from order_desk.state import (
    APP_TITLE,
    ClientsState,
    DashboardState,
    InvoicesState,
    OrdersState,
    ProductsState,
)

LOG = logs.logger(__file__)

_SETTINGS = get_settings()
LOG.info("Backend: %s (%s)", _SETTINGS.service, _SETTINGS.api_url)

# Font URLs for theming
_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"


def orders_page() -> rx.Component:
    return page(
        "Orders",
        orders.filter_bar(),
        orders.order_results(),
        orders.order_dialog(),
        orders.delete_dialog(),
        actions=orders.new_order_button(),
    )


def clients_page() -> rx.Component:
    return page("Clients", catalog.clients_body(), actions=catalog.new_client_button())


def products_page() -> rx.Component:
    return page("Products", catalog.products_body(), actions=catalog.new_product_button())


def dashboard_page() -> rx.Component:
    return page("Dashboard", dashboard.dashboard_body())


def invoices_page() -> rx.Component:
    return page("Invoices & Reports", invoices.controls(), invoices.preview())


def login_page() -> rx.Component:
    return rx.box(login.login_form())


# Create the Reflex app
app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
        accent_color="indigo",
    ),
    stylesheets=[_FONT_URL],
)

app.add_page(orders_page, route="/", title=APP_TITLE, on_load=OrdersState.on_load)
app.add_page(orders_page, route="/orders", title=f"Orders | {APP_TITLE}", on_load=OrdersState.on_load)
app.add_page(clients_page, route="/clients", title=f"Clients | {APP_TITLE}", on_load=ClientsState.on_load)
app.add_page(products_page, route="/products", title=f"Products | {APP_TITLE}", on_load=ProductsState.on_load)
app.add_page(invoices_page, route="/invoices", title=f"Invoices | {APP_TITLE}", on_load=InvoicesState.on_load)
app.add_page(dashboard_page, route="/dashboard", title=f"Dashboard | {APP_TITLE}", on_load=DashboardState.on_load)
app.add_page(login_page, route="/login", title=f"Sign in | {APP_TITLE}")


def main() -> None:
    """Entrypoint used by `order-desk` console script."""
    # In production, use `reflex run` instead
    import subprocess
    import sys

    subprocess.run([sys.executable, "-m", "reflex", "run", "--frontend-port", str(_SETTINGS.app_port)])


if __name__ == "__main__":
    main()
