"""
Page shell: navigation bar, page header and content container.
"""

import reflex as rx

from order_desk.state import APP_SUBTITLE, APP_TITLE, AuthState

_NAV_ITEMS = [
    ("Dashboard", "/dashboard", "layout-dashboard"),
    ("Orders", "/orders", "clipboard-list"),
    ("Clients", "/clients", "users"),
    ("Products", "/products", "package"),
    ("Invoices", "/invoices", "file-text"),
]


def _nav_link(label: str, href: str, icon: str) -> rx.Component:
    return rx.link(
        rx.hstack(rx.icon(icon, size=16), rx.text(label, size="2"), align="center"),
        href=href,
        underline="none",
        padding_x="0.75em",
        padding_y="0.5em",
        border_radius="var(--radius-2)",
        _hover={"background": "var(--accent-3)"},
    )


def navbar() -> rx.Component:
    return rx.hstack(
        rx.hstack(
            rx.icon("notebook-pen", size=22),
            rx.heading(APP_TITLE, size="4"),
            align="center",
        ),
        rx.hstack(*[_nav_link(*item) for item in _NAV_ITEMS], spacing="1"),
        rx.spacer(),
        rx.cond(
            AuthState.signed_in,
            rx.hstack(
                rx.text(AuthState.user_name, size="2", color_scheme="gray"),
                rx.button("Sign out", variant="soft", size="1", on_click=AuthState.logout),
                align="center",
            ),
            rx.link("Sign in", href="/login", size="2"),
        ),
        align="center",
        width="100%",
        padding="1em",
        border_bottom="1px solid var(--gray-5)",
    )


def page(title: str, *children: rx.Component, actions: rx.Component | None = None) -> rx.Component:
    """
    Standard page layout.

    Args:
        title: Page heading.
        children: Page body components.
        actions: Optional buttons shown to the right of the heading.
    """
    return rx.box(
        navbar(),
        rx.container(
            rx.vstack(
                rx.hstack(
                    rx.vstack(
                        rx.heading(title, size="6", as_="h1"),
                        rx.text(APP_SUBTITLE, color_scheme="gray", size="2"),
                        spacing="1",
                    ),
                    rx.spacer(),
                    actions or rx.fragment(),
                    width="100%",
                    align="end",
                ),
                *children,
                spacing="4",
                width="100%",
            ),
            size="4",
            padding_y="1.5em",
        ),
        on_mount=AuthState.on_load,
    )


def error_banner(message: rx.Var[str], on_dismiss: rx.EventHandler) -> rx.Component:
    """Inline, dismissible error shown above a list that kept its last-good rows."""
    return rx.cond(
        message != "",
        rx.callout.root(
            rx.callout.icon(rx.icon("triangle-alert")),
            rx.callout.text(message),
            rx.icon_button(rx.icon("x", size=14), size="1", variant="ghost", on_click=on_dismiss),
            color_scheme="red",
            role="alert",
            width="100%",
        ),
    )


def empty_state(icon: str, title: str, hint: rx.Component) -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.icon(icon, size=48, color="var(--gray-8)"),
            rx.heading(title, size="3", as_="h3"),
            hint,
            align="center",
            spacing="2",
            padding="2em",
        ),
        width="100%",
    )


def loading_state(noun: str) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.spinner(size="3"),
            rx.text(f"Loading {noun}...", color_scheme="gray"),
            justify="center",
            align="center",
            padding="2em",
        ),
        width="100%",
    )
