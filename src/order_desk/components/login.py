"""Sign-in form."""

import reflex as rx

from order_desk.state import AuthState


def login_form() -> rx.Component:
    return rx.center(
        rx.card(
            rx.form(
                rx.vstack(
                    rx.heading("Sign in", size="5"),
                    rx.input(name="email", type="email", placeholder="Email", width="100%"),
                    rx.input(name="password", type="password", placeholder="Password", width="100%"),
                    rx.checkbox("Remember me", name="remember"),
                    rx.button("Sign in", type="submit", loading=AuthState.is_signing_in, width="100%"),
                    spacing="3",
                ),
                on_submit=AuthState.login,
            ),
            width="360px",
        ),
        padding_top="4em",
    )
