"""Reflex configuration for the Order Desk application."""

import reflex as rx

config = rx.Config(
    app_name="order_desk",
    # Use the src directory structure
    app_module_import="order_desk.app",
)
