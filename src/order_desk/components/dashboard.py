"""
Dashboard screen: earnings comparison, revenue trend and top clients.
"""

import reflex as rx

from order_desk.models.reflex_models import ClientEarningModel
from order_desk.state import TREND_DAYS, DashboardState


def _stat(label, value, detail) -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.text(label, size="2", color_scheme="gray"),
            rx.heading(value, size="6"),
            rx.text(detail, size="1", color_scheme="gray"),
            spacing="1",
        ),
        width="100%",
    )


def comparison() -> rx.Component:
    return rx.vstack(
        rx.hstack(
            rx.heading("Earnings", size="4"),
            rx.spacer(),
            rx.select(
                DashboardState.period_choices,
                value=DashboardState.period,
                on_change=DashboardState.set_period,
            ),
            align="center",
            width="100%",
        ),
        rx.grid(
            _stat(DashboardState.current_label, DashboardState.current_total, DashboardState.current_detail),
            _stat(DashboardState.previous_label, DashboardState.previous_total, DashboardState.previous_detail),
            rx.card(
                rx.vstack(
                    rx.text("Change", size="2", color_scheme="gray"),
                    rx.hstack(
                        rx.cond(
                            DashboardState.change_up,
                            rx.icon("trending-up", color="green"),
                            rx.icon("trending-down", color="red"),
                        ),
                        rx.heading(DashboardState.change, size="6"),
                        align="center",
                    ),
                    spacing="1",
                ),
                width="100%",
            ),
            columns="3",
            spacing="3",
            width="100%",
        ),
        width="100%",
    )


def trend_chart() -> rx.Component:
    return rx.card(
        rx.text(f"Revenue, last {TREND_DAYS} days", weight="medium", margin_bottom="0.5em"),
        rx.recharts.bar_chart(
            rx.recharts.cartesian_grid(stroke_dasharray="3 3"),
            rx.recharts.bar(data_key="total", fill=rx.color("accent", 9)),
            rx.recharts.x_axis(data_key="day"),
            rx.recharts.y_axis(),
            rx.recharts.graphing_tooltip(),
            data=DashboardState.trend,
            height=280,
            width="100%",
        ),
        width="100%",
    )


def _client_row(row: ClientEarningModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row.client_name),
        rx.table.cell(row.orders, text_align="right"),
        rx.table.cell(row.total, text_align="right"),
    )


def top_clients() -> rx.Component:
    return rx.card(
        rx.text("Top clients this ", DashboardState.period, weight="medium", margin_bottom="0.5em"),
        rx.cond(
            DashboardState.top_clients.length() > 0,
            rx.table.root(
                rx.table.header(
                    rx.table.row(
                        rx.table.column_header_cell("Client"),
                        rx.table.column_header_cell("Orders", text_align="right"),
                        rx.table.column_header_cell("Revenue", text_align="right"),
                    )
                ),
                rx.table.body(rx.foreach(DashboardState.top_clients, _client_row)),
                width="100%",
            ),
            rx.text("No orders in this period yet.", color_scheme="gray"),
        ),
        width="100%",
    )


def dashboard_body() -> rx.Component:
    return rx.fragment(
        comparison(),
        rx.cond(DashboardState.is_loading, rx.center(rx.spinner(size="3"), width="100%")),
        trend_chart(),
        top_clients(),
    )
