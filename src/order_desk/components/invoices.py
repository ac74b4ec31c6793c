"""
Invoices screen: pick a mode, client and period, preview the rows, export.
"""

import reflex as rx

from order_desk.models.reflex_models import OrderModel
from order_desk.state import InvoicesState


def _preview_row(order: OrderModel) -> rx.Component:
    return rx.table.row(
        rx.table.cell(order.client_name),
        rx.table.cell(order.order_class),
        rx.table.cell(order.product_name),
        rx.table.cell(order.week),
        rx.table.cell(order.description),
        rx.table.cell(order.quantity, text_align="right"),
        rx.table.cell(order.unit_price, text_align="right"),
        rx.table.cell(order.total_cost, text_align="right"),
    )


def _labelled(label: str, control: rx.Component) -> rx.Component:
    return rx.vstack(rx.text(label, size="1", color_scheme="gray"), control, spacing="1")


def controls() -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.radio_group(
                ["invoice", "report"],
                value=InvoicesState.mode,
                on_change=InvoicesState.set_mode,
                direction="row",
            ),
            rx.grid(
                rx.cond(
                    InvoicesState.mode == "invoice",
                    _labelled(
                        "Client",
                        rx.select.root(
                            rx.select.trigger(placeholder="Select client", width="100%"),
                            rx.select.content(
                                rx.foreach(
                                    InvoicesState.client_choices,
                                    lambda option: rx.select.item(option.label, value=option.value),
                                ),
                            ),
                            value=InvoicesState.client_id,
                            on_change=InvoicesState.set_client,
                        ),
                    ),
                    rx.fragment(),
                ),
                _labelled(
                    "Period",
                    rx.select(
                        InvoicesState.preset_choices,
                        value=InvoicesState.preset,
                        on_change=InvoicesState.set_preset,
                    ),
                ),
                _labelled(
                    "From",
                    rx.input(type="date", value=InvoicesState.start_date, on_change=InvoicesState.set_start_date),
                ),
                _labelled(
                    "To",
                    rx.input(type="date", value=InvoicesState.end_date, on_change=InvoicesState.set_end_date),
                ),
                columns="4",
                spacing="3",
                width="100%",
            ),
            rx.hstack(
                rx.button(
                    rx.icon("search", size=16),
                    "Fetch orders",
                    loading=InvoicesState.is_loading,
                    on_click=InvoicesState.fetch_orders,
                ),
                rx.spacer(),
                rx.button(
                    rx.icon("file-down", size=16),
                    "PDF",
                    variant="soft",
                    disabled=~InvoicesState.has_rows,
                    on_click=InvoicesState.export_pdf,
                ),
                rx.button(
                    rx.icon("sheet", size=16),
                    "Excel",
                    variant="soft",
                    disabled=~InvoicesState.has_rows,
                    on_click=InvoicesState.export_xlsx,
                ),
                width="100%",
            ),
            spacing="3",
        ),
        width="100%",
    )


def preview() -> rx.Component:
    return rx.cond(
        InvoicesState.has_rows,
        rx.card(
            rx.table.root(
                rx.table.header(
                    rx.table.row(
                        *[
                            rx.table.column_header_cell(label)
                            for label in ("Client", "Class", "Product", "Week", "Description", "Units", "Unit Price", "Total")
                        ]
                    )
                ),
                rx.table.body(rx.foreach(InvoicesState.rows, _preview_row)),
                width="100%",
            ),
            rx.hstack(
                rx.spacer(),
                rx.text(InvoicesState.total_label, ": ", weight="bold"),
                rx.text(InvoicesState.total_amount, weight="bold"),
                padding_top="1em",
            ),
            width="100%",
        ),
        rx.text("Fetch orders to preview the document.", color_scheme="gray"),
    )
