"""
Orders screen: filter bar, infinite list, order dialog and delete confirmation.
"""

import reflex as rx

from order_desk.components.infinite_scroll import scroll_list
from order_desk.components.layout import empty_state, error_banner, loading_state
from order_desk.models.reflex_models import OptionModel, OrderModel
from order_desk.state import ALL, OrdersState


def _options(options: rx.Var[list[OptionModel]], placeholder: str, value, on_change, all_label: str | None = None):
    items = [rx.select.item(all_label, value=ALL)] if all_label else []
    return rx.select.root(
        rx.select.trigger(placeholder=placeholder, width="100%"),
        rx.select.content(
            *items,
            rx.foreach(options, lambda option: rx.select.item(option.label, value=option.value)),
        ),
        value=value,
        on_change=on_change,
    )


def filter_bar() -> rx.Component:
    """Search box (debounced server-side), date range and client/product filters."""
    return rx.card(
        rx.vstack(
            rx.hstack(
                rx.input(
                    rx.input.slot(rx.icon("search", size=16)),
                    rx.input.slot(
                        rx.cond(OrdersState.searching, rx.spinner(size="1")),
                    ),
                    placeholder="Search by order ID, class, week, description, client or product...",
                    value=OrdersState.search_text,
                    on_change=OrdersState.search_changed,
                    width="100%",
                ),
                rx.cond(
                    OrdersState.has_filters,
                    rx.button(
                        rx.icon("x", size=14),
                        "Clear",
                        variant="soft",
                        color_scheme="gray",
                        on_click=OrdersState.clear_filters,
                    ),
                ),
                width="100%",
            ),
            rx.grid(
                rx.vstack(
                    rx.text("From", size="1", color_scheme="gray"),
                    rx.input(type="date", value=OrdersState.start_date, on_change=OrdersState.set_start_date),
                    spacing="1",
                ),
                rx.vstack(
                    rx.text("To", size="1", color_scheme="gray"),
                    rx.input(type="date", value=OrdersState.end_date, on_change=OrdersState.set_end_date),
                    spacing="1",
                ),
                rx.vstack(
                    rx.text("Client", size="1", color_scheme="gray"),
                    _options(
                        OrdersState.client_choices,
                        "All clients",
                        OrdersState.client_filter,
                        OrdersState.set_client_filter,
                        all_label="All clients",
                    ),
                    spacing="1",
                ),
                rx.vstack(
                    rx.text("Product", size="1", color_scheme="gray"),
                    _options(
                        OrdersState.product_choices,
                        "All products",
                        OrdersState.product_filter,
                        OrdersState.set_product_filter,
                        all_label="All products",
                    ),
                    spacing="1",
                ),
                columns="4",
                spacing="3",
                width="100%",
            ),
            spacing="3",
        ),
        width="100%",
    )


def order_row(order: OrderModel) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.vstack(
                rx.hstack(
                    rx.text(order.order_id, weight="bold"),
                    rx.badge(order.order_class, variant="soft"),
                    rx.cond(order.genre != "", rx.badge(order.genre, color_scheme="gray")),
                    align="center",
                ),
                rx.text(order.description, size="2"),
                rx.text(
                    order.client_name,
                    " · ",
                    order.product_name,
                    " · Week ",
                    order.week,
                    " · ",
                    order.created,
                    size="1",
                    color_scheme="gray",
                ),
                spacing="1",
                align="start",
            ),
            rx.spacer(),
            rx.vstack(
                rx.text(order.total_cost, weight="bold"),
                rx.text(order.quantity, " x ", order.unit_price, size="1", color_scheme="gray"),
                align="end",
                spacing="1",
            ),
            rx.hstack(
                rx.icon_button(rx.icon("pencil", size=14), variant="ghost", on_click=OrdersState.open_edit(order.id)),
                rx.icon_button(
                    rx.icon("trash-2", size=14),
                    variant="ghost",
                    color_scheme="red",
                    on_click=OrdersState.ask_delete(order.id),
                ),
            ),
            align="center",
            width="100%",
        ),
        width="100%",
        margin_bottom="0.5em",
    )


def order_results() -> rx.Component:
    return rx.vstack(
        error_banner(OrdersState.error, OrdersState.dismiss_error),
        rx.cond(
            OrdersState.is_loading & (OrdersState.orders.length() == 0),
            loading_state("orders"),
            rx.cond(
                OrdersState.is_empty,
                empty_state(
                    "inbox",
                    "No orders found",
                    rx.cond(
                        OrdersState.has_filters,
                        rx.text("No orders match the current filters.", color_scheme="gray"),
                        rx.text("Create the first order to get started.", color_scheme="gray"),
                    ),
                ),
                rx.box(
                    rx.hstack(
                        rx.text(OrdersState.result_summary, color_scheme="gray", size="2"),
                        rx.cond(OrdersState.is_loading, rx.spinner(size="1")),
                        align="center",
                        margin_bottom="0.5em",
                    ),
                    scroll_list(
                        rx.foreach(OrdersState.orders, order_row),
                        data_length=OrdersState.orders.length(),
                        on_more=OrdersState.load_more,
                        has_more=OrdersState.has_more,
                        noun="orders",
                    ),
                    width="100%",
                ),
            ),
        ),
        width="100%",
    )


def _field(label: str, control: rx.Component) -> rx.Component:
    return rx.vstack(rx.text(label, size="2", weight="medium"), control, spacing="1", width="100%")


def _text_input(field: str, value, placeholder: str = "", **props) -> rx.Component:
    return rx.input(
        value=value,
        placeholder=placeholder,
        on_change=lambda text: OrdersState.set_field(field, text),
        width="100%",
        **props,
    )


def _add_inline(field: str, value, on_add, placeholder: str) -> rx.Component:
    return rx.hstack(
        _text_input(field, value, placeholder, size="1"),
        rx.button("Add", size="1", variant="soft", on_click=on_add),
        width="100%",
    )


def order_dialog() -> rx.Component:
    """Create/edit dialog; stays open when a save fails."""
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(OrdersState.dialog_title),
            rx.vstack(
                rx.grid(
                    _field(
                        "Client",
                        _options(
                            OrdersState.client_choices,
                            "Select client",
                            OrdersState.form_client_id,
                            lambda value: OrdersState.set_field("form_client_id", value),
                        ),
                    ),
                    _field(
                        "Product",
                        _options(
                            OrdersState.product_choices,
                            "Select product",
                            OrdersState.form_product_id,
                            lambda value: OrdersState.set_field("form_product_id", value),
                        ),
                    ),
                    _field("Order ID", _text_input("form_order_id", OrdersState.form_order_id, "e.g. ORD-1024")),
                    _field("Week", _text_input("form_week", OrdersState.form_week, "e.g. 12")),
                    _field(
                        "Class",
                        rx.vstack(
                            _options(
                                OrdersState.class_choices,
                                "Select class",
                                OrdersState.form_class,
                                lambda value: OrdersState.set_field("form_class", value),
                            ),
                            _add_inline("new_class", OrdersState.new_class, OrdersState.add_order_class, "New class"),
                            width="100%",
                        ),
                    ),
                    _field(
                        "Genre",
                        rx.vstack(
                            _options(
                                OrdersState.genre_choices,
                                "Select genre",
                                OrdersState.form_genre,
                                lambda value: OrdersState.set_field("form_genre", value),
                            ),
                            _add_inline("new_genre", OrdersState.new_genre, OrdersState.add_genre, "New genre"),
                            width="100%",
                        ),
                    ),
                    _field(
                        "Pages / slides",
                        _text_input("form_quantity", OrdersState.form_quantity, type="number", min=1),
                    ),
                    _field(
                        "Total",
                        rx.heading(OrdersState.total_preview, size="5"),
                    ),
                    columns="2",
                    spacing="3",
                    width="100%",
                ),
                _field(
                    "Description",
                    rx.text_area(
                        value=OrdersState.form_description,
                        on_change=lambda text: OrdersState.set_field("form_description", text),
                        width="100%",
                    ),
                ),
                rx.hstack(
                    rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                    rx.button("Save", loading=OrdersState.is_saving, on_click=OrdersState.save_order),
                    justify="end",
                    width="100%",
                ),
                spacing="4",
            ),
            max_width="640px",
        ),
        open=OrdersState.dialog_open,
        on_open_change=OrdersState.set_dialog_open,
    )


def delete_dialog() -> rx.Component:
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title("Delete order"),
            rx.alert_dialog.description("This order will be removed permanently. Continue?"),
            rx.hstack(
                rx.alert_dialog.cancel(
                    rx.button("Cancel", variant="soft", color_scheme="gray", on_click=OrdersState.cancel_delete)
                ),
                rx.button(
                    "Delete",
                    color_scheme="red",
                    loading=OrdersState.is_deleting,
                    on_click=OrdersState.delete_order,
                ),
                justify="end",
                spacing="3",
                margin_top="1em",
            ),
        ),
        open=OrdersState.delete_id != "",
    )


def new_order_button() -> rx.Component:
    return rx.button(rx.icon("plus", size=16), "New Order", on_click=OrdersState.open_create)
