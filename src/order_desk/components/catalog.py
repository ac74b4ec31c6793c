"""
Clients and products screens.

Both are plain searchable lists with a create/edit dialog and a delete
confirmation; they share the layout helpers below.
"""

import reflex as rx

from order_desk.components.infinite_scroll import scroll_list
from order_desk.components.layout import empty_state, error_banner, loading_state
from order_desk.models.reflex_models import ClientModel, ProductModel
from order_desk.state import ClientsState, ProductsState


def _search(state, placeholder: str) -> rx.Component:
    return rx.hstack(
        rx.input(
            rx.input.slot(rx.icon("search", size=16)),
            placeholder=placeholder,
            value=state.search_text,
            on_change=state.search_changed,
            width="100%",
        ),
        rx.cond(
            state.search_text != "",
            rx.button("Clear", variant="soft", color_scheme="gray", on_click=state.clear_search),
        ),
        width="100%",
    )


def _results(state, rows: rx.Var, row, noun: str, icon: str) -> rx.Component:
    return rx.vstack(
        error_banner(state.error, state.dismiss_error),
        rx.cond(
            state.is_loading & (rows.length() == 0),
            loading_state(noun),
            rx.cond(
                state.is_empty,
                empty_state(icon, f"No {noun} found", rx.text(f"Add {noun} with the button above.", color_scheme="gray")),
                rx.box(
                    rx.text(state.result_summary, color_scheme="gray", size="2", margin_bottom="0.5em"),
                    scroll_list(
                        rx.foreach(rows, row),
                        data_length=rows.length(),
                        on_more=state.load_more,
                        has_more=state.has_more,
                        noun=noun,
                    ),
                    width="100%",
                ),
            ),
        ),
        width="100%",
    )


def _row_actions(state, record_id) -> rx.Component:
    return rx.hstack(
        rx.icon_button(rx.icon("pencil", size=14), variant="ghost", on_click=state.open_edit(record_id)),
        rx.icon_button(
            rx.icon("trash-2", size=14),
            variant="ghost",
            color_scheme="red",
            on_click=state.ask_delete(record_id),
        ),
    )


def _input(state, label: str, field: str, value, **props) -> rx.Component:
    return rx.vstack(
        rx.text(label, size="2", weight="medium"),
        rx.input(value=value, on_change=lambda text: state.set_field(field, text), width="100%", **props),
        spacing="1",
        width="100%",
    )


def _dialog(state, title: str, fields: list[rx.Component], on_save) -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(title),
            rx.vstack(
                *fields,
                rx.hstack(
                    rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                    rx.button("Save", loading=state.is_saving, on_click=on_save),
                    justify="end",
                    width="100%",
                ),
                spacing="3",
            ),
            max_width="480px",
        ),
        open=state.dialog_open,
        on_open_change=state.set_dialog_open,
    )


def _delete_dialog(state, noun: str, on_delete) -> rx.Component:
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title(f"Delete {noun}"),
            rx.alert_dialog.description(f"This {noun} will be removed permanently. Continue?"),
            rx.hstack(
                rx.alert_dialog.cancel(
                    rx.button("Cancel", variant="soft", color_scheme="gray", on_click=state.cancel_delete)
                ),
                rx.button("Delete", color_scheme="red", on_click=on_delete),
                justify="end",
                spacing="3",
                margin_top="1em",
            ),
        ),
        open=state.delete_id != "",
    )


# ---------- Clients ----------


def client_row(client: ClientModel) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.vstack(
                rx.hstack(
                    rx.text(client.client_name, weight="bold"),
                    rx.badge(client.client_id, variant="soft"),
                    align="center",
                ),
                rx.text(client.institution, size="2"),
                rx.text(client.email, " · ", client.phone, size="1", color_scheme="gray"),
                spacing="1",
                align="start",
            ),
            rx.spacer(),
            rx.text("Added ", client.created, size="1", color_scheme="gray"),
            _row_actions(ClientsState, client.id),
            align="center",
            width="100%",
        ),
        width="100%",
        margin_bottom="0.5em",
    )


def clients_body() -> rx.Component:
    return rx.fragment(
        _search(ClientsState, "Search by name, client ID, institution, email or phone..."),
        _results(ClientsState, ClientsState.clients, client_row, "clients", "users"),
        _dialog(
            ClientsState,
            "Client",
            [
                _input(ClientsState, "Client ID", "form_client_id", ClientsState.form_client_id),
                _input(ClientsState, "Name", "form_name", ClientsState.form_name),
                _input(ClientsState, "Institution", "form_institution", ClientsState.form_institution),
                _input(ClientsState, "Email", "form_email", ClientsState.form_email, type="email"),
                _input(ClientsState, "Phone", "form_phone", ClientsState.form_phone),
            ],
            ClientsState.save_client,
        ),
        _delete_dialog(ClientsState, "client", ClientsState.delete_client),
    )


def new_client_button() -> rx.Component:
    return rx.button(rx.icon("plus", size=16), "New Client", on_click=ClientsState.open_create)


# ---------- Products ----------


def product_row(product: ProductModel) -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.vstack(
                rx.text(product.name, weight="bold"),
                rx.text(product.product_id, size="1", color_scheme="gray"),
                spacing="1",
                align="start",
            ),
            rx.spacer(),
            rx.text(product.price_display, " per unit", weight="medium"),
            _row_actions(ProductsState, product.id),
            align="center",
            width="100%",
        ),
        width="100%",
        margin_bottom="0.5em",
    )


def products_body() -> rx.Component:
    return rx.fragment(
        _search(ProductsState, "Search by product name or ID..."),
        _results(ProductsState, ProductsState.products, product_row, "products", "package"),
        _dialog(
            ProductsState,
            "Product",
            [
                _input(ProductsState, "Product ID", "form_product_id", ProductsState.form_product_id),
                _input(ProductsState, "Name", "form_name", ProductsState.form_name),
                _input(ProductsState, "Price per unit", "form_price", ProductsState.form_price, type="number", min=0, step="0.01"),
            ],
            ProductsState.save_product,
        ),
        _delete_dialog(ProductsState, "product", ProductsState.delete_product),
    )


def new_product_button() -> rx.Component:
    return rx.button(rx.icon("plus", size=16), "New Product", on_click=ProductsState.open_create)
