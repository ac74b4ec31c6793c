"""
Reflex state management for the Order Desk application.

List screens (orders, clients, products) keep their paging logic in a
per-tab PagedCollectionController (see order_desk.sessions). Event handlers
drive the controller or its FilterBar and then copy the controller
snapshot into the state vars below, so the UI always reflects the newest
applied response.

Mutations never touch the list directly: after a save or delete the
controller is refreshed.
"""

import asyncio
from datetime import datetime, time, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import reflex as rx

from order_desk.analytics import (
    COMPARISON_PERIODS,
    client_earnings,
    earnings_comparison,
    orders_between,
    period_window,
    revenue_trend,
)
from order_desk.config import get_settings
from order_desk.errors import OrderDeskError, ValidationError
from order_desk.export import ExportRequest, export_document
from order_desk.lib import logs
from order_desk.models.common import AccumulatedList
from order_desk.models.entities import Client, Order, Product
from order_desk.models.filters import OrderFilterState
from order_desk.models.reflex_models import (
    ClientEarningModel,
    ClientModel,
    OptionModel,
    OrderModel,
    ProductModel,
    TrendModel,
    client_options,
    client_to_model,
    earnings_to_models,
    name_options,
    order_to_model,
    product_options,
    product_to_model,
    trend_to_models,
)
from order_desk.pricing import OrderDraft, parse_price, parse_quantity
from order_desk.services import get_service, get_token_cache
from order_desk.sessions import REGISTRY, ListSession
from order_desk.utils import (
    DATE_PRESETS,
    format_currency,
    input_range,
    preset_range,
)

LOG = logs.logger(__file__)

_SETTINGS = get_settings()

# Branding configuration
APP_TITLE = "Order Desk" if _SETTINGS.generic_branding else "Academic Studio Order Desk"
APP_SUBTITLE = (
    "Manage clients, products and orders."
    if _SETTINGS.generic_branding
    else "Track client orders, pricing and invoices for the studio."
)

ALL = "all"
TREND_DAYS = 30


def _copy_flags(state: rx.State, snapshot: AccumulatedList) -> None:
    state.total = snapshot.total
    state.has_more = snapshot.has_more
    state.is_loading = snapshot.is_loading
    state.is_loading_more = snapshot.is_loading_more
    state.error = snapshot.error or ""


def _count(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _summary(total: int, noun: str, search: str) -> str:
    base = f"{_count(total, noun)} found"
    if search.strip():
        return f'{base} for "{search.strip()}"'
    return base


class AuthState(rx.State):
    """Sign-in form backed by the on-disk token cache."""

    user_name: str = ""
    is_signing_in: bool = False

    @rx.var
    def signed_in(self) -> bool:
        return self.user_name != ""

    @rx.event
    def on_load(self):
        """Restore a cached session, if one is still valid."""
        restored = get_token_cache().restore()
        if restored is not None:
            _, user = restored
            self.user_name = user.get("name") or user.get("email") or ""

    @rx.event(background=True)
    async def login(self, form_data: dict):
        email = (form_data.get("email") or "").strip()
        password = form_data.get("password") or ""
        if not email or not password:
            return rx.toast.error("Email and password are required")
        async with self:
            self.is_signing_in = True
        try:
            token, user = await get_service().login(email, password)
        except OrderDeskError as exc:
            async with self:
                self.is_signing_in = False
            return rx.toast.error(str(exc))
        get_token_cache().store(token, user, remember=bool(form_data.get("remember")))
        async with self:
            self.is_signing_in = False
            self.user_name = user.get("name") or email
        LOG.info("Signed in as %s", email)
        return rx.redirect("/orders")

    @rx.event
    def logout(self):
        get_token_cache().clear()
        REGISTRY.drop(self.router.session.client_token)
        self.user_name = ""
        return rx.redirect("/login")


class OrdersState(rx.State):
    """
    Orders list screen plus the create/edit and delete dialogs.

    The list vars mirror the orders controller snapshot; the form_* vars
    hold the order dialog inputs as typed.
    """

    orders: list[OrderModel] = []
    total: int = 0
    has_more: bool = False
    is_loading: bool = True
    is_loading_more: bool = False
    error: str = ""

    # Filter bar
    search_text: str = ""
    searching: bool = False
    start_date: str = ""
    end_date: str = ""
    client_filter: str = ALL
    product_filter: str = ALL

    # Lookups
    client_choices: list[OptionModel] = []
    product_choices: list[OptionModel] = []
    class_choices: list[OptionModel] = []
    genre_choices: list[OptionModel] = []
    _prices: dict[str, str] = {}

    # Order dialog
    dialog_open: bool = False
    editing_id: str = ""
    form_client_id: str = ""
    form_product_id: str = ""
    form_quantity: str = "1"
    form_order_id: str = ""
    form_class: str = ""
    form_week: str = ""
    form_genre: str = ""
    form_description: str = ""
    new_class: str = ""
    new_genre: str = ""
    is_saving: bool = False

    # Delete confirmation
    delete_id: str = ""
    is_deleting: bool = False

    @rx.var
    def result_summary(self) -> str:
        return _summary(self.total, "order", self.search_text)

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and len(self.orders) == 0

    @rx.var
    def has_filters(self) -> bool:
        return bool(
            self.search_text
            or self.start_date
            or self.end_date
            or self.client_filter != ALL
            or self.product_filter != ALL
        )

    @rx.var
    def dialog_title(self) -> str:
        return "Edit Order" if self.editing_id else "New Order"

    @rx.var(cache=False)
    def total_preview(self) -> str:
        """Live total for the dialog, recomputed from the selected product and quantity."""
        try:
            return format_currency(self._draft().total_cost)
        except ValidationError:
            return format_currency(0)

    # ---------- List ----------

    @rx.event(background=True)
    async def on_load(self):
        """Create or refresh this tab's orders controller and load the pickers."""
        async with self:
            session, created = self._session()
            self.is_loading = True
        if created:
            await session.controller.initialize()
        else:
            await session.controller.refresh()
        await self._load_lookups()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def search_changed(self, value: str):
        async with self:
            self.search_text = value
            self.searching = True
            session, _ = self._session()
        emitted = await session.filter_bar.search_changed(value)
        if not emitted:
            # Superseded by a newer keystroke or a clear
            return
        async with self:
            self.searching = False
            self._sync(session)

    @rx.event(background=True)
    async def set_start_date(self, value: str):
        async with self:
            self.start_date = value
        return await self._apply_dates()

    @rx.event(background=True)
    async def set_end_date(self, value: str):
        async with self:
            self.end_date = value
        return await self._apply_dates()

    @rx.event(background=True)
    async def set_client_filter(self, value: str):
        async with self:
            self.client_filter = value
            session, _ = self._session()
            self.is_loading = True
        await session.filter_bar.filter_changed(client_id=None if value == ALL else value)
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def set_product_filter(self, value: str):
        async with self:
            self.product_filter = value
            session, _ = self._session()
            self.is_loading = True
        await session.filter_bar.filter_changed(product_id=None if value == ALL else value)
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def clear_filters(self):
        async with self:
            self.search_text = ""
            self.searching = False
            self.start_date = ""
            self.end_date = ""
            self.client_filter = ALL
            self.product_filter = ALL
            session, _ = self._session()
            self.is_loading = True
        await session.filter_bar.clear()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def load_more(self):
        """Infinite-scroll callback; the controller ignores it while busy."""
        async with self:
            session, _ = self._session()
        LOG.info(
            "Load Started - has_more: %s length:%s",
            session.controller.has_more,
            len(session.controller.items),
        )
        await session.controller.on_sentinel_visible()
        async with self:
            self._sync(session)

    @rx.event
    def dismiss_error(self):
        self._session()[0].controller.clear_error()
        self.error = ""

    # ---------- Order dialog ----------

    @rx.event
    def set_field(self, name: str, value: str):
        """Store one dialog input; the total preview recomputes from it."""
        if name not in _ORDER_FORM_FIELDS:
            LOG.warning("Ignoring unknown order form field %s", name)
            return
        setattr(self, name, value)

    @rx.event
    def set_dialog_open(self, is_open: bool):
        self.dialog_open = is_open
        if not is_open:
            self.is_saving = False

    @rx.event
    def open_create(self):
        self._fill_form(OrderDraft())
        self.dialog_open = True

    @rx.event
    def open_edit(self, order_id: str):
        order = self._find(order_id)
        if order is None:
            return rx.toast.error("Order not found. Refresh and try again.")
        draft = OrderDraft.from_order(order, self._catalog_product(order.product_id))
        self._fill_form(draft)
        self.dialog_open = True

    @rx.event(background=True)
    async def save_order(self):
        async with self:
            try:
                order = self._draft().to_order()
            except ValidationError as exc:
                return rx.toast.error(str(exc))
            self.is_saving = True
            session, _ = self._session()
        try:
            await get_service().save_order(order)
        except OrderDeskError as exc:
            LOG.error("Saving order failed: %s", exc, exc_info=True)
            async with self:
                self.is_saving = False
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.is_saving = False
            self.dialog_open = False
            self._sync(session)
        return rx.toast.success("Order updated" if order.id else "Order created")

    @rx.event(background=True)
    async def add_order_class(self):
        async with self:
            name = self.new_class.strip()
        if not name:
            return rx.toast.error("Class name is required")
        try:
            added = await get_service().add_class(name)
            classes = await get_service().list_classes()
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        async with self:
            self.class_choices = name_options(classes)
            self.form_class = added.name
            self.new_class = ""

    @rx.event(background=True)
    async def add_genre(self):
        async with self:
            name = self.new_genre.strip()
        if not name:
            return rx.toast.error("Genre name is required")
        try:
            added = await get_service().add_genre(name)
            genres = await get_service().list_genres()
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        async with self:
            self.genre_choices = name_options(genres)
            self.form_genre = added.name
            self.new_genre = ""

    # ---------- Delete ----------

    @rx.event
    def ask_delete(self, order_id: str):
        self.delete_id = order_id

    @rx.event
    def cancel_delete(self):
        self.delete_id = ""

    @rx.event(background=True)
    async def delete_order(self):
        async with self:
            order_id = self.delete_id
            self.is_deleting = True
            session, _ = self._session()
        try:
            await get_service().delete_order(order_id)
        except OrderDeskError as exc:
            async with self:
                self.is_deleting = False
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.is_deleting = False
            self.delete_id = ""
            self._sync(session)
        return rx.toast.success("Order deleted")

    # ---------- Helpers ----------

    def _session(self) -> tuple[ListSession[Order], bool]:
        return REGISTRY.get(self.router.session.client_token, "orders", get_service())

    def _sync(self, session: ListSession[Order]) -> None:
        snapshot = session.controller.snapshot()
        tz_name = _SETTINGS.timezone
        self.orders = [order_to_model(order, tz_name) for order in snapshot.items]
        _copy_flags(self, snapshot)

    async def _apply_dates(self):
        async with self:
            start, end = input_range(self.start_date, self.end_date, _SETTINGS.timezone)
            session, _ = self._session()
            self.is_loading = True
        rejected = await session.change_date_range(start, end)
        async with self:
            self._sync(session)
        if rejected:
            return rx.toast.error(rejected)
        return None

    async def _load_lookups(self) -> None:
        service = get_service()
        try:
            clients, products, classes, genres = await asyncio.gather(
                service.all_clients(),
                service.all_products(),
                service.list_classes(),
                service.list_genres(),
            )
        except OrderDeskError as exc:
            LOG.error("Loading order lookups failed: %s", exc, exc_info=True)
            return
        async with self:
            self.client_choices = client_options(clients)
            self.product_choices = product_options(products)
            self.class_choices = name_options(classes)
            self.genre_choices = name_options(genres)
            self._prices = {product.id: str(product.price_per_unit) for product in products}

    def _find(self, order_id: str) -> Order | None:
        for order in self._session()[0].controller.items:
            if order.id == order_id:
                return order
        return None

    def _catalog_product(self, product_id: str) -> Product | None:
        price = self._prices.get(product_id)
        if price is None:
            return None
        return Product(id=product_id, price_per_unit=Decimal(price))

    def _draft(self) -> OrderDraft:
        return OrderDraft(
            client_id=self.form_client_id,
            product=self._catalog_product(self.form_product_id),
            quantity=parse_quantity(self.form_quantity),
            order_id=self.form_order_id.strip(),
            order_class=self.form_class,
            week=self.form_week.strip(),
            genre=self.form_genre,
            description=self.form_description.strip(),
            editing_id=self.editing_id or None,
        )

    def _fill_form(self, draft: OrderDraft) -> None:
        self.editing_id = draft.editing_id or ""
        self.form_client_id = draft.client_id
        self.form_product_id = draft.product.id if draft.product else ""
        self.form_quantity = str(draft.quantity)
        self.form_order_id = draft.order_id
        self.form_class = draft.order_class
        self.form_week = draft.week
        self.form_genre = draft.genre
        self.form_description = draft.description
        self.new_class = ""
        self.new_genre = ""
        self.is_saving = False


_ORDER_FORM_FIELDS = frozenset(
    {
        "form_client_id",
        "form_product_id",
        "form_quantity",
        "form_order_id",
        "form_class",
        "form_week",
        "form_genre",
        "form_description",
        "new_class",
        "new_genre",
    }
)


class ClientsState(rx.State):
    """Clients list screen with its create/edit dialog."""

    clients: list[ClientModel] = []
    total: int = 0
    has_more: bool = False
    is_loading: bool = True
    is_loading_more: bool = False
    error: str = ""
    search_text: str = ""

    dialog_open: bool = False
    editing_id: str = ""
    form_client_id: str = ""
    form_name: str = ""
    form_institution: str = ""
    form_phone: str = ""
    form_email: str = ""
    is_saving: bool = False
    delete_id: str = ""

    @rx.var
    def result_summary(self) -> str:
        return _summary(self.total, "client", self.search_text)

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and len(self.clients) == 0

    @rx.event(background=True)
    async def on_load(self):
        async with self:
            session, created = self._session()
            self.is_loading = True
        if created:
            await session.controller.initialize()
        else:
            await session.controller.refresh()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def search_changed(self, value: str):
        async with self:
            self.search_text = value
            session, _ = self._session()
        if await session.filter_bar.search_changed(value):
            async with self:
                self._sync(session)

    @rx.event(background=True)
    async def clear_search(self):
        async with self:
            self.search_text = ""
            session, _ = self._session()
        await session.filter_bar.clear()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def load_more(self):
        async with self:
            session, _ = self._session()
        await session.controller.on_sentinel_visible()
        async with self:
            self._sync(session)

    @rx.event
    def dismiss_error(self):
        self._session()[0].controller.clear_error()
        self.error = ""

    @rx.event
    def set_field(self, name: str, value: str):
        if name in {"form_client_id", "form_name", "form_institution", "form_phone", "form_email"}:
            setattr(self, name, value)

    @rx.event
    def set_dialog_open(self, is_open: bool):
        self.dialog_open = is_open

    @rx.event
    def open_create(self):
        self._fill_form(Client(id=""))
        self.dialog_open = True

    @rx.event
    def open_edit(self, client_id: str):
        session, _ = self._session()
        for client in session.controller.items:
            if client.id == client_id:
                self._fill_form(client)
                self.dialog_open = True
                return
        return rx.toast.error("Client not found. Refresh and try again.")

    @rx.event(background=True)
    async def save_client(self):
        async with self:
            if not self.form_name.strip():
                return rx.toast.error("Client name is required")
            client = Client(
                id=self.editing_id,
                client_id=self.form_client_id.strip(),
                client_name=self.form_name.strip(),
                institution=self.form_institution.strip(),
                phone=self.form_phone.strip(),
                email=self.form_email.strip(),
            )
            self.is_saving = True
            session, _ = self._session()
        try:
            await get_service().save_client(client)
        except OrderDeskError as exc:
            async with self:
                self.is_saving = False
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.is_saving = False
            self.dialog_open = False
            self._sync(session)
        return rx.toast.success("Client saved")

    @rx.event
    def ask_delete(self, client_id: str):
        self.delete_id = client_id

    @rx.event
    def cancel_delete(self):
        self.delete_id = ""

    @rx.event(background=True)
    async def delete_client(self):
        async with self:
            client_id = self.delete_id
            session, _ = self._session()
        try:
            await get_service().delete_client(client_id)
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.delete_id = ""
            self._sync(session)
        return rx.toast.success("Client deleted")

    def _session(self) -> tuple[ListSession[Client], bool]:
        return REGISTRY.get(self.router.session.client_token, "clients", get_service())

    def _sync(self, session: ListSession[Client]) -> None:
        snapshot = session.controller.snapshot()
        self.clients = [client_to_model(client, _SETTINGS.timezone) for client in snapshot.items]
        _copy_flags(self, snapshot)

    def _fill_form(self, client: Client) -> None:
        self.editing_id = client.id
        self.form_client_id = client.client_id
        self.form_name = client.client_name
        self.form_institution = client.institution
        self.form_phone = client.phone
        self.form_email = client.email
        self.is_saving = False


class ProductsState(rx.State):
    """Products (price list) screen with its create/edit dialog."""

    products: list[ProductModel] = []
    total: int = 0
    has_more: bool = False
    is_loading: bool = True
    is_loading_more: bool = False
    error: str = ""
    search_text: str = ""

    dialog_open: bool = False
    editing_id: str = ""
    form_product_id: str = ""
    form_name: str = ""
    form_price: str = ""
    is_saving: bool = False
    delete_id: str = ""

    @rx.var
    def result_summary(self) -> str:
        return _summary(self.total, "product", self.search_text)

    @rx.var
    def is_empty(self) -> bool:
        return not self.is_loading and len(self.products) == 0

    @rx.event(background=True)
    async def on_load(self):
        async with self:
            session, created = self._session()
            self.is_loading = True
        if created:
            await session.controller.initialize()
        else:
            await session.controller.refresh()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def search_changed(self, value: str):
        async with self:
            self.search_text = value
            session, _ = self._session()
        if await session.filter_bar.search_changed(value):
            async with self:
                self._sync(session)

    @rx.event(background=True)
    async def clear_search(self):
        async with self:
            self.search_text = ""
            session, _ = self._session()
        await session.filter_bar.clear()
        async with self:
            self._sync(session)

    @rx.event(background=True)
    async def load_more(self):
        async with self:
            session, _ = self._session()
        await session.controller.on_sentinel_visible()
        async with self:
            self._sync(session)

    @rx.event
    def dismiss_error(self):
        self._session()[0].controller.clear_error()
        self.error = ""

    @rx.event
    def set_field(self, name: str, value: str):
        if name in {"form_product_id", "form_name", "form_price"}:
            setattr(self, name, value)

    @rx.event
    def set_dialog_open(self, is_open: bool):
        self.dialog_open = is_open

    @rx.event
    def open_create(self):
        self._fill_form(Product(id=""))
        self.form_price = ""
        self.dialog_open = True

    @rx.event
    def open_edit(self, product_id: str):
        session, _ = self._session()
        for product in session.controller.items:
            if product.id == product_id:
                self._fill_form(product)
                self.dialog_open = True
                return
        return rx.toast.error("Product not found. Refresh and try again.")

    @rx.event(background=True)
    async def save_product(self):
        async with self:
            try:
                if not self.form_name.strip():
                    raise ValidationError("Product name is required")
                price = parse_price(self.form_price)
            except ValidationError as exc:
                return rx.toast.error(str(exc))
            product = Product(
                id=self.editing_id,
                product_id=self.form_product_id.strip(),
                name=self.form_name.strip(),
                price_per_unit=price,
            )
            self.is_saving = True
            session, _ = self._session()
        try:
            await get_service().save_product(product)
        except OrderDeskError as exc:
            async with self:
                self.is_saving = False
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.is_saving = False
            self.dialog_open = False
            self._sync(session)
        return rx.toast.success("Product saved")

    @rx.event
    def ask_delete(self, product_id: str):
        self.delete_id = product_id

    @rx.event
    def cancel_delete(self):
        self.delete_id = ""

    @rx.event(background=True)
    async def delete_product(self):
        async with self:
            product_id = self.delete_id
            session, _ = self._session()
        try:
            await get_service().delete_product(product_id)
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        await session.controller.refresh()
        async with self:
            self.delete_id = ""
            self._sync(session)
        return rx.toast.success("Product deleted")

    def _session(self) -> tuple[ListSession[Product], bool]:
        return REGISTRY.get(self.router.session.client_token, "products", get_service())

    def _sync(self, session: ListSession[Product]) -> None:
        snapshot = session.controller.snapshot()
        self.products = [product_to_model(product) for product in snapshot.items]
        _copy_flags(self, snapshot)

    def _fill_form(self, product: Product) -> None:
        model = product_to_model(product)
        self.editing_id = product.id
        self.form_product_id = product.product_id
        self.form_name = product.name
        self.form_price = model.price
        self.is_saving = False


class InvoicesState(rx.State):
    """
    Invoice and report builder.

    Fetches every order in the chosen period (and client, in invoice mode)
    and exports the fetched rows without another round trip.
    """

    mode: str = "invoice"
    client_id: str = ""
    preset: str = "this_month"
    start_date: str = ""
    end_date: str = ""
    client_choices: list[OptionModel] = []

    rows: list[OrderModel] = []
    total_amount: str = format_currency(0)
    is_loading: bool = False
    _orders: list[Order] = []
    _clients: dict[str, Client] = {}

    @rx.var
    def preset_choices(self) -> list[str]:
        return list(DATE_PRESETS) + ["custom"]

    @rx.var
    def has_rows(self) -> bool:
        return len(self.rows) > 0

    @rx.var
    def total_label(self) -> str:
        return "Total Amount" if self.mode == "invoice" else "Total Revenue"

    @rx.event(background=True)
    async def on_load(self):
        try:
            clients = await get_service().all_clients()
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        async with self:
            self.client_choices = client_options(clients)
            self._clients = {client.id: client for client in clients}
            if not self.start_date:
                self._apply_preset(self.preset)

    @rx.event
    def set_mode(self, mode: str):
        self.mode = mode
        self._clear_rows()

    @rx.event
    def set_client(self, client_id: str):
        self.client_id = client_id
        self._clear_rows()

    @rx.event
    def set_preset(self, preset: str):
        self.preset = preset
        if preset != "custom":
            self._apply_preset(preset)
        self._clear_rows()

    @rx.event
    def set_start_date(self, value: str):
        self.start_date = value
        self.preset = "custom"
        self._clear_rows()

    @rx.event
    def set_end_date(self, value: str):
        self.end_date = value
        self.preset = "custom"
        self._clear_rows()

    @rx.event(background=True)
    async def fetch_orders(self):
        async with self:
            if self.mode == "invoice" and not self.client_id:
                return rx.toast.error("Please select a client")
            start, end = input_range(self.start_date, self.end_date, _SETTINGS.timezone)
            filters = OrderFilterState(
                start_date=start,
                end_date=end,
                client_id=self.client_id if self.mode == "invoice" else None,
                sort_by="created_at",
                sort_order="asc",
            )
            self.is_loading = True
        try:
            orders = await get_service().all_orders(filters)
        except OrderDeskError as exc:
            LOG.error("Fetching invoice orders failed: %s", exc, exc_info=True)
            async with self:
                self.is_loading = False
            return rx.toast.error(str(exc))
        async with self:
            self._orders = orders
            self.rows = [order_to_model(order, _SETTINGS.timezone) for order in orders]
            self.total_amount = format_currency(sum((o.total_cost for o in orders), Decimal("0")))
            self.is_loading = False
        if not orders:
            return rx.toast.info("No orders found for the selected period")

    @rx.event
    def export_pdf(self):
        return self._export("pdf")

    @rx.event
    def export_xlsx(self):
        return self._export("xlsx")

    def _export(self, fmt: str):
        start, end = input_range(self.start_date, self.end_date, _SETTINGS.timezone)
        request = ExportRequest(
            orders=list(self._orders),
            start_date=start,
            end_date=end,
            mode=self.mode,
            client=self._clients.get(self.client_id) if self.mode == "invoice" else None,
            tz_name=_SETTINGS.timezone,
        )
        try:
            filename, data = export_document(request, fmt)
        except OrderDeskError as exc:
            return rx.toast.error(str(exc))
        return rx.download(data=data, filename=filename)

    def _apply_preset(self, preset: str) -> None:
        now = datetime.now(ZoneInfo(_SETTINGS.timezone))
        start, end = preset_range(preset, now)
        self.start_date = start.date().isoformat()
        self.end_date = end.date().isoformat()

    def _clear_rows(self) -> None:
        self._orders = []
        self.rows = []
        self.total_amount = format_currency(0)


class DashboardState(rx.State):
    """Earnings comparison, recent revenue trend and top clients."""

    period: str = "month"
    current_total: str = format_currency(0)
    previous_total: str = format_currency(0)
    current_orders: int = 0
    previous_orders: int = 0
    change: str = ""
    change_up: bool = True
    trend: list[TrendModel] = []
    top_clients: list[ClientEarningModel] = []
    is_loading: bool = False

    @rx.var
    def period_choices(self) -> list[str]:
        return list(COMPARISON_PERIODS)

    @rx.var
    def current_label(self) -> str:
        return f"This {self.period}"

    @rx.var
    def previous_label(self) -> str:
        return f"Last {self.period}"

    @rx.var
    def current_detail(self) -> str:
        return _count(self.current_orders, "order")

    @rx.var
    def previous_detail(self) -> str:
        return _count(self.previous_orders, "order")

    @rx.event(background=True)
    async def on_load(self):
        return await self._refresh()

    @rx.event(background=True)
    async def set_period(self, period: str):
        if period not in COMPARISON_PERIODS:
            return None
        async with self:
            self.period = period
        return await self._refresh()

    async def _refresh(self):
        async with self:
            period = self.period
            self.is_loading = True
        now = datetime.now(ZoneInfo(_SETTINGS.timezone))
        window = period_window(period, now)
        trend_start = (now - timedelta(days=TREND_DAYS - 1)).date()
        since = min(window.previous_start, datetime.combine(trend_start, time.min, tzinfo=now.tzinfo))
        try:
            orders = await get_service().all_orders(OrderFilterState(start_date=since, end_date=now))
        except OrderDeskError as exc:
            LOG.error("Loading dashboard orders failed: %s", exc, exc_info=True)
            async with self:
                self.is_loading = False
            return rx.toast.error(str(exc))

        comparison = earnings_comparison(orders, period, now)
        change = comparison.change_percent
        trend = revenue_trend(orders, trend_start, now.date(), _SETTINGS.timezone)
        top = client_earnings(orders_between(orders, window.current_start, window.current_end))
        async with self:
            self.current_total = format_currency(comparison.current_total)
            self.previous_total = format_currency(comparison.previous_total)
            self.current_orders = comparison.current_orders
            self.previous_orders = comparison.previous_orders
            self.change = "New" if change is None else f"{change:+.1f}%"
            self.change_up = change is None or change >= 0
            self.trend = trend_to_models(trend)
            self.top_clients = earnings_to_models(top)
            self.is_loading = False
