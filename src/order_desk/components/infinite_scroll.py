"""
Infinite scroll component wrapper for react-infinite-scroll-component.

The wrapped component watches the end of the list and calls `next` when it
scrolls into view. That callback is the list controller's sentinel entry
point, so duplicate or early calls are harmless: the controller ignores
them while a fetch is in flight or when nothing more is available.
"""

import reflex as rx


class InfiniteScroll(rx.NoSSRComponent):
    """Wrapper for react-infinite-scroll-component."""

    library = "react-infinite-scroll-component@6.1.0"
    tag = "InfiniteScroll"
    is_default = True

    data_length: rx.Var[int]
    next: rx.EventHandler[rx.event.no_args_event_spec]
    has_more: rx.Var[bool]

    loader: rx.Component | None = None
    end_message: rx.Component | None = None
    scrollable_target: rx.Var[str]
    # Fraction of the list height (or "NNpx") at which `next` fires
    scroll_threshold: rx.Var[str]


def scroll_list(
    rows: rx.Component,
    data_length: rx.Var[int],
    on_more: rx.EventHandler,
    has_more: rx.Var[bool],
    noun: str,
) -> rx.Component:
    """
    Wrap list rows in an InfiniteScroll with the standard loader and footer.

    Args:
        rows: Usually an rx.foreach over the state's row models.
        data_length: Number of rows currently rendered.
        on_more: Event fired when the end of the list becomes visible.
        has_more: Whether the backend reported more pages.
        noun: Plural item name for the loader and footer text.
    """
    return InfiniteScroll.create(
        rows,
        data_length=data_length,
        next=on_more,
        has_more=has_more,
        scroll_threshold="0.9",
        loader=rx.hstack(
            rx.spinner(size="2"),
            rx.text(f"Loading more {noun}...", color_scheme="gray", size="2"),
            justify="center",
            padding="1em",
        ),
        end_message=rx.center(
            rx.text(f"All {noun} loaded", color_scheme="gray", size="1"),
            padding="1em",
        ),
    )
