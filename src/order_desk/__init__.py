"""
Order Desk: clients, products, orders and invoices for a small studio.

The reusable core (filters, paging controller, pricing, export) has no
Reflex dependency; the Reflex app lives in order_desk.app.
"""

__version__ = "0.1.0"
