"""
Static and demo data for the Order Desk dashboard.

This package contains fixture data used by DemoOrderDeskService for
development, testing, and demonstrations without a running backend.

Modules:
- demo_data: Deterministic clients, products, orders and lookup lists
"""
