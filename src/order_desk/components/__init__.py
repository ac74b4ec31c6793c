"""
Reusable Reflex UI components for the Order Desk application.

This package provides the building blocks for each page:
- layout: Navigation bar, page shell, error/empty/loading states
- infinite_scroll: react-infinite-scroll-component wrapper and list helper
- orders: Orders filter bar, list, order dialog and delete confirmation
- catalog: Clients and products lists with their dialogs
- invoices: Invoice/report builder and export buttons
- login: Sign-in form

All components are functions returning rx.Component trees bound to the
state classes in order_desk.state.
"""
