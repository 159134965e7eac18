"""Stockflow: warehouse stock ledger, purchase orders and automatic reordering."""

__version__ = "1.0.0"
