"""Inventory manager: line-item stock tracking persisted to a CSV file."""

__version__ = "1.0.0"
