"""Client Task Tracker - REST API for client work items and their payment status."""

__version__ = "0.1.0"
