"""Embeddable chat widget proxied to an automation webhook."""

__version__ = "0.1.0"
