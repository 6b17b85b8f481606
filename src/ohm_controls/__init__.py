"""Hypermedia controls for CRUD responses, derived from an OpenAPI document."""

__version__ = "0.1.0"
