"""Shared playlist curation: per-member song aggregation and fair refreshes."""

__version__ = "0.1.0"
