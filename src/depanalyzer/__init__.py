"""Depanalyzer - dependency graph builder and architecture rule checker."""

__version__ = "0.4.0"
