"""Infer, render and diff the shape of JSON data."""

__version__ = "0.1.0"
