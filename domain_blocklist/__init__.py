"""Compile remote and local domain block lists into Bind9, hosts or custom formats."""

__version__ = "1.0.0"
