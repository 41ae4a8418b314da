"""Toolkit for downloading manga chapter archives and converting them to PDF."""

__version__ = "0.1.0"
