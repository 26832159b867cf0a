"""Productboard connector: entity health searches and actions for automation hosts."""

__version__ = "0.1.0"
