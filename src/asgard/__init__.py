"""Asgard: a script launcher that surfaces frequently used scripts first."""

__version__ = "0.3.0"
