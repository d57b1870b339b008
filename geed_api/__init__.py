"""
Top‑level package for the Geed website API.

This file makes ``geed_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``geed_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
