"""Setuptools build hooks for ndview."""

from __future__ import annotations

from setuptools import setup

# Metadata lives in pyproject.toml. ndview ships pure Python modules plus the
# index grammar, so the default command classes produce a ``py3-none-any``
# wheel.
setup()
