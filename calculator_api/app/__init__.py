"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, storage connection and
errors), ``schemas`` (pydantic models and input parsing),
``services`` (data access) and ``api`` (routes).
"""

from .main import app  # noqa: F401
