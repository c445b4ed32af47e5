"""
Translator API Package
======================

FastAPI-based REST API for the KQL-SPL translator.
"""

from kql_spl_translator.api.server import app, create_app

__all__ = ["app", "create_app"]
