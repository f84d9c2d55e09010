# app/routes/shared.py
"""
Shared dependencies for route modules.
"""

from fastapi import Request

from app.core.rules_provider import ClientRulesProvider
from app.core.types import ConfigLoader


def get_rules_provider(request: Request) -> ClientRulesProvider:
    """Process-wide rules provider created at startup."""
    return request.app.state.rules_provider


def get_config_loader(request: Request) -> ConfigLoader:
    """Loader that reads client configuration documents from the store."""
    return request.app.state.config_store.read_file
