"""
FastAPI Dependencies.

Provides dependency injection for the order service, the id codec,
identity verification and manifest rendering.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import IIdCodec, IIdentityProvider, IManifestRenderer
from core.application.services import OrderApplicationService
from core.domain.exceptions import AuthenticationRequired
from core.domain.value_objects import CallerIdentity
from core.infrastructure.database.config import get_session_factory
from core.infrastructure.event_bus import get_event_bus
from core.infrastructure.rendering import JinjaManifestRenderer
from core.infrastructure.security import HashIdCodec, JwtIdentityProvider
from core.settings import get_app_settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_id_codec: Optional[HashIdCodec] = None
_identity_provider: Optional[JwtIdentityProvider] = None
_order_service: Optional[OrderApplicationService] = None
_manifest_renderer: Optional[JinjaManifestRenderer] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_id_codec() -> IIdCodec:
    global _id_codec
    if _id_codec is None:
        _id_codec = HashIdCodec(get_app_settings().hashids)
        logger.info("Created HashIdCodec instance")
    return _id_codec


def get_identity_provider() -> IIdentityProvider:
    global _identity_provider
    if _identity_provider is None:
        _identity_provider = JwtIdentityProvider(get_app_settings().auth)
        logger.info("Created JwtIdentityProvider instance")
    return _identity_provider


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    provider: IIdentityProvider = Depends(get_identity_provider),
) -> CallerIdentity:
    """Resolve the caller from the Authorization: Bearer header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequired("Missing bearer token")
    return provider.verify(credentials.credentials)


def get_order_service() -> OrderApplicationService:
    global _order_service

    if _order_service is None:
        _order_service = OrderApplicationService(
            session_factory=get_session_factory(),
            event_bus=get_event_bus(),
            settings=get_app_settings().orders,
        )
        logger.info("Created OrderApplicationService instance")

    return _order_service


def get_manifest_renderer(codec: IIdCodec = Depends(get_id_codec)) -> IManifestRenderer:
    global _manifest_renderer
    if _manifest_renderer is None:
        _manifest_renderer = JinjaManifestRenderer(encode_id=codec.encode)
    return _manifest_renderer


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _id_codec, _identity_provider, _order_service, _manifest_renderer

    _id_codec = None
    _identity_provider = None
    _order_service = None
    _manifest_renderer = None

    logger.info("Dependencies reset")
