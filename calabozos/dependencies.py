"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException

from calabozos.config import get_settings
from calabozos.db import ClassRepository, InMemoryClassRepository, SqlClassRepository
from calabozos.facade import ClassQueryFacade
from calabozos.sync import ClassSyncService
from upstream.dnd_api import UpstreamClient

_repository: ClassRepository | None = None
_upstream_client: UpstreamClient | None = None


def get_repository() -> ClassRepository:
    """
    Return a singleton repository so stored classes persist across requests.
    """
    global _repository
    if _repository:
        return _repository

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _repository = InMemoryClassRepository()
    else:
        _repository = SqlClassRepository(settings.database_url)
    return _repository


def get_upstream_client() -> UpstreamClient:
    global _upstream_client
    if _upstream_client:
        return _upstream_client

    settings = get_settings()
    _upstream_client = UpstreamClient(
        base_url=settings.dnd_api_base_url,
        timeout=settings.dnd_api_timeout_seconds,
    )
    return _upstream_client


def get_sync_service(
    client: UpstreamClient = Depends(get_upstream_client),
    repository: ClassRepository = Depends(get_repository),
) -> ClassSyncService:
    return ClassSyncService(client, repository)


def get_query_facade(
    client: UpstreamClient = Depends(get_upstream_client),
) -> ClassQueryFacade:
    return ClassQueryFacade(client)


def require_api_token(authorization: str | None = Header(default=None)) -> None:
    """
    Guard for the API prefix. Open when no token is configured.
    """
    expected = get_settings().api_token
    if not expected:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(
        token.strip().encode("utf-8"), expected.encode("utf-8")
    ):
        raise HTTPException(status_code=401, detail="Unauthenticated")
