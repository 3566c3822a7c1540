"""
Connector API routes — list connectors, OAuth callback and connect dispatch.

Route prefix: {config.api_prefix}/connectors

The registry serving these routes is the one ``create_app`` stored on
``app.state.connector_registry``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from connectors.base import ConnectorBase
from connectors.registry import ConnectorRegistry
from connectors.steps import describe_step
from utils.schemas import ConnectorResult, ConnectorSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/connectors", tags=["connectors"])


# ── Dependencies & helpers ─────────────────────────────────────────────


def get_registry(request: Request) -> ConnectorRegistry:
    """FastAPI dependency — the registry attached to the running app."""
    return request.app.state.connector_registry


def _lookup(registry: ConnectorRegistry, connector_id: str) -> ConnectorBase:
    connector = registry.get(connector_id)
    if connector is None:
        # ids may be numeric; path parameters are always strings
        connector = next(
            (c for c in registry.list_connectors() if str(c.get_id()) == connector_id),
            None,
        )
    if connector is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Connector '{connector_id}' not found",
        )
    return connector


def _snapshot(connector: ConnectorBase) -> ConnectorSnapshot:
    data = connector.to_json()
    data["steps"] = [describe_step(s) for s in data["steps"]]
    data["options"] = connector.options.as_json_dict()
    return ConnectorSnapshot(**data)


def _raise_for_error(connector_id: str, result: ConnectorResult) -> None:
    if result.ok:
        return
    logger.info(
        "Connector %s rejected request: %s (%s)",
        connector_id,
        result.error.message,
        result.error.code,
    )
    if result.is_unauthorized:
        code = status.HTTP_401_UNAUTHORIZED
    else:
        code = result.error.code
        if code is None or not 400 <= code < 600:
            code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(
        status_code=code,
        detail=result.error.message,
    )


# ── Routes ─────────────────────────────────────────────────────────────


@router.get("", response_model=List[ConnectorSnapshot])
async def list_connectors(
    registry: ConnectorRegistry = Depends(get_registry),
) -> List[ConnectorSnapshot]:
    """Every registered connector, in registration order."""
    return [_snapshot(c) for c in registry.list_connectors()]


@router.get("/{connector_id}", response_model=ConnectorSnapshot)
async def get_connector(
    connector_id: str,
    registry: ConnectorRegistry = Depends(get_registry),
) -> ConnectorSnapshot:
    return _snapshot(_lookup(registry, connector_id))


@router.get("/{connector_id}/callback")
async def auth_callback(
    connector_id: str,
    code: str = Query(...),
    pipe_id: str = Query(...),
    registry: ConnectorRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """
    OAuth redirect target for the generic auth flow.

    The connector exchanges ``code`` for credentials and returns the
    updated pipe.
    """
    connector = _lookup(registry, connector_id)
    result = await connector.auth_callback(code, pipe_id)
    _raise_for_error(connector_id, result)
    return {"pipe": result.value}


@router.get("/{connector_id}/connect")
async def connect_data_source(
    connector_id: str,
    request: Request,
    response: Response,
    pipe_id: str = Query(...),
    url: str = Query(""),
    registry: ConnectorRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    """Start the connection handshake with the connector's data source."""
    connector = _lookup(registry, connector_id)
    result = await connector.connect_data_source(request, response, pipe_id, url)
    _raise_for_error(connector_id, result)
    return {"result": result.value}
