"""
Helpers for connectors that authenticate through the Passport-based
strategy flow.

The strategy object and the ``info`` payload belong to the external
authentication collaborator; they are passed through untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from connectors.base import ConnectorBase

logger = logging.getLogger(__name__)


@runtime_checkable
class PassportStrategy(Protocol):
    name: str


def authorization_params(connector: ConnectorBase, **overrides: Any) -> Dict[str, Any]:
    """
    Parameters for the authorization request: the connector's own
    parameters, with host-supplied *overrides* taking precedence.
    """
    params = dict(connector.get_passport_authorization_params() or {})
    params.update(overrides)
    return params


async def finalize_passport_auth(
    connector: ConnectorBase,
    info: Any,
    pipe: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Run the connector's post-processing hook after a successful strategy
    verification.

    Returns the updated pipe configuration to persist, or ``None`` when
    nothing must be persisted (the connector does not use the strategy flow
    for *pipe*, the hook failed, or it succeeded without returning a pipe).
    """
    if not connector.uses_passport(pipe):
        logger.warning(
            "Connector %s has no Passport strategy for pipe %s",
            connector.get_id(),
            pipe.get("_id"),
        )
        return None

    result = await connector.passport_auth_callback_post_processing(info, pipe)
    if result is None:
        return None
    if not result.ok:
        logger.warning(
            "Passport post-processing failed for connector %s (pipe %s): %s",
            connector.get_id(),
            pipe.get("_id"),
            result.error.message,
        )
        return None
    if result.value is None:
        logger.debug("Connector %s left pipe unchanged", connector.get_id())
        return None
    return result.value
