"""
ConnectorRegistry — holds every connector known to the orchestrator.

Connector implementations live in importable modules that expose a
module-level ``connector`` instance.  Loading a module registers that
instance, assigns its id and records where it was loaded from (``path``).
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Set

from connectors.base import ConnectorBase, ConnectorId

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class ConnectorRegistry:
    """Process-wide singleton mapping connector id → connector."""

    _instance: Optional["ConnectorRegistry"] = None

    def __new__(cls) -> "ConnectorRegistry":
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._connectors: Dict[ConnectorId, ConnectorBase] = {}
            inst._initialized: Set[ConnectorId] = set()
            cls._instance = inst
        return cls._instance

    def register(
        self,
        connector: ConnectorBase,
        connector_id: Optional[ConnectorId] = None,
        label: Optional[str] = None,
        path: Optional[str] = None,
    ) -> ConnectorBase:
        """
        Register *connector* and assign its identity.

        The id is *connector_id* if given, else whatever the connector already
        set on itself.  The label falls back to the id.

        Raises
        ------
        TypeError  – not a ConnectorBase
        ValueError – no id available, or id already registered
        """
        if not isinstance(connector, ConnectorBase):
            raise TypeError(
                f"Expected a ConnectorBase instance, got {type(connector).__name__}"
            )

        cid = connector_id if connector_id is not None else connector.get_id()
        if cid is None:
            raise ValueError(f"Cannot register {connector!r}: no connector id")
        if cid in self._connectors:
            raise ValueError(f"Connector '{cid}' is already registered")

        connector.set_id(cid)
        if label is not None:
            connector.set_label(label)
        elif connector.get_label() is None:
            connector.set_label(str(cid))
        if path is not None:
            connector.path = path

        self._connectors[cid] = connector
        logger.info("Connector registered: %s (%s)", connector.get_label(), cid)
        return connector

    def load_module(self, module_name: str) -> ConnectorBase:
        """
        Import *module_name* and register its ``connector`` attribute.

        The id defaults to the last segment of the module name.
        """
        try:
            module = importlib.import_module(module_name)
        except Exception as exc:
            raise RuntimeError(
                f"Failed to import connector module '{module_name}': {exc}"
            ) from exc

        connector = getattr(module, "connector", None)
        if not isinstance(connector, ConnectorBase):
            raise RuntimeError(
                f"Module '{module_name}' does not expose a ConnectorBase "
                f"instance named 'connector'"
            )

        cid = connector.get_id()
        if cid is None:
            cid = module_name.rsplit(".", 1)[-1]
        if self._connectors.get(cid) is connector:
            return connector
        return self.register(
            connector,
            connector_id=cid,
            path=getattr(module, "__file__", None),
        )

    def load_modules(self, module_names: Iterable[str]) -> int:
        count = 0
        for name in module_names:
            self.load_module(name)
            count += 1
        logger.info("Loaded %d connector modules", count)
        return count

    def initialize(self, app: "FastAPI") -> None:
        """Call ``init(app)`` on every connector not yet initialized."""
        for cid, connector in self._connectors.items():
            if cid in self._initialized:
                continue
            connector.init(app)
            self._initialized.add(cid)
            logger.debug("Connector %s initialized", cid)

    def get(self, connector_id: ConnectorId) -> Optional[ConnectorBase]:
        return self._connectors.get(connector_id)

    def has(self, connector_id: ConnectorId) -> bool:
        return connector_id in self._connectors

    def list_ids(self) -> List[ConnectorId]:
        return list(self._connectors.keys())

    def list_connectors(self) -> List[ConnectorBase]:
        return list(self._connectors.values())

    def snapshots(self) -> List[Dict[str, Any]]:
        return [c.to_json() for c in self._connectors.values()]

    # ── reset (for tests) ──────────────────────────────────────────────

    @classmethod
    def reset(cls) -> None:
        """Destroy singleton — only useful in test teardown."""
        cls._instance = None
