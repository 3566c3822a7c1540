"""
ConnectorBase — the contract every data-source connector subclasses.

The orchestrator treats all connectors through this surface:

  • identity (id, label) and the host-assigned ``path``
  • an option bag seeded with defaults at construction
  • the ordered list of pipeline steps the connector contributes
  • lifecycle notifications around each run
  • authentication extension points, either the generic flow
    (``auth_callback`` / ``connect_data_source``) or the strategy-based
    Passport flow (``get_passport_strategy`` and friends)

Every default is safe: accessors never raise, lifecycle hooks are no-ops,
and unimplemented authentication answers with a 401 ``ConnectorResult``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from utils.schemas import ConnectorOptions, ConnectorResult

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

    from connectors.passport import PassportStrategy


ConnectorId = Union[str, int]


class ConnectorBase:
    """Base class for all data-source connectors."""

    def __init__(
        self,
        options: Union[ConnectorOptions, Mapping[str, Any], None] = None,
    ) -> None:
        self._id: Optional[ConnectorId] = None
        self._label: Optional[str] = None
        self._steps: List[Any] = []
        self._path: Optional[str] = None

        if isinstance(options, ConnectorOptions):
            self._options = options
        else:
            # caller's mapping is copied; defaults only fill missing keys
            self._options = ConnectorOptions.from_mapping(options or {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id!r} label={self._label!r}>"

    # ── Identity ────────────────────────────────────────────────────────

    def get_id(self) -> Optional[ConnectorId]:
        return self._id

    def set_id(self, connector_id: Optional[ConnectorId]) -> None:
        self._id = connector_id

    def get_label(self) -> Optional[str]:
        return self._label

    def set_label(self, label: Optional[str]) -> None:
        self._label = label

    @property
    def path(self) -> Optional[str]:
        """Source location of the connector implementation, set by the host."""
        return self._path

    @path.setter
    def path(self, value: Optional[str]) -> None:
        self._path = value

    # ── Options ─────────────────────────────────────────────────────────

    @property
    def options(self) -> ConnectorOptions:
        return self._options

    def get_option(self, key: str) -> Any:
        """Value stored under *key*, or ``None`` when the key is absent."""
        return self._options.get(key)

    def set_option(self, key: str, value: Any) -> None:
        self._options.set(key, value)

    # ── Steps ───────────────────────────────────────────────────────────

    def get_steps(self) -> List[Any]:
        return self._steps

    def set_steps(self, steps: List[Any]) -> None:
        """
        Replace the steps run for this connector.

        The list is kept by reference, in execution order.  Items should
        satisfy ``connectors.steps.RunStep``.
        """
        self._steps = steps

    # ── Lifecycle ───────────────────────────────────────────────────────

    def init(self, app: "FastAPI") -> None:
        """
        Called once at startup with the hosting application.

        Override to register connector-specific endpoints, e.g. an OAuth
        redirect target via ``app.add_api_route`` or ``app.include_router``.
        """

    async def run_started(self) -> ConnectorResult:
        """
        Called when a new run begins.  The run does not progress until this
        returns.  Return a failure result to abort the run.
        """
        return ConnectorResult.success()

    async def run_finished(self) -> None:
        """Called when a run completes."""

    # ── Generic authentication ──────────────────────────────────────────

    async def auth_callback(
        self, oauth_code: str, pipe_id: str
    ) -> ConnectorResult:
        """
        OAuth redirect handler.

        Overrides exchange *oauth_code* for credentials and return
        ``ConnectorResult.success(updated_pipe)``.
        """
        return ConnectorResult.unauthorized()

    async def connect_data_source(
        self,
        request: "Request",
        response: "Response",
        pipe_id: str,
        login_url: str,
    ) -> ConnectorResult:
        """Perform the connection handshake with the backend data source."""
        return ConnectorResult.unauthorized()

    # ── Passport authentication ─────────────────────────────────────────
    # Only relevant to connectors using the built-in strategy-based flow.

    def get_passport_strategy(
        self, pipe: Dict[str, Any]
    ) -> Optional["PassportStrategy"]:
        """
        Strategy instance used to authenticate *pipe*, or ``None`` when
        this connector does not use the built-in flow.
        """
        return None

    def get_passport_authorization_params(self) -> Dict[str, Any]:
        """Extra parameters merged into the authorization request."""
        return {}

    async def passport_auth_callback_post_processing(
        self, info: Any, pipe: Dict[str, Any]
    ) -> ConnectorResult:
        """
        Invoked after the strategy has verified the user.

        Overrides pull what they need out of *info* (access_token,
        refresh_token, ...) and return ``ConnectorResult.success(pipe)``
        with the updated pipe, or ``ConnectorResult.failure(message)``.
        A success without a value means the pipe is left untouched.
        """
        return ConnectorResult.success()

    def uses_passport(self, pipe: Dict[str, Any]) -> bool:
        return self.get_passport_strategy(pipe) is not None

    # ── Serialization ───────────────────────────────────────────────────

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.get_id(),
            "label": self.get_label(),
            "steps": self.get_steps(),
            "options": self._options.as_dict(),
            "path": self.path,
        }
