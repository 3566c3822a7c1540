"""
RunStep — capability contract for pipeline steps.

Steps are created and executed by the orchestrator.  Connectors only hold
the ordered list of references; nothing here runs a step.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RunStep(Protocol):
    def get_label(self) -> str:
        ...

    async def run(self, context: Any) -> None:
        ...


def describe_step(step: Any) -> str:
    """Human-readable name of a step, used when connectors are serialized."""
    get_label = getattr(step, "get_label", None)
    if callable(get_label):
        return str(get_label())
    return type(step).__name__
