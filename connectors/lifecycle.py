"""
Run lifecycle driver.

The orchestrator owns runs; these helpers call the connector hooks in
the expected order:  run_started → steps → run_finished.

No timeout or retry is applied here.  An override that never returns
from ``run_started`` stalls its run.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from connectors.base import ConnectorBase
from connectors.steps import describe_step
from utils.schemas import ConnectorResult

logger = logging.getLogger(__name__)

StepExecutor = Callable[[Any], Awaitable[Any]]


async def start_run(connector: ConnectorBase) -> ConnectorResult:
    """Notify *connector* that a run begins and wait until it is ready."""
    result = await connector.run_started()
    if result is None:
        # override returned nothing: treated as ready
        result = ConnectorResult.success()
    if result.ok:
        logger.debug("Connector %s ready for run", connector.get_id())
    else:
        logger.warning(
            "Connector %s refused to start run: %s",
            connector.get_id(),
            result.error.message,
        )
    return result


async def finish_run(connector: ConnectorBase) -> None:
    await connector.run_finished()
    logger.debug("Connector %s run finished", connector.get_id())


async def run_cycle(
    connector: ConnectorBase,
    execute_step: StepExecutor,
) -> ConnectorResult:
    """
    Drive one full run of *connector*.

    If ``run_started`` fails the failure is returned as-is, no step runs and
    ``run_finished`` is not called.  Otherwise every step is handed to
    *execute_step* in order and ``run_finished`` is always called, even when
    a step raises (the exception propagates).
    """
    started = await start_run(connector)
    if not started.ok:
        return started

    try:
        # snapshot: a step may call set_steps mid-run
        for step in list(connector.get_steps()):
            logger.info(
                "Connector %s: running step %s",
                connector.get_id(),
                describe_step(step),
            )
            await execute_step(step)
    finally:
        await finish_run(connector)

    return ConnectorResult.success()
