"""Two-step reset confirmation for GoalBar.

Idle -> request -> AwaitingConfirmation -> confirm -> Idle (progress zeroed)
                                        -> cancel  -> Idle (nothing changes)

Out-of-order calls are no-ops, so a single command can never zero progress.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from goalbar.models import Event, ProgressModel, Reset, ResetCancelled, ResetFlowState, ResetRequested

logger = logging.getLogger(__name__)


def request_reset(flow: ResetFlowState) -> tuple[ResetFlowState, list[Event]]:
    if flow is ResetFlowState.AWAITING_CONFIRMATION:
        return flow, []
    return ResetFlowState.AWAITING_CONFIRMATION, [ResetRequested()]


def confirm_reset(
    flow: ResetFlowState,
    model: ProgressModel,
) -> tuple[ResetFlowState, ProgressModel, list[Event]]:
    if flow is not ResetFlowState.AWAITING_CONFIRMATION:
        logger.debug("confirm_reset ignored: no reset was requested")
        return flow, model, []
    return (
        ResetFlowState.IDLE,
        replace(model, current=0.0),
        [Reset(previous=model.current)],
    )


def cancel_reset(flow: ResetFlowState) -> tuple[ResetFlowState, list[Event]]:
    if flow is not ResetFlowState.AWAITING_CONFIRMATION:
        logger.debug("cancel_reset ignored: no reset was requested")
        return flow, []
    return ResetFlowState.IDLE, [ResetCancelled()]
