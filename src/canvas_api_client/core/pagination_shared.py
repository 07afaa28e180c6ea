"""Shared pieces of the sync/async pagination engines."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger("canvas_api_client")

ErrorPolicy = Callable[[Exception], "Exception | None"]


class RunState(str, Enum):
    DISCOVERING = "discovering"
    FETCHING = "fetching"
    DRAINING = "draining"
    CLOSED = "closed"


class PolicyDecision(str, Enum):
    CONTINUE = "continue"
    STOP = "stop"
    FAIL = "fail"


def raise_error(error: Exception) -> Exception | None:
    """Fail fast: the consumer's iteration raises ``error``."""
    raise error


def ignore_errors(error: Exception) -> Exception | None:
    return None


# Fallback for entry points called without ``policy=``. Not meant to be reassigned.
DEFAULT_ERROR_POLICY: ErrorPolicy = raise_error


def resolve_policy(policy: ErrorPolicy | None) -> ErrorPolicy:
    return DEFAULT_ERROR_POLICY if policy is None else policy


def apply_policy(
    policy: ErrorPolicy,
    error: Exception,
) -> tuple[PolicyDecision, BaseException | None]:
    """Run ``policy`` on one error and classify what the adapter must do."""

    try:
        result = policy(error)
    except Exception as exc:
        logger.error(
            "pagination error is fatal error=%s detail=%s",
            exc.__class__.__name__,
            exc,
        )
        return PolicyDecision.FAIL, exc
    if result is not None:
        logger.info(
            "pagination stopped by policy error=%s",
            error.__class__.__name__,
        )
        return PolicyDecision.STOP, result
    logger.warning(
        "pagination error ignored by policy error=%s detail=%s",
        error.__class__.__name__,
        error,
    )
    return PolicyDecision.CONTINUE, None


__all__ = [
    "ErrorPolicy",
    "RunState",
    "PolicyDecision",
    "raise_error",
    "ignore_errors",
    "DEFAULT_ERROR_POLICY",
    "resolve_policy",
    "apply_policy",
]
