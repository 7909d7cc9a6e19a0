"""Helpers for building a RunFunctionResponse."""

import copy
from datetime import timedelta
from typing import Any, Optional

from .models import (
    Condition,
    ConditionStatus,
    ResponseMeta,
    Result,
    RunFunctionRequest,
    RunFunctionResponse,
    Severity,
    State,
    Target,
)
from .resource import Composite

DEFAULT_TTL = timedelta(minutes=1)


def to(req: RunFunctionRequest, ttl: timedelta = DEFAULT_TTL) -> RunFunctionResponse:
    """
    Start a response for a request.

    The request's tag, desired state and context are carried over so that a
    function only has to describe what it changes.
    """
    return RunFunctionResponse(
        meta=ResponseMeta(tag=req.meta.tag, ttl=ttl),
        desired=State(
            composite=copy.deepcopy(req.desired.composite),
            resources=copy.deepcopy(req.desired.resources),
        ),
        context=copy.deepcopy(req.context),
    )


def fatal(rsp: RunFunctionResponse, err: Exception) -> None:
    """Add a fatal result; the pipeline stops after this function."""
    rsp.results.append(Result(severity=Severity.FATAL, message=str(err)))


def set_context_key(rsp: RunFunctionResponse, key: str, value: Any) -> None:
    """Set a key in the pipeline context passed to the next function."""
    rsp.context[key] = copy.deepcopy(value)


def set_desired_composite_resource(rsp: RunFunctionResponse, composite: Composite) -> None:
    """
    Set the desired composite resource.

    Raises:
        ResourceSerializationError: If the composite cannot be represented as JSON
    """
    # Converting first leaves the response untouched when serialization fails
    resource = composite.resource.to_json_object()
    desired = Composite.from_dict({"resource": resource})
    desired.connection_details = dict(composite.connection_details)
    rsp.desired.composite = desired


class ConditionBuilder:
    """Adjusts a condition after it has been added to a response."""

    def __init__(self, condition: Condition):
        self.condition = condition

    def with_message(self, message: str) -> "ConditionBuilder":
        self.condition.message = message
        return self

    def target_composite_and_claim(self) -> "ConditionBuilder":
        self.condition.target = Target.COMPOSITE_AND_CLAIM
        return self


def condition_true(
    rsp: RunFunctionResponse,
    condition_type: str,
    reason: str,
    message: Optional[str] = None,
) -> ConditionBuilder:
    """Add a condition with status true, targeted at the composite by default."""
    condition = Condition(
        type=condition_type, status=ConditionStatus.TRUE, reason=reason, message=message
    )
    rsp.conditions.append(condition)
    return ConditionBuilder(condition)
