"""Request, response and resource helpers for composition functions."""

from . import request, response
from .models import (
    Condition,
    ConditionStatus,
    Credentials,
    RequestMeta,
    ResponseMeta,
    Result,
    RunFunctionRequest,
    RunFunctionResponse,
    Severity,
    State,
    Target,
)
from .resource import Composite, Resource

__all__ = [
    "request",
    "response",
    "Composite",
    "Condition",
    "ConditionStatus",
    "Credentials",
    "RequestMeta",
    "Resource",
    "ResponseMeta",
    "Result",
    "RunFunctionRequest",
    "RunFunctionResponse",
    "Severity",
    "State",
    "Target",
]
