"""Data models for composition function requests and responses.

Field names in ``from_dict``/``to_dict`` follow the JSON form of the
composition function wire protocol, so request documents captured from a
pipeline run can be loaded directly.
"""

import copy
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .resource import Composite


class Severity(str, Enum):
    """Severity of a function result."""

    FATAL = "SEVERITY_FATAL"
    WARNING = "SEVERITY_WARNING"
    NORMAL = "SEVERITY_NORMAL"


class Target(str, Enum):
    """Which resources a result or condition is reported on."""

    COMPOSITE = "TARGET_COMPOSITE"
    COMPOSITE_AND_CLAIM = "TARGET_COMPOSITE_AND_CLAIM"


class ConditionStatus(str, Enum):
    """Status of a condition."""

    TRUE = "STATUS_CONDITION_TRUE"
    FALSE = "STATUS_CONDITION_FALSE"
    UNKNOWN = "STATUS_CONDITION_UNKNOWN"


@dataclass
class RequestMeta:
    """Metadata sent with a request."""

    tag: str = ""


@dataclass
class ResponseMeta:
    """Metadata returned with a response."""

    tag: str = ""
    ttl: timedelta = timedelta(seconds=60)

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "ttl": f"{int(self.ttl.total_seconds())}s"}


@dataclass
class State:
    """Observed or desired state: the composite plus composed resources by name."""

    composite: Optional[Composite] = None
    resources: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "State":
        data = data or {}
        composite = data.get("composite")
        return cls(
            composite=Composite.from_dict(composite) if composite else None,
            resources=copy.deepcopy(data.get("resources") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.composite is not None:
            result["composite"] = self.composite.to_dict()
        if self.resources:
            result["resources"] = copy.deepcopy(self.resources)
        return result


@dataclass
class Credentials:
    """A named bundle of secret values."""

    data: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        raw = (data.get("credentialData") or {}).get("data") or {}
        values = {}
        for key, value in raw.items():
            if value is None:
                continue
            values[key] = value.decode("utf-8") if isinstance(value, bytes) else str(value)
        return cls(data=values)

    def to_dict(self) -> Dict[str, Any]:
        # Secret values are never echoed back
        return {"credentialData": {"data": {key: "[REDACTED]" for key in self.data}}}


@dataclass
class Result:
    """A message reported by the function, fatal results abort the pipeline."""

    severity: Severity
    message: str
    target: Target = Target.COMPOSITE
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "severity": self.severity.value,
            "message": self.message,
            "target": self.target.value,
        }
        if self.reason:
            result["reason"] = self.reason
        return result


@dataclass
class Condition:
    """A condition the function wants set on the composite (and claim)."""

    type: str
    status: ConditionStatus
    reason: str
    message: Optional[str] = None
    target: Target = Target.COMPOSITE

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "type": self.type,
            "status": self.status.value,
            "reason": self.reason,
            "target": self.target.value,
        }
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass
class RunFunctionRequest:
    """A single invocation of the function."""

    meta: RequestMeta = field(default_factory=RequestMeta)
    observed: State = field(default_factory=State)
    desired: State = field(default_factory=State)
    context: Dict[str, Any] = field(default_factory=dict)
    credentials: Dict[str, Credentials] = field(default_factory=dict)
    input: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunFunctionRequest":
        """
        Build a request from its JSON form.

        Args:
            data: Request document as loaded from JSON or YAML

        Returns:
            RunFunctionRequest instance
        """
        meta = data.get("meta") or {}
        credentials = data.get("credentials") or {}
        return cls(
            meta=RequestMeta(tag=meta.get("tag", "")),
            observed=State.from_dict(data.get("observed")),
            desired=State.from_dict(data.get("desired")),
            context=copy.deepcopy(data.get("context") or {}),
            credentials={
                name: Credentials.from_dict(value or {}) for name, value in credentials.items()
            },
            input=copy.deepcopy(data.get("input")),
        )


@dataclass
class RunFunctionResponse:
    """The function's answer to a RunFunctionRequest."""

    meta: ResponseMeta = field(default_factory=ResponseMeta)
    desired: State = field(default_factory=State)
    context: Dict[str, Any] = field(default_factory=dict)
    results: List[Result] = field(default_factory=list)
    conditions: List[Condition] = field(default_factory=list)

    def has_fatal_result(self) -> bool:
        """Check whether any result aborts the pipeline."""
        return any(result.severity == Severity.FATAL for result in self.results)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"meta": self.meta.to_dict()}
        desired = self.desired.to_dict()
        if desired:
            result["desired"] = desired
        if self.context:
            result["context"] = copy.deepcopy(self.context)
        if self.results:
            result["results"] = [r.to_dict() for r in self.results]
        if self.conditions:
            result["conditions"] = [c.to_dict() for c in self.conditions]
        return result
