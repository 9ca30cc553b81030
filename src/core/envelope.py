"""
Result envelopes returned by the directory facade.

Every structured tool returns either a Success payload or a Failure with an
error kind, a message and optional context fields. Failures serialize as
``{"error": kind, "message": ..., **context}``.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class ErrorKind(str, Enum):
    """Error taxonomy surfaced to tool callers."""

    NOT_CONFIGURED = "not_configured"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    GRAPH_API_ERROR = "graph_api_error"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class Success:
    """Successful tool result."""

    payload: Any

    def to_json(self) -> str:
        return json.dumps(self.payload, indent=2, default=str)


@dataclass(frozen=True)
class Failure:
    """Recovered failure with a stable error kind."""

    kind: ErrorKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind.value, "message": self.message, **self.context}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


ResultEnvelope = Union[Success, Failure]
