# core/envelope.py
"""
Wire types for the spectrometer RPC endpoint.

A request is the JSON object ``{"Cmd": <command>}``; a response is
``{"Error": <string>, "Values": [<int>, ...] | null}``. An empty ``Error``
string means success.
"""
import json
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, List, Optional

from core.exceptions import DecodeFailure, RpcError


class Command(Enum):
    SCALE = "scale"
    SAMPLE = "sample"

    @classmethod
    def parse(cls, name: str) -> Optional["Command"]:
        """Return the command named ``name``, or None if it is not one we know."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class RequestDescriptor:
    command: str

    @classmethod
    def for_command(cls, command: Command) -> "RequestDescriptor":
        return cls(command.value)

    def encode(self) -> str:
        return json.dumps({"Cmd": self.command})


@dataclass
class Envelope:
    error: str = ""
    values: Optional[List[float]] = None

    @property
    def is_error(self) -> bool:
        # Only the exact empty string means "no error".
        return self.error != ""

    @classmethod
    def decode(cls, body: str) -> "Envelope":
        """
        Parse a response body.

        Raises:
            DecodeFailure: If the body is not JSON or does not have the envelope shape.
        """
        try:
            raw: Any = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise DecodeFailure(body, str(e))
        if not isinstance(raw, dict):
            raise DecodeFailure(body, f"expected a JSON object, got {type(raw).__name__}")

        error = raw.get("Error", "")
        if error is None:
            error = ""
        if not isinstance(error, str):
            raise DecodeFailure(body, "field 'Error' is not a string")

        values = raw.get("Values")
        if values is not None:
            if not isinstance(values, list):
                raise DecodeFailure(body, "field 'Values' is not a list")
            for v in values:
                if isinstance(v, bool) or not isinstance(v, Real):
                    raise DecodeFailure(body, f"non-numeric entry in 'Values': {v!r}")
        return cls(error=error, values=values)

    def encode(self) -> str:
        return json.dumps({"Error": self.error, "Values": self.values})


@dataclass
class RpcOutcome:
    """Result of one exchange as delivered to a completion callback."""
    descriptor: RequestDescriptor
    envelope: Optional[Envelope] = None
    failure: Optional[RpcError] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.envelope is not None
