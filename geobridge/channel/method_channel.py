"""Named method channel with a JSON-lines codec.

A call line looks like ``{"id": 1, "method": "getCurrentLocation", "arguments": null}``.
Each call is answered by exactly one reply line carrying the same ``id``;
replies may arrive out of order when a handler defers its answer.
"""

import json
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, TextIO

from geobridge.channel.method_result import MethodResult, StreamResult
from geobridge.constants import ERROR_HANDLER_FAILED, ERROR_MALFORMED_CALL
from geobridge.logging import GEOBRIDGE_LOGGER

if TYPE_CHECKING:
    from geobridge.platform.abstract_platform import AbstractPositioningPlatform


@dataclass(frozen=True)
class MethodCall:
    method: str
    arguments: Any = None
    id: Any = None


class MalformedCallError(ValueError):
    """Raised when a call line cannot be decoded."""

    def __init__(self, message: str, call_id: Any = None):
        super().__init__(message)
        self.call_id = call_id


MethodCallHandler = Callable[[MethodCall, MethodResult], None]


def decode_call(line: str) -> MethodCall:
    """
    Decode one JSON call line.

    Raises:
        MalformedCallError: If the line is not a JSON object with a string ``method``.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedCallError(f"Invalid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise MalformedCallError("Call must be a JSON object")

    method = data.get("method")
    if not isinstance(method, str) or not method:
        raise MalformedCallError("Call is missing a 'method' string", call_id=data.get("id"))

    return MethodCall(method=method, arguments=data.get("arguments"), id=data.get("id"))


class MethodChannel:
    """Routes method calls on a named channel to a single handler."""

    def __init__(self, name: str):
        self.name = name
        self._handler: Optional[MethodCallHandler] = None

    def set_method_call_handler(self, handler: Optional[MethodCallHandler]) -> None:
        self._handler = handler

    def dispatch(self, call: MethodCall, result: MethodResult) -> None:
        """Hand a call to the handler; replies ``not_implemented`` when none is set."""
        if self._handler is None:
            result.not_implemented()
            return

        try:
            self._handler(call, result)
        except Exception as e:
            GEOBRIDGE_LOGGER.error(f"Handler for {self.name}/{call.method} failed: {e}", exc_info=True)
            if not result.submitted:
                result.error(ERROR_HANDLER_FAILED, str(e))


def serve_stream(
    channel: MethodChannel,
    input_stream: TextIO,
    output_stream: TextIO,
    platform: Optional["AbstractPositioningPlatform"] = None,
) -> int:
    """
    Serve a channel over JSON lines until the input is exhausted.

    After each call the platform's queued permission events are pumped, so a
    deferred reply is written as soon as the decision is known.

    Returns:
        Number of calls read, including malformed ones.
    """
    write_lock = threading.Lock()
    calls = 0

    # readline keeps the stream position in step with interactive prompts reading the same input
    for line in iter(input_stream.readline, ""):
        line = line.strip()
        if not line:
            continue
        calls += 1

        try:
            call = decode_call(line)
        except MalformedCallError as e:
            GEOBRIDGE_LOGGER.warning(f"Malformed call on {channel.name}: {e}")
            StreamResult(e.call_id, output_stream, write_lock).error(ERROR_MALFORMED_CALL, str(e))
            continue

        GEOBRIDGE_LOGGER.debug(f"Call {call.id!r} on {channel.name}: {call.method}")
        channel.dispatch(call, StreamResult(call.id, output_stream, write_lock))

        if platform is not None:
            platform.process_events()

    return calls
