"""Write-once reply channels.

A MethodResult receives exactly one of ``success``, ``error`` or
``not_implemented``. Replying twice raises ReplyAlreadySubmittedError.
"""

import json
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Optional, TextIO


class ReplyAlreadySubmittedError(RuntimeError):
    """Raised when a reply channel is answered more than once."""


@dataclass(frozen=True)
class MethodReply:
    """One terminal outcome of a method call."""

    status: str  # "success" | "error" | "not_implemented"
    result: Any = None
    code: Optional[str] = None
    message: Optional[str] = None
    details: Any = None

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict:
        if self.status == "success":
            return {"status": "success", "result": self.result}
        if self.status == "error":
            return {"status": "error", "code": self.code, "message": self.message, "details": self.details}
        return {"status": "not_implemented"}


class MethodResult(ABC):
    """Abstract base for a single-use reply channel."""

    def __init__(self):
        self._lock = threading.Lock()
        self._submitted = False

    @property
    def submitted(self) -> bool:
        return self._submitted

    def success(self, result: Any = None) -> None:
        self._submit(MethodReply("success", result=result))

    def error(self, code: str, message: Optional[str] = None, details: Any = None) -> None:
        self._submit(MethodReply("error", code=code, message=message, details=details))

    def not_implemented(self) -> None:
        self._submit(MethodReply("not_implemented"))

    def _submit(self, reply: MethodReply) -> None:
        with self._lock:
            if self._submitted:
                raise ReplyAlreadySubmittedError(f"Reply already submitted; refusing {reply.status}")
            self._submitted = True
        self._deliver(reply)

    @abstractmethod
    def _deliver(self, reply: MethodReply) -> None:
        """Hand the reply to the caller."""


class FutureResult(MethodResult):
    """Reply channel backed by a concurrent.futures.Future."""

    def __init__(self):
        super().__init__()
        self.future: Future = Future()

    def _deliver(self, reply: MethodReply) -> None:
        self.future.set_result(reply)

    def reply(self, timeout: Optional[float] = None) -> MethodReply:
        """Block until the reply arrives (no timeout by default)."""
        return self.future.result(timeout=timeout)


class StreamResult(MethodResult):
    """Reply channel that writes the reply as one JSON line tagged with the call id."""

    def __init__(self, call_id: Any, output: TextIO, write_lock: Optional[threading.Lock] = None):
        super().__init__()
        self.call_id = call_id
        self.output = output
        self._write_lock = write_lock or threading.Lock()

    def _deliver(self, reply: MethodReply) -> None:
        with self._write_lock:
            self.output.write(encode_reply(self.call_id, reply) + "\n")
            self.output.flush()


def encode_reply(call_id: Any, reply: MethodReply) -> str:
    payload = {"id": call_id}
    payload.update(reply.to_dict())
    return json.dumps(payload)
