"""Method channel plumbing between the application layer and the bridge."""

from geobridge.channel.method_channel import (
    MalformedCallError,
    MethodCall,
    MethodCallHandler,
    MethodChannel,
    decode_call,
    serve_stream,
)
from geobridge.channel.method_result import (
    FutureResult,
    MethodReply,
    MethodResult,
    ReplyAlreadySubmittedError,
    StreamResult,
    encode_reply,
)

__all__ = [
    "FutureResult",
    "MalformedCallError",
    "MethodCall",
    "MethodCallHandler",
    "MethodChannel",
    "MethodReply",
    "MethodResult",
    "ReplyAlreadySubmittedError",
    "StreamResult",
    "decode_call",
    "encode_reply",
    "serve_stream",
]
