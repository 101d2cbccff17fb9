"""Helpers shared by the server interceptors.

``grpc.aio`` hands interceptors a ``grpc.RpcMethodHandler`` with exactly one
of the four behaviours set. The interceptors supply a wrapper per call shape
and ``wrap_rpc_method_handler`` rebuilds the handler around the matching one.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import grpc


Behavior = Callable[..., Any]


def call_type(handler: grpc.RpcMethodHandler) -> str:
    if handler.request_streaming and handler.response_streaming:
        return "stream_stream"
    if handler.request_streaming:
        return "stream_unary"
    if handler.response_streaming:
        return "unary_stream"
    return "unary_unary"


def wrap_rpc_method_handler(
    handler: grpc.RpcMethodHandler,
    *,
    unary_unary: Optional[Behavior] = None,
    unary_stream: Optional[Behavior] = None,
    stream_unary: Optional[Behavior] = None,
    stream_stream: Optional[Behavior] = None,
) -> grpc.RpcMethodHandler:
    kwargs = dict(
        request_deserializer=handler.request_deserializer,
        response_serializer=handler.response_serializer,
    )
    if handler.unary_unary and unary_unary:
        return grpc.unary_unary_rpc_method_handler(unary_unary, **kwargs)
    if handler.unary_stream and unary_stream:
        return grpc.unary_stream_rpc_method_handler(unary_stream, **kwargs)
    if handler.stream_unary and stream_unary:
        return grpc.stream_unary_rpc_method_handler(stream_unary, **kwargs)
    if handler.stream_stream and stream_stream:
        return grpc.stream_stream_rpc_method_handler(stream_stream, **kwargs)
    return handler
