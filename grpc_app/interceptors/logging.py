from __future__ import annotations

import asyncio
import time
from typing import Callable, Awaitable

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors._handlers import call_type, wrap_rpc_method_handler
from grpc_app.interceptors.request_id import get_request_id
from grpc_app.interceptors.exceptions import is_mapped_error


logger = get_logger(__name__)


class LoggingInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return handler

        method = handler_call_details.method
        kind = call_type(handler)

        def _started(context: grpc.aio.ServicerContext) -> float:
            peer = context.peer() if hasattr(context, "peer") else None
            logger.info("grpc_request", method=method, call_type=kind, peer=peer, request_id=get_request_id())
            return time.perf_counter()

        def _failed(exc: BaseException) -> None:
            if isinstance(exc, (asyncio.CancelledError, GeneratorExit)):
                logger.info("grpc_request_cancelled", method=method, request_id=get_request_id())
                return
            # Already mapped/aborted by exception interceptor; avoid duplicate error logs here
            if isinstance(exc, (grpc.RpcError, grpc.aio.AbortError)) or is_mapped_error():
                return
            # Unknown/unexpected exception -> log with stack
            logger.error(
                "grpc_unhandled_error",
                method=method,
                error=str(exc),
                exc_info=exc,
                request_id=get_request_id(),
            )

        def _done(start: float, **extra) -> None:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "grpc_request_done",
                method=method,
                elapsed_ms=round(elapsed_ms, 2),
                request_id=get_request_id(),
                **extra,
            )

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            start = _started(context)
            try:
                return await handler.unary_unary(request, context)
            except BaseException as exc:
                _failed(exc)
                raise
            finally:
                _done(start)

        async def _unary_stream(request, context: grpc.aio.ServicerContext):
            start = _started(context)
            sent = 0
            try:
                async for response in handler.unary_stream(request, context):
                    sent += 1
                    yield response
            except BaseException as exc:
                _failed(exc)
                raise
            finally:
                _done(start, messages_sent=sent)

        async def _stream_unary(request_iterator, context: grpc.aio.ServicerContext):
            start = _started(context)
            try:
                return await handler.stream_unary(request_iterator, context)
            except BaseException as exc:
                _failed(exc)
                raise
            finally:
                _done(start)

        async def _stream_stream(request_iterator, context: grpc.aio.ServicerContext):
            start = _started(context)
            sent = 0
            try:
                async for response in handler.stream_stream(request_iterator, context):
                    sent += 1
                    yield response
            except BaseException as exc:
                _failed(exc)
                raise
            finally:
                _done(start, messages_sent=sent)

        return wrap_rpc_method_handler(
            handler,
            unary_unary=_unary_unary,
            unary_stream=_unary_stream,
            stream_unary=_stream_unary,
            stream_stream=_stream_stream,
        )
