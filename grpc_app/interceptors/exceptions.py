from __future__ import annotations

from typing import Callable, Awaitable, NoReturn
import contextvars

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors._handlers import wrap_rpc_method_handler
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id
from domain.common.exceptions import BusinessException
from shared.codes import BusinessCode


logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Mark that the current request has been mapped to a gRPC status
_mapped_error: contextvars.ContextVar[bool] = contextvars.ContextVar("grpc_mapped_error", default=False)


def set_mapped_error() -> None:
    _mapped_error.set(True)


def is_mapped_error() -> bool:
    return bool(_mapped_error.get())


def business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    try:
        bc = BusinessCode(code)
    except ValueError:
        return grpc.StatusCode.FAILED_PRECONDITION

    mapping = {
        BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
        BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
        BusinessCode.DATA_SOURCE_ERROR: grpc.StatusCode.INTERNAL,
    }

    return mapping.get(bc, grpc.StatusCode.FAILED_PRECONDITION)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None:
            return handler

        method = handler_call_details.method

        async def _abort(context: grpc.aio.ServicerContext, exc: Exception) -> NoReturn:
            if isinstance(exc, BusinessException):
                code = exc.code
                error_type = exc.error_type or "BusinessError"
                status = business_code_to_grpc_status(exc.code)
                message = exc.message
            else:
                code = BusinessCode.SYSTEM_ERROR.value
                error_type = "SystemError"
                status = grpc.StatusCode.INTERNAL
                message = INTERNAL_ERROR_MESSAGE

            trailers = [
                ("x-biz-code", str(code)),
                ("x-error-type", error_type),
            ]
            request_id = get_request_id()
            if request_id:
                trailers.append((REQUEST_ID_META_KEY, request_id))
            context.set_trailing_metadata(tuple(trailers))
            set_mapped_error()

            if isinstance(exc, BusinessException):
                # Concise business error log (no stack)
                logger.error(
                    "grpc_mapped_error",
                    method=method,
                    code=str(code),
                    status=str(status),
                    message=message,
                    request_id=request_id,
                )
            else:
                logger.error(
                    "grpc_mapped_error",
                    method=method,
                    code=str(code),
                    status=str(status),
                    message=str(exc),
                    request_id=request_id,
                    exc_info=exc,
                )
            await context.abort(status, message)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort(context, exc)

        async def _unary_stream(request, context: grpc.aio.ServicerContext):
            try:
                async for response in handler.unary_stream(request, context):
                    yield response
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort(context, exc)

        async def _stream_unary(request_iterator, context: grpc.aio.ServicerContext):
            try:
                return await handler.stream_unary(request_iterator, context)
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort(context, exc)

        async def _stream_stream(request_iterator, context: grpc.aio.ServicerContext):
            try:
                async for response in handler.stream_stream(request_iterator, context):
                    yield response
            except grpc.aio.AbortError:
                raise
            except Exception as exc:
                await _abort(context, exc)

        return wrap_rpc_method_handler(
            handler,
            unary_unary=_unary_unary,
            unary_stream=_unary_stream,
            stream_unary=_stream_unary,
            stream_stream=_stream_stream,
        )
