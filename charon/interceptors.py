"""Server interceptors: chaining and translation of errors into statuses."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from charon.grpcerr import GrpcError, to_status_error

UnaryHandler = Callable[[Any, Any], Any]
UnaryInterceptor = Callable[[Any, Any, Any, UnaryHandler], Any]
StreamHandler = Callable[[Any, Any], Any]
StreamInterceptor = Callable[[Any, Any, Any, StreamHandler], Any]


def chain_unary(*args: UnaryInterceptor) -> UnaryInterceptor:
    """Combine unary interceptors into one.

    Each interceptor is called as interceptor(ctx, request, info, handler).
    The last interceptor given is the outermost one.
    """
    interceptors = tuple(args)

    def chained(ctx: Any, request: Any, info: Any, handler: UnaryHandler) -> Any:
        def wrap(current: UnaryInterceptor, following: UnaryHandler) -> UnaryHandler:
            def call(current_ctx: Any, current_request: Any) -> Any:
                return current(current_ctx, current_request, info, following)

            return call

        chain = handler
        for interceptor in interceptors:
            chain = wrap(interceptor, chain)
        return chain(ctx, request)

    return chained


def _translate(exc: GrpcError) -> None:
    status = to_status_error(exc)
    if status is not None:
        raise status from exc


def unary_error_interceptor() -> UnaryInterceptor:
    """Return an interceptor that turns raised GrpcErrors into StatusErrors."""

    def intercept(ctx: Any, request: Any, info: Any, handler: UnaryHandler) -> Any:
        try:
            return handler(ctx, request)
        except GrpcError as exc:
            _translate(exc)
            return None

    return intercept


def stream_error_interceptor() -> StreamInterceptor:
    """Return a stream interceptor that turns raised GrpcErrors into StatusErrors."""

    def intercept(server: Any, stream: Any, info: Any, handler: StreamHandler) -> Any:
        try:
            return handler(server, stream)
        except GrpcError as exc:
            _translate(exc)
            return None

    return intercept