"""Structured errors that carry gRPC status codes, kinds and details."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

#: Separator placed between nested errors of this module.
SEPARATOR = ":\n\t"


class Code(IntEnum):
    """gRPC status codes."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    def __str__(self) -> str:
        return _CODE_NAMES[self]


_CODE_NAMES = {
    Code.OK: "OK",
    Code.CANCELED: "Canceled",
    Code.UNKNOWN: "Unknown",
    Code.INVALID_ARGUMENT: "InvalidArgument",
    Code.DEADLINE_EXCEEDED: "DeadlineExceeded",
    Code.NOT_FOUND: "NotFound",
    Code.ALREADY_EXISTS: "AlreadyExists",
    Code.PERMISSION_DENIED: "PermissionDenied",
    Code.RESOURCE_EXHAUSTED: "ResourceExhausted",
    Code.FAILED_PRECONDITION: "FailedPrecondition",
    Code.ABORTED: "Aborted",
    Code.OUT_OF_RANGE: "OutOfRange",
    Code.UNIMPLEMENTED: "Unimplemented",
    Code.INTERNAL: "Internal",
    Code.UNAVAILABLE: "Unavailable",
    Code.DATA_LOSS: "DataLoss",
    Code.UNAUTHENTICATED: "Unauthenticated",
}


class Kind(str):
    """Class of an error, such as a permission failure."""


class Op(str):
    """Operation being performed, usually a service method name."""


OTHER = Kind("other")


@dataclass(frozen=True)
class Field:
    """A structured logging field attached to an error."""

    key: str
    value: Any


@dataclass
class Detail:
    """A status detail message that travels with a gRPC status."""

    type_name: str
    content: dict = field(default_factory=dict)


class StatusError(Exception):
    """An error carrying a gRPC status."""

    def __init__(self, code: Code, message: str, details: tuple = ()) -> None:
        super().__init__(code, message)
        self.code = Code(code)
        self.message = message
        self.details = tuple(details)

    def __str__(self) -> str:
        return f"rpc error: code = {self.code} desc = {self.message}"


class GrpcError(Exception):
    """An error describing an operation, its kind, status code and cause."""

    def __init__(
        self,
        *,
        err: BaseException | None = None,
        msg: str = "",
        fields: list[Field] | None = None,
        kind: Kind = Kind(""),
        op: Op = Op(""),
        code: Code = Code.OK,
        details: list[Detail] | None = None,
    ) -> None:
        super().__init__()
        self.err = err
        self.msg = msg
        self.fields = list(fields or [])
        self.kind = kind
        self.op = op
        self.code = code
        self.details = list(details or [])

    def _is_zero(self) -> bool:
        return self.op == "" and self.kind == "" and self.err is None

    def _copy(self) -> GrpcError:
        return GrpcError(
            err=self.err,
            msg=self.msg,
            fields=self.fields,
            kind=self.kind,
            op=self.op,
            code=self.code,
            details=self.details,
        )

    def __str__(self) -> str:
        buf = ""
        if self.op:
            buf = _append(buf, ": ", str(self.op))
        if self.code != Code.OK:
            buf = _append(buf, ": ", str(self.code))
        if self.kind != OTHER and self.kind != "":
            buf = _append(buf, ": ", str(self.kind))
        if self.msg:
            buf = _append(buf, ": ", self.msg)
        if self.err is not None:
            if isinstance(self.err, GrpcError):
                if not self.err._is_zero():
                    buf = _append(buf, SEPARATOR, str(self.err))
            else:
                buf = _append(buf, ": ", str(self.err))
        return buf or "no error"

    def __repr__(self) -> str:
        return f"GrpcError({str(self)!r})"


def _append(buf: str, separator: str, text: str) -> str:
    return buf + (separator if buf else "") + text


def _is_field_list(arg: Any) -> bool:
    return isinstance(arg, (list, tuple)) and all(isinstance(f, Field) for f in arg)


def new_error(*args: Any) -> GrpcError:
    """Build an error; each argument's type decides which attribute it sets.

    The last argument of a given type wins, except details and fields,
    which accumulate.
    """
    if not args:
        raise TypeError("call to new_error with no arguments")

    e = GrpcError()
    for arg in args:
        if isinstance(arg, Kind):
            e.kind = arg
        elif isinstance(arg, Op):
            e.op = arg
        elif isinstance(arg, Code):
            e.code = arg
        elif isinstance(arg, Detail):
            e.details.append(arg)
        elif isinstance(arg, Field):
            e.fields.append(arg)
        elif _is_field_list(arg):
            e.fields.extend(arg)
        elif isinstance(arg, GrpcError):
            e.err = arg._copy()
        elif isinstance(arg, BaseException):
            e.err = arg
        elif isinstance(arg, str):
            e.msg = arg
        else:
            return new_error(f"unknown type {type(arg).__name__}, value {arg} in error call")

    if e.err is None and e.msg:
        e.err = Exception(e.msg)
        e.msg = ""

    if isinstance(e.err, (TimeoutError, asyncio.TimeoutError)):
        e.code = Code.DEADLINE_EXCEEDED
    elif isinstance(e.err, asyncio.CancelledError):
        e.code = Code.CANCELED

    if isinstance(e.err, StatusError) and e.err.code not in (Code.OK, Code.UNKNOWN):
        e.code = e.err.code

    if e.err is not None:
        e.fields.append(Field("error", e.err))

    prev = e.err
    if not isinstance(prev, GrpcError):
        return e

    # Avoid repeating the same kind in nested messages.
    if prev.kind == e.kind:
        prev.kind = OTHER
    if e.kind == OTHER:
        e.kind = prev.kind
        prev.kind = OTHER
    return e


def match(err1: Any, err2: Any) -> bool:
    """Report whether every non-zero element of err1 equals that of err2."""
    if not isinstance(err1, GrpcError) or not isinstance(err2, GrpcError):
        return False
    if err1.op and err2.op != err1.op:
        return False
    if err1.kind and err2.kind != err1.kind:
        return False
    if err2.code != err1.code:
        return False
    if err1.details != err2.details:
        return False
    if err1.err is not None:
        if isinstance(err1.err, GrpcError):
            return match(err1.err, err2.err)
        if err2.err is None or str(err2.err) != str(err1.err):
            return False
    return True


def is_kind(kind: Kind, err: Any) -> bool:
    """Report whether err is a GrpcError of the given kind."""
    if not isinstance(err, GrpcError):
        return False
    if err.kind != OTHER:
        return err.kind == kind
    if err.err is not None:
        return is_kind(kind, err.err)
    return False


def _format_cause(cause: BaseException | None) -> str:
    return "%!s(<nil>)" if cause is None else str(cause)


def to_status_error(err: Any) -> Any:
    """Turn a GrpcError into a StatusError; other values pass through.

    An error whose code is OK maps to None, as an OK status is no error.
    """
    if not isinstance(err, GrpcError):
        return err
    cause = _format_cause(err.err)
    message = f"{err.msg}: {cause}" if err.msg else cause
    if err.code == Code.OK:
        return None
    return StatusError(err.code, message, tuple(err.details))