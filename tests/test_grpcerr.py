import asyncio

import pytest

from charon.grpcerr import (
    OTHER,
    Code,
    Detail,
    Field,
    GrpcError,
    Kind,
    Op,
    StatusError,
    is_kind,
    match,
    new_error,
    to_status_error,
)


def test_new_error_without_arguments_raises():
    with pytest.raises(TypeError):
        new_error()


BAD_REQUEST = Detail(
    "google.rpc.BadRequest",
    {"field_violations": [{"field": "example", "description": "something went wrong"}]},
)


@pytest.mark.parametrize(
    "args, expected",
    [
        (["a message"], "a message"),
        ([Exception("an error")], "an error"),
        ([Exception("an error"), Code.INVALID_ARGUMENT], "InvalidArgument: an error"),
        (
            [Exception("an error"), Code.INVALID_ARGUMENT, BAD_REQUEST],
            "InvalidArgument: an error",
        ),
        (["a message", Exception("an error")], "a message: an error"),
        (
            ["a message", Exception("an error"), Kind("a kind")],
            "a kind: a message: an error",
        ),
        (
            [
                "a message",
                Exception("an error"),
                Kind("a kind"),
                Op("creativeservrpc.AccountManager/Get"),
            ],
            "creativeservrpc.AccountManager/Get: a kind: a message: an error",
        ),
        (
            [
                "a message",
                Exception("an error"),
                Kind("a kind"),
                Field("zap.string", "a string"),
                [Field("zap.int64", "in integer")],
            ],
            "a kind: a message: an error",
        ),
        (
            [new_error("a message", Exception("an error"), Kind("a kind"))],
            "a kind: a message: an error",
        ),
        (
            [new_error("a message", Exception("an error"), Kind("a kind")), Kind("a kind")],
            "a kind:\n\ta message: an error",
        ),
        (
            [new_error("a message", Exception("an error"))],
            "a message: an error",
        ),
    ],
)
def test_new_error_string(args, expected):
    assert str(new_error(*args)) == expected


def test_fields_are_collected():
    err = new_error("m", Field("a", 1), [Field("b", 2), Field("c", 3)])
    assert [f.key for f in err.fields] == ["a", "b", "c", "error"]


def test_details_are_collected():
    err = new_error(Code.INVALID_ARGUMENT, BAD_REQUEST, "m")
    assert err.details == [BAD_REQUEST]


def test_unknown_argument_type():
    err = new_error(1.5)
    assert str(err) == "unknown type float, value 1.5 in error call"


def test_nesting_does_not_mutate_original():
    inner = new_error("m", Kind("k"))
    outer = new_error(inner, Kind("k"))
    assert inner.kind == "k"
    assert outer.err.kind == OTHER
    assert outer.kind == "k"


def test_timeout_sets_deadline_exceeded():
    assert new_error(TimeoutError("late")).code == Code.DEADLINE_EXCEEDED


def test_cancelled_sets_canceled():
    assert new_error(asyncio.CancelledError()).code == Code.CANCELED


def test_status_error_code_is_pulled_up():
    err = new_error(StatusError(Code.NOT_FOUND, "missing"))
    assert err.code == Code.NOT_FOUND


def test_unknown_status_code_is_not_pulled_up():
    err = new_error(StatusError(Code.UNKNOWN, "odd"))
    assert err.code == Code.OK


def test_example_error():
    e1 = new_error(Op("Get"), Kind("io"), "network unreachable")
    assert str(e1) == "Get: io: network unreachable"
    e2 = new_error(Op("Read"), Kind("other"), e1)
    assert str(e2) == "Read: io:\n\tGet: network unreachable"


def test_example_match():
    err = new_error("network unreachable")
    got = new_error(Op("Get"), Kind("io"), err)
    expect = new_error(Kind("io"), err)
    assert match(expect, got) is True
    got = new_error(Op("Get"), Kind("permission"), err)
    assert match(expect, got) is False


OP = Op("Op")


@pytest.mark.parametrize(
    "err1, err2, matched",
    [
        (None, None, False),
        (EOFError("EOF"), EOFError("EOF"), False),
        (new_error(EOFError("EOF")), EOFError("EOF"), False),
        (EOFError("EOF"), new_error(EOFError("EOF")), False),
        (new_error(EOFError("EOF")), new_error(EOFError("EOF")), True),
        (
            new_error(OP, Kind("invalid"), EOFError("EOF")),
            new_error(OP, Kind("invalid"), EOFError("EOF")),
            True,
        ),
        (new_error(OP), new_error(OP, Kind("invalid"), EOFError("EOF")), True),
        (new_error(Kind("invalid")), new_error(OP, Kind("invalid"), EOFError("EOF")), True),
    ],
)
def test_match(err1, err2, matched):
    assert match(err1, err2) is matched


@pytest.mark.parametrize(
    "err, kind, matched",
    [
        (EOFError("EOF"), OTHER, False),
        (new_error("a message", Kind("a kind")), OTHER, False),
        (new_error("a message", Kind("a kind")), Kind("a kind"), True),
    ],
)
def test_is_kind(err, kind, matched):
    assert is_kind(kind, err) is matched


def test_code_names_in_error_string():
    assert str(new_error(Code.INVALID_ARGUMENT, "x")) == "InvalidArgument: x"
    assert str(new_error(Code.NOT_FOUND, "x")) == "NotFound: x"
    assert str(new_error(Code.OK, "x")) == "x"


def test_empty_error_string():
    assert str(GrpcError()) == "no error"


def test_to_status_error_with_message():
    err = new_error(Code.INVALID_ARGUMENT, "a message", Exception("an error"), BAD_REQUEST)
    status = to_status_error(err)
    assert isinstance(status, StatusError)
    assert status.code == Code.INVALID_ARGUMENT
    assert status.message == "a message: an error"
    assert status.details == (BAD_REQUEST,)


def test_to_status_error_without_message():
    status = to_status_error(new_error(Code.NOT_FOUND, "gone"))
    assert status.code == Code.NOT_FOUND
    assert status.message == "gone"


def test_to_status_error_ok_code_is_none():
    assert to_status_error(new_error("fine")) is None


def test_to_status_error_passes_other_errors():
    original = ValueError("boom")
    assert to_status_error(original) is original
    assert to_status_error(None) is None