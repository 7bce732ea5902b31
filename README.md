# charon

Building blocks for an authentication and authorization service: structured
RPC errors, bcrypt password hashing, refresh token generation, actor
identifiers, user lookup at login and an in-memory permission registry.

## Installation

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Modules

### `charon.grpcerr`

Structured errors for RPC handlers.

- `Code` is an `IntEnum` of the gRPC status codes. `str(Code.INVALID_ARGUMENT)`
  gives `"InvalidArgument"`.
- `Kind` and `Op` are `str` subclasses naming the class of an error and the
  operation that failed.
- `Field(key, value)` is a logging field and `Detail(type_name, content)` a
  status detail.
- `new_error(*args)` builds a `GrpcError`. Each argument's type decides what it
  sets: a `Kind`, `Op`, `Code`, message string, underlying exception (or
  `GrpcError`, which is copied), `Field`, list of `Field`s, or `Detail`. The last
  value of each type wins; fields and details accumulate. Calling it with no
  arguments raises `TypeError`. A timeout cause sets `DEADLINE_EXCEEDED`, a
  cancellation sets `CANCELED`, and a `StatusError` cause passes on its code
  unless that is `OK` or `UNKNOWN`. When a `GrpcError` wraps another, a kind that
  would repeat is shown only once.
- `str()` of a `GrpcError` joins op, code, kind, message and cause with `": "`;
  a nested `GrpcError` is put on a new indented line (`SEPARATOR`).

      >>> from charon.grpcerr import new_error, Op, Kind
      >>> e1 = new_error(Op("Get"), Kind("io"), "network unreachable")
      >>> print(e1)
      Get: io: network unreachable
      >>> print(new_error(Op("Read"), Kind("other"), e1))
      Read: io:
      	Get: network unreachable

- `match(err1, err2)` is true when both are `GrpcError`s and every set element of
  `err1` equals that of `err2` (codes and details must always be equal).
- `is_kind(kind, err)` reports whether `err` is a `GrpcError` of that kind,
  looking through nested errors whose kind is `other`.
- `to_status_error(err)` turns a `GrpcError` into a `StatusError` carrying its
  code, message and details; an error with code `OK` gives `None`, and any other
  value is returned unchanged.

### `charon.password`

`BCryptHasher(cost)` hashes passwords with bcrypt (`$2a$` hashes) at the given
cost and raises `CostOutOfRangeError` (a `ValueError`) when the cost is outside
4 to 31. `hash(plain_password)` returns the hash as bytes;
`compare(hashed_password, plain_password)` returns `True` or `False`. Both take
`bytes` or `str`.

### `charon.refreshtoken`

`random_token()` returns a 64-character hex string: a 32-byte SHAKE-128 digest
of 64 random bytes.

### `charon.session`

`ActorID` is a `str` of the form `charon:user:<id>`.
`ActorID.from_user_id(42)` builds one and `ActorID("charon:user:42").user_id()`
returns `42`. `user_id()` raises `ValueError` for a value that is too short, has
the wrong prefix, or does not end in a 64-bit signed integer.

### `charon.queries`

SQL text builders: `columns(names, prefix)` gives `"p.a,p.b"`-style lists,
`exists_many_to_many_query(table, column1, column2)` and
`is_granted_query(table, column_id, column_subsystem, column_module, column_action)`
return `SELECT EXISTS(...)` queries with `$n` placeholders.
`untouched(given, created, removed)` counts permissions left as they were
during registration: `-1` for a negative `given`, `-2` for zero, otherwise
`given - created`, never below `0`.

### `charon.interceptors`

Interceptors are callables `interceptor(ctx, request, info, handler)`.

- `chain_unary(*interceptors)` combines them into one; the last one given is the
  outermost.
- `unary_error_interceptor()` and `stream_error_interceptor()` call the handler
  and re-raise a `GrpcError` as the `StatusError` from `to_status_error`. An
  error with code `OK` is swallowed and `None` returned.

### `charon.registry`

`PermissionRegistry(repository)` remembers permission strings
(`"subsystem:module:action"`). `exists(permission)` reports whether one has been
registered. `register(permissions)` passes the whole collection to
`repository.register(permissions)` and returns its `(created, untouched, removed)`
only when at least one permission is new to the registry; otherwise it returns
`(0, 0, 0)`. Access is guarded by a lock.

### `charon.users`

- `UserFinderFactory(user_repository, refresh_token_repository, hasher)` builds
  finders with `by_username_and_password(username, password)` and
  `by_refresh_token(refresh_token)`.
- `UsernamePasswordFinder.find_user()` raises a `GrpcError` with
  `INVALID_ARGUMENT` for an empty username or password, `UNAUTHENTICATED` when the
  repository raises `RecordNotFoundError` or the password does not match, and
  `FAILED_PRECONDITION` when the stored password is the external-password marker
  (`EXTERNAL_PASSWORD`).
- `RefreshTokenFinder.find_user()` raises `INVALID_ARGUMENT` for an empty token,
  otherwise looks up the token and returns its owner; repository errors
  propagate.
- `display_name(first_name, last_name)` joins the names, or returns whichever is
  set.

The repositories are any objects with `find_one_by_username`, `find_one_by_id`
and `find_one_by_token` methods; the hasher needs a `compare` method, such as
`BCryptHasher`.

## Example

    from charon.password import BCryptHasher
    from charon.session import ActorID

    hasher = BCryptHasher(10)
    password = "password"
    hashed = hasher.hash(password.encode())
    assert hasher.compare(hashed, password.encode())

    actor = ActorID.from_user_id(42)
    assert actor.user_id() == 42

## What the package does not do

There is no server, command-line tool or database layer here. The package does
not store users, groups, permissions or refresh tokens, and it does not run RPC
services: user lookup and permission registration work against repository
objects that you supply, and the interceptors are plain callables to be wired
into a server of your own.