"""Finding the user behind a login attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from charon.grpcerr import Code, new_error

_USED_MARKER = "!"

#: Confirmation token value stored once a registration has been confirmed.
CONFIRMATION_TOKEN_USED = _USED_MARKER

#: Password stored for users authenticated by an external source (e.g. LDAP).
EXTERNAL_PASSWORD = _USED_MARKER.encode()

_UNKNOWN_USER_MESSAGE = "user with such username or password does not exists"


class RecordNotFoundError(LookupError):
    """Raised by a repository when no record matches a lookup."""


class UserRepository(Protocol):
    """Store that users are looked up in."""

    def find_one_by_username(self, username: str) -> Any:
        ...

    def find_one_by_id(self, user_id: int) -> Any:
        ...


class RefreshTokenRepository(Protocol):
    """Store that refresh tokens are looked up in."""

    def find_one_by_token(self, token: str) -> Any:
        ...


class Hasher(Protocol):
    """Checks a plain password against a stored hash."""

    def compare(self, hashed_password: bytes, plain_password: bytes) -> bool:
        ...


def display_name(first_name: str, last_name: str) -> str:
    """Return first and last name joined, or whichever of them is set."""
    if not first_name:
        return last_name
    if not last_name:
        return first_name
    return f"{first_name} {last_name}"


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


@dataclass
class UsernamePasswordFinder:
    """Finds a user by username and checks the password."""

    username: str
    password: str = field(repr=False)
    user_repository: UserRepository = field(repr=False)
    hasher: Hasher = field(repr=False)

    def find_user(self) -> Any:
        """Return the matching user or raise a GrpcError."""
        if not self.username:
            raise new_error(Code.INVALID_ARGUMENT, "empty username")
        if not self.password:
            raise new_error(Code.INVALID_ARGUMENT, "empty password")

        try:
            user = self.user_repository.find_one_by_username(self.username)
        except RecordNotFoundError:
            raise new_error(Code.UNAUTHENTICATED, _UNKNOWN_USER_MESSAGE) from None

        stored = _as_bytes(user.password)
        if stored == EXTERNAL_PASSWORD:
            raise new_error(
                Code.FAILED_PRECONDITION,
                "authentication failure, external password manager not implemented",
            )
        if not self.hasher.compare(stored, _as_bytes(self.password)):
            raise new_error(Code.UNAUTHENTICATED, _UNKNOWN_USER_MESSAGE)
        return user


@dataclass
class RefreshTokenFinder:
    """Finds the user that owns a refresh token."""

    refresh_token: str = field(repr=False)
    user_repository: UserRepository = field(repr=False)
    refresh_token_repository: RefreshTokenRepository = field(repr=False)

    def find_user(self) -> Any:
        """Return the token's owner; repository errors propagate."""
        if not self.refresh_token:
            raise new_error(Code.INVALID_ARGUMENT, "empty refresh token")
        token = self.refresh_token_repository.find_one_by_token(self.refresh_token)
        return self.user_repository.find_one_by_id(token.user_id)


@dataclass
class UserFinderFactory:
    """Builds user finders that share the same repositories and hasher."""

    user_repository: UserRepository
    refresh_token_repository: RefreshTokenRepository
    hasher: Hasher

    def by_username_and_password(self, username: str, password: str) -> UsernamePasswordFinder:
        return UsernamePasswordFinder(
            username=username,
            password=password,
            user_repository=self.user_repository,
            hasher=self.hasher,
        )

    def by_refresh_token(self, refresh_token: str) -> RefreshTokenFinder:
        return RefreshTokenFinder(
            refresh_token=refresh_token,
            user_repository=self.user_repository,
            refresh_token_repository=self.refresh_token_repository,
        )