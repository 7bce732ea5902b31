"""Authentication and authorization building blocks: RPC errors, password hashing, tokens, actor ids, user lookup and a permission registry."""

__version__ = "0.1.0"

__all__ = [
    "grpcerr",
    "password",
    "refreshtoken",
    "session",
    "queries",
    "interceptors",
    "registry",
    "users",
]