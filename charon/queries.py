"""SQL fragments shared by the repositories and the registration bookkeeping."""

from __future__ import annotations

from collections.abc import Iterable


def columns(names: Iterable[str], prefix: str) -> str:
    """Join column names into a comma separated list qualified by prefix."""
    return ",".join(f"{prefix}.{name}" for name in names)


def exists_many_to_many_query(table: str, column1: str, column2: str) -> str:
    """Return a query checking whether a pair exists in a join table."""
    return f"""
		SELECT EXISTS(
			SELECT 1 FROM  {table} AS t
			WHERE t.{column1} = $1
				AND t.{column2}= $2
		)
	"""


def is_granted_query(
    table: str,
    column_id: str,
    column_subsystem: str,
    column_module: str,
    column_action: str,
) -> str:
    """Return a query checking whether a permission is granted to an owner."""
    return f"""
		SELECT EXISTS(
			SELECT 1 FROM  {table} AS t
			WHERE t.{column_id} = $1
				AND t.{column_subsystem}= $2
				AND t.{column_module}= $3
				AND t.{column_action}= $4
		)
	"""


def untouched(given: int, created: int, removed: int) -> int:
    """Return how many of the given permissions were left as they were.

    A negative count of given permissions yields -1, an empty one -2.
    """
    if given < 0:
        return -1
    if given == 0:
        return -2
    if given < created:
        return 0
    return given - created