"""
SQL utilities for consistent handling of query results.

SQLModel/SQLAlchemy may return COUNT results as int or as a 1-tuple/Row.
Use scalar_int() to safely coerce to int everywhere.

insert_ignore() builds an INSERT that silently skips rows whose primary key
already exists, for the dialects we deploy on (SQLite, PostgreSQL).
"""
from typing import Any, Dict, Type

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, SQLModel


def scalar_int(x: Any) -> int:
    """Convert COUNT/aggregate result to int. Handles int or 1-tuple/Row."""
    if x is None:
        return 0
    try:
        return int(x[0])
    except Exception:
        return int(x)


def insert_ignore(session: Session, model: Type[SQLModel], values: Dict[str, Any]):
    """INSERT ... ON CONFLICT DO NOTHING for the session's dialect."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise NotImplementedError(f"insert_ignore is not supported on dialect '{dialect}'")
    return stmt.on_conflict_do_nothing()
