"""
Free-text filter construction for person search.
"""
from sqlalchemy import func, or_
from sqlalchemy.sql.elements import ColumnElement

from ..models import Person
from .records import SEARCH_FIELDS

LIKE_ESCAPE = "\\"

# Unicode case folding registered on SQLite connections by the store
CASEFOLD_FUNCTION = "casefold"


def escape_like(term: str) -> str:
    """
    Escape LIKE metacharacters so the term matches literally.

    Args:
        term: Raw search term

    Returns:
        Term with the escape character, '%' and '_' escaped
    """
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_pattern(term: str) -> str:
    """Substring pattern for a term (``%term%`` with the term escaped)."""
    return f"%{escape_like(term)}%"


def build_person_filter(term: str, dialect_name: str = "postgresql") -> ColumnElement:
    """
    Build a case-insensitive substring filter over the searchable person fields.

    Each field is compared against the same bound pattern and the comparisons
    are OR-combined. NULL fields never match. Databases with a native ILIKE
    use it; on SQLite both sides are case-folded with ``casefold()`` and
    compared with LIKE, so non-ASCII letters match regardless of case.

    Args:
        term: Search term, may be empty
        dialect_name: SQLAlchemy dialect of the target database

    Returns:
        SQLAlchemy boolean clause
    """
    pattern = build_pattern(term)
    if dialect_name == "sqlite":
        folded = pattern.casefold()
        return or_(
            *(
                getattr(func, CASEFOLD_FUNCTION)(getattr(Person, field)).like(folded, escape=LIKE_ESCAPE)
                for field in SEARCH_FIELDS
            )
        )
    return or_(
        *(getattr(Person, field).ilike(pattern, escape=LIKE_ESCAPE) for field in SEARCH_FIELDS)
    )
