"""Whitespace and keyword-case formatting of emitted SQL."""
from typing import Optional

import sqlparse

from ddl2sql.common.settings import settings


def format_sql(sql: str, keyword_case: Optional[str] = None, reindent: Optional[bool] = None) -> str:
    """Formats SQL text without changing its meaning.

    Args:
        sql (str): SQL produced by the emitter.
        keyword_case (Optional[str]): ``upper``, ``lower`` or ``capitalize``;
            defaults to ``settings.keyword_case``.
        reindent (Optional[bool]): Put each clause on its own line; defaults
            to ``settings.reindent``.

    Returns:
        str: The formatted SQL.
    """
    if keyword_case is None:
        keyword_case = settings.keyword_case
    if reindent is None:
        reindent = settings.reindent
    return sqlparse.format(sql, keyword_case=keyword_case, reindent=reindent).strip()
