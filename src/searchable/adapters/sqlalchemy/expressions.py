"""SQLAlchemy adapter – custom SQL constructs.

``convert_using(expr, charset)`` renders ``CONVERT(expr USING charset)`` on
MySQL / MariaDB.  Other backends store text as Unicode already, so the
expression compiles to *expr* unchanged.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import String, literal_column
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class convert_using(FunctionElement):  # noqa: N801
    type = String()
    inherit_cache = True

    def __init__(self, expr: Any, charset: str) -> None:
        super().__init__(expr, literal_column(charset))


@compiles(convert_using)
def _compile_default(element: convert_using, compiler: Any, **kw: Any) -> str:
    expr, _charset = list(element.clauses)
    return compiler.process(expr, **kw)


@compiles(convert_using, "mysql")
@compiles(convert_using, "mariadb")
def _compile_mysql(element: convert_using, compiler: Any, **kw: Any) -> str:
    expr, charset = list(element.clauses)
    return f"CONVERT({compiler.process(expr, **kw)} USING {compiler.process(charset, **kw)})"


__all__ = ["convert_using"]
