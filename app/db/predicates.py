from sqlalchemy import Boolean, String, literal, literal_column, or_
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql import func
from sqlalchemy.sql.functions import FunctionElement


def unless_unset(predicate, value, type_, unset=None):
    """Условие вида ``(predicate OR :value = :unset)``.

    Один и тот же параметризованный запрос обслуживает и отфильтрованный,
    и нефильтрованный вариант: если значение равно "не задано", вторая часть
    OR истинна и фильтр ничего не отсекает.
    """
    probe = literal(value, type_)
    if unset is None:
        return or_(predicate, probe.is_(None))
    return or_(predicate, probe == literal(unset, type_))


class text_search(FunctionElement):
    """Полнотекстовое совпадение колонки с поисковой фразой"""
    type = Boolean()
    inherit_cache = True
    name = "text_search"


@compiles(text_search, "postgresql")
def _text_search_postgresql(element, compiler, **kw):
    column, term = list(element.clauses)
    config = literal_column("'simple'")
    expression = func.to_tsvector(config, column).op("@@")(func.plainto_tsquery(config, term))
    return compiler.process(expression, **kw)


@compiles(text_search)
def _text_search_default(element, compiler, **kw):
    # Без tsvector (SQLite и пр.) - поиск подстроки без учета регистра
    column, term = list(element.clauses)
    lowered = func.lower(column, type_=String)
    return compiler.process(lowered.contains(func.lower(term, type_=String)), **kw)
