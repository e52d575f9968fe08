"""
Independent, name-keyed filters over a candidate statement.

Each filter is a closure ``(stmt, value) -> stmt``. The composer applies
them in registration order, so the generated SQL is deterministic.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.sql import Select

from catalog.models.release import Release

logger = logging.getLogger(__name__)

FilterFn = Callable[[Select, object], Select]
Clock = Callable[[], datetime]

TRUE_VALUES = ("1", "true")
FALSE_VALUES = ("0", "false")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_tristate(value: object) -> Optional[bool]:
    """'1'/'true' -> True, '0'/'false' -> False, anything else -> None."""
    if value is None:
        return None
    text = str(value)
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


class FilterComposer:
    def __init__(self) -> None:
        self._filters: List[Tuple[str, FilterFn]] = []

    def register(self, name: str, fn: FilterFn) -> "FilterComposer":
        if name in self.names:
            raise ValueError(f"Filter '{name}' is already registered")
        self._filters.append((name, fn))
        return self

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._filters]

    def apply(self, stmt: Select, params: Mapping[str, object]) -> Select:
        """Apply every registered filter whose parameter is present in params."""
        applied: Dict[str, object] = {}
        for name, fn in self._filters:
            value = params.get(name)
            if value is None:
                continue
            stmt = fn(stmt, value)
            applied[name] = value
        if applied:
            logger.debug(f"Applied filters: {applied}")
        return stmt


def released_filter(clock: Clock = utcnow, column=Release.released_at) -> FilterFn:
    """
    Temporal filter: true-like keeps entries released strictly before now,
    false-like keeps those released now or later, any other value is a no-op.
    """
    def apply(stmt: Select, value: object) -> Select:
        past = parse_tristate(value)
        if past is None:
            return stmt
        now = clock()
        if past:
            return stmt.where(column < now)
        return stmt.where(column >= now)

    return apply


def release_filters(clock: Clock = utcnow) -> FilterComposer:
    """Filters offered by the release listing."""
    return FilterComposer().register("past", released_filter(clock))
