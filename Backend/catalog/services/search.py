"""
Typo-tolerant search over catalog entities.

The query's characters must appear in the target in order, with anything
allowed in between: "hih" matches "High Energy", "jhn" matches "John".
Matching is pushed to the database as an ILIKE pattern, so the candidate
set stays a SQL statement that can still be counted and paginated.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.sql import Select

from catalog.models.album import Album
from catalog.models.artist import Artist
from catalog.models.release import Release

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"
WILDCARD = "%"
_LIKE_SPECIALS = (WILDCARD, "_", ESCAPE_CHAR)


def _query_chars(query: Optional[str]) -> list[str]:
    if not query:
        return []
    return [char for char in query if not char.isspace()]


def is_blank_query(query: Optional[str]) -> bool:
    """True for None, "" and whitespace-only queries."""
    return not _query_chars(query)


def build_fuzzy_pattern(query: Optional[str]) -> str:
    """
    Turn a raw query into a LIKE pattern matching its characters in order.

    Whitespace is dropped and LIKE specials are escaped with a backslash,
    so "100%" matches a literal percent sign:

        build_fuzzy_pattern("hih")   -> "%h%i%h%"
        build_fuzzy_pattern("a_b")   -> "%a%\\_%b%"
        build_fuzzy_pattern("   ")   -> "%"
    """
    chars = _query_chars(query)
    if not chars:
        return WILDCARD

    escaped = [ESCAPE_CHAR + char if char in _LIKE_SPECIALS else char for char in chars]
    return WILDCARD + WILDCARD.join(escaped) + WILDCARD


@dataclass(frozen=True, eq=False)
class RelatedField:
    """A related entity's column worth searching, reached through a relationship."""
    relationship: object
    column: object
    many: bool = False

    def matches(self, pattern: str):
        condition = self.column.ilike(pattern, escape=ESCAPE_CHAR)
        # EXISTS subqueries: a primary row shows up once, however many
        # related rows match.
        if self.many:
            return self.relationship.any(condition)
        return self.relationship.has(condition)


@dataclass(frozen=True, eq=False)
class EntitySearch:
    """
    Fuzzy search for one entity type.

    Filters a caller-supplied statement on the entity's own column OR any of
    its related columns. The statement is the search universe: it is only
    narrowed, never replaced.
    """
    name: str
    column: object
    related: Tuple[RelatedField, ...] = field(default_factory=tuple)

    def apply(self, stmt: Select, query: Optional[str]) -> Select:
        if is_blank_query(query):
            return stmt

        pattern = build_fuzzy_pattern(query)
        logger.debug(f"{self.name} search: {query!r} -> {pattern!r}")

        conditions = [self.column.ilike(pattern, escape=ESCAPE_CHAR)]
        conditions.extend(related.matches(pattern) for related in self.related)
        return stmt.where(or_(*conditions))


ARTIST_SEARCH = EntitySearch(name="artists", column=Artist.name)

ALBUM_SEARCH = EntitySearch(
    name="albums",
    column=Album.name,
    related=(RelatedField(Album.artist, Artist.name),),
)

RELEASE_SEARCH = EntitySearch(
    name="releases",
    column=Release.name,
    related=(RelatedField(Release.artists, Artist.name, many=True),),
)

# The public listing also looks at the album title.
RELEASE_LIST_SEARCH = EntitySearch(
    name="releases",
    column=Release.name,
    related=(
        RelatedField(Release.album, Album.name),
        RelatedField(Release.artists, Artist.name, many=True),
    ),
)
