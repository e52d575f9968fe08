import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from catalog.core.config import settings
from catalog.core.exceptions import NotFoundException
from catalog.models.album import Album
from catalog.models.artist import Artist
from catalog.models.release import Release
from catalog.schemas.list_params import ListParams
from catalog.services.database import get_db
from catalog.services.filters import Clock, utcnow, release_filters
from catalog.services.pagination import Page, normalize_page, normalize_per_page, paginate
from catalog.services.search import (
    ALBUM_SEARCH,
    ARTIST_SEARCH,
    RELEASE_LIST_SEARCH,
    RELEASE_SEARCH,
    EntitySearch,
    is_blank_query,
)

logger = logging.getLogger(__name__)


def releases_for_index() -> Select:
    """Releases with album (and its artist) and participant artists loaded, newest first."""
    return select(Release).options(
        selectinload(Release.album).selectinload(Album.artist),
        selectinload(Release.artists),
    ).order_by(Release.released_at.desc(), Release.name.asc(), Release.id.asc())


def artists_for_index() -> Select:
    return select(Artist).options(
        selectinload(Artist.releases)
    ).order_by(Artist.name.asc(), Artist.id.asc())


def albums_for_index() -> Select:
    return select(Album).options(
        selectinload(Album.artist),
        selectinload(Album.release),
    ).order_by(Album.created_at.desc(), Album.id.desc())


class ListService:
    """Builds the candidate statement for each listing and paginates it."""

    def __init__(self, db_session: AsyncSession, clock: Clock = utcnow):
        self.db = db_session
        self.filters = release_filters(clock)

    async def list_releases(self, params: ListParams) -> Page:
        """The public release listing: temporal filter, then search, then one page."""
        page = normalize_page(params.page)
        per_page = normalize_per_page(params.limit, settings.DEFAULT_PER_PAGE, settings.MAX_PER_PAGE)

        stmt = self.filters.apply(releases_for_index(), {"past": params.past})
        stmt = RELEASE_LIST_SEARCH.apply(stmt, params.search)

        result = await paginate(self.db, stmt, page, per_page)
        logger.info(
            f"Listed releases: page={page} per_page={per_page} past={params.past!r} "
            f"search={params.search!r} total={result.meta.total_count}"
        )
        return result

    async def _browse(self, stmt: Select, search: EntitySearch, query: Optional[str], page: object) -> Page:
        # Searching shows (nearly) everything on one page.
        per_page = settings.INDEX_PER_PAGE if is_blank_query(query) else settings.INDEX_SEARCH_PER_PAGE
        stmt = search.apply(stmt, query)
        result = await paginate(self.db, stmt, normalize_page(page), per_page)
        logger.info(f"Browsed {search.name}: q={query!r} total={result.meta.total_count}")
        return result

    async def browse_releases(self, query: Optional[str] = None, page: object = None) -> Page:
        return await self._browse(releases_for_index(), RELEASE_SEARCH, query, page)

    async def browse_artists(self, query: Optional[str] = None, page: object = None) -> Page:
        return await self._browse(artists_for_index(), ARTIST_SEARCH, query, page)

    async def browse_albums(self, query: Optional[str] = None, page: object = None) -> Page:
        return await self._browse(albums_for_index(), ALBUM_SEARCH, query, page)

    async def get_release(self, release_id: int) -> Release:
        """A single release with its album and artists loaded."""
        result = await self.db.execute(
            releases_for_index().where(Release.id == release_id)
        )
        release = result.scalar_one_or_none()
        if release is None:
            raise NotFoundException("Release", str(release_id))
        return release


async def get_list_service(db: AsyncSession = Depends(get_db)) -> ListService:
    return ListService(db)
