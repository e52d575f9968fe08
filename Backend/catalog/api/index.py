from typing import Optional

from fastapi import APIRouter, Depends

from catalog.models.album import Album
from catalog.models.artist import Artist
from catalog.models.release import Release
from catalog.schemas.album import AlbumIndexItem, AlbumReleaseInfo, AlbumResponse
from catalog.schemas.artist import ArtistIndexItem, ArtistReleaseInfo, ArtistResponse
from catalog.schemas.index import AlbumIndexResponse, ArtistIndexResponse, ReleaseIndexResponse
from catalog.schemas.release import ReleaseResponse
from catalog.services.attachments import AttachmentUrlResolver, get_attachment_resolver
from catalog.services.list_service import ListService, get_list_service

router = APIRouter()


def artist_response(artist: Artist, attachment_url: AttachmentUrlResolver) -> ArtistResponse:
    return ArtistResponse(id=artist.id, name=artist.name, logo_url=attachment_url(artist, "logo"))


def album_response(album: Album, attachment_url: AttachmentUrlResolver) -> AlbumResponse:
    return AlbumResponse(
        id=album.id,
        name=album.name,
        duration_in_minutes=album.duration_in_minutes,
        cover_url=attachment_url(album, "cover"),
    )


def release_response(release: Release, attachment_url: AttachmentUrlResolver) -> ReleaseResponse:
    return ReleaseResponse(
        id=release.id,
        name=release.name,
        released_at=release.released_at,
        created_at=release.created_at,
        duration_in_minutes=release.duration_in_minutes,
        album=album_response(release.album, attachment_url) if release.album else None,
        artists=[artist_response(artist, attachment_url) for artist in release.artists],
    )


@router.get("/releases", response_model=ReleaseIndexResponse)
async def browse_releases(
    q: Optional[str] = None,
    page: Optional[str] = None,
    service: ListService = Depends(get_list_service),
    attachment_url: AttachmentUrlResolver = Depends(get_attachment_resolver),
) -> ReleaseIndexResponse:
    """Release index, newest first, optionally fuzzy-searched by name or artist"""
    result = await service.browse_releases(q, page)
    return ReleaseIndexResponse(
        items=[release_response(release, attachment_url) for release in result.items],
        meta=result.meta,
        search_query=q,
    )


@router.get("/artists", response_model=ArtistIndexResponse)
async def browse_artists(
    q: Optional[str] = None,
    page: Optional[str] = None,
    service: ListService = Depends(get_list_service),
    attachment_url: AttachmentUrlResolver = Depends(get_attachment_resolver),
) -> ArtistIndexResponse:
    """Artist index ordered by name"""
    result = await service.browse_artists(q, page)
    items = [
        ArtistIndexItem(
            id=artist.id,
            name=artist.name,
            logo_url=attachment_url(artist, "logo"),
            banner_url=attachment_url(artist, "banner"),
            releases=[ArtistReleaseInfo(id=release.id, name=release.name) for release in artist.releases],
        )
        for artist in result.items
    ]
    return ArtistIndexResponse(items=items, meta=result.meta, search_query=q)


@router.get("/albums", response_model=AlbumIndexResponse)
async def browse_albums(
    q: Optional[str] = None,
    page: Optional[str] = None,
    service: ListService = Depends(get_list_service),
    attachment_url: AttachmentUrlResolver = Depends(get_attachment_resolver),
) -> AlbumIndexResponse:
    """Album index, most recently added first"""
    result = await service.browse_albums(q, page)
    items = [
        AlbumIndexItem(
            **album_response(album, attachment_url).model_dump(),
            artist=artist_response(album.artist, attachment_url) if album.artist else None,
            release=AlbumReleaseInfo(id=album.release.id, name=album.release.name) if album.release else None,
        )
        for album in result.items
    ]
    return AlbumIndexResponse(items=items, meta=result.meta, search_query=q)
