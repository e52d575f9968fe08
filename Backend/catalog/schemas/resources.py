# JSON:API resource definitions for the catalog types.
from typing import Optional

from catalog.services.attachments import AttachmentUrlResolver
from catalog.services.jsonapi import (
    MANY,
    ONE,
    OPTIONAL,
    RelationshipDescriptor,
    ResourceDefinition,
    ResourceProjector,
    iso8601,
)

RELEASES = "releases"
ALBUMS = "albums"
ARTISTS = "artists"


def _artist_attributes(artist, attachment_url: AttachmentUrlResolver) -> dict:
    return {
        "name": artist.name,
        "logo_url": attachment_url(artist, "logo"),
    }


def _album_attributes(album, attachment_url: AttachmentUrlResolver) -> dict:
    return {
        "name": album.name,
        "duration_in_minutes": album.duration_in_minutes,
        "cover_url": attachment_url(album, "cover"),
    }


def _release_attributes(release, attachment_url: AttachmentUrlResolver) -> dict:
    return {
        "name": release.name,
        "created_at": iso8601(release.created_at),
        "released_at": iso8601(release.released_at),
        "duration_in_minutes": release.duration_in_minutes,
    }


ARTIST_RESOURCE = ResourceDefinition(
    type=ARTISTS,
    attributes=_artist_attributes,
    self_link=lambda artist: f"/api/artists/{artist.id}",
)

ALBUM_RESOURCE = ResourceDefinition(
    type=ALBUMS,
    attributes=_album_attributes,
    relationships=(
        RelationshipDescriptor("artist", ARTISTS, ONE, lambda album: album.artist),
    ),
    self_link=lambda album: f"/api/albums/{album.id}",
)

RELEASE_RESOURCE = ResourceDefinition(
    type=RELEASES,
    attributes=_release_attributes,
    relationships=(
        RelationshipDescriptor("album", ALBUMS, OPTIONAL, lambda release: release.album),
        RelationshipDescriptor("artists", ARTISTS, MANY, lambda release: release.artists),
    ),
    self_link=lambda release: f"/api/releases/{release.id}",
)

RESOURCE_DEFINITIONS = {
    definition.type: definition
    for definition in (ARTIST_RESOURCE, ALBUM_RESOURCE, RELEASE_RESOURCE)
}

RELEASE_INCLUDES = ("album", "artists")


def catalog_projector(attachment_url: Optional[AttachmentUrlResolver] = None) -> ResourceProjector:
    return ResourceProjector(RESOURCE_DEFINITIONS, attachment_url)
