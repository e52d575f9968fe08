from sqlalchemy import Table, Column, Integer, ForeignKey
from catalog.services.database import Base

# Plain association table; the composite primary key lists an artist at most
# once per release.
artist_release = Table(
    'artist_releases',
    Base.metadata,
    Column('artist_id', Integer, ForeignKey('artists.id', ondelete="CASCADE"), primary_key=True),
    Column('release_id', Integer, ForeignKey('releases.id', ondelete="CASCADE"), primary_key=True)
)
