from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from catalog.models.artist_release import artist_release
from catalog.services.database import Base

class Release(Base):
    __tablename__ = "releases"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    released_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # A release owns at most one album
    album = relationship("Album", back_populates="release", uselist=False)

    # A release has one or more participant artists
    artists = relationship("Artist", secondary=artist_release, back_populates="releases")

    @property
    def duration_in_minutes(self):
        """Duration of the release's album, None when it has no album."""
        if self.album is None:
            return None
        return self.album.duration_in_minutes
