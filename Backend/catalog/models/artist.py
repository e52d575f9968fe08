from sqlalchemy import Column, String, Integer, DateTime, func
from sqlalchemy.orm import relationship
from catalog.models.artist_release import artist_release

from catalog.services.database import Base

class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    # Storage keys of the logo/banner attachments, resolved to URLs elsewhere
    logo_key = Column(String, nullable=True)
    banner_key = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Albums this artist is the recorded owner of
    albums = relationship("Album", back_populates="artist")

    # Releases the artist participates in (many-to-many)
    releases = relationship("Release", secondary=artist_release, back_populates="artists")
