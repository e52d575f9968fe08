from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from catalog.services.database import Base

class Album(Base):
    __tablename__ = "albums"
    __table_args__ = (
        CheckConstraint("duration_in_minutes > 0", name="ck_albums_duration_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    duration_in_minutes = Column(Integer, nullable=False)
    cover_key = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # unique=True keeps the release side of the relation 1:1
    release_id = Column(Integer, ForeignKey("releases.id", ondelete="CASCADE"), nullable=False, unique=True)
    release = relationship("Release", back_populates="album")

    # The owning artist, independent of the release's participant artists
    artist_id = Column(Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    artist = relationship("Artist", back_populates="albums")
