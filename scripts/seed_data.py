import sys
import os
import asyncio
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend'))
sys.path.append(backend_dir)
load_dotenv(os.path.join(os.path.dirname(backend_dir), ".env"))

from catalog.models.artist import Artist
from catalog.models.release import Release
from catalog.models.album import Album
from catalog.services.database import engine, SessionLocal

async def create_demo_data():
    now = datetime.now(timezone.utc)

    async with SessionLocal() as session:
        artists = [
            Artist(name="The Beatles"),
            Artist(name="Pink Floyd"),
            Artist(name="Miles Davis"),
            Artist(name="John Coltrane"),
        ]
        session.add_all(artists)
        await session.flush()
        beatles, floyd, miles, coltrane = artists

        releases = [
            Release(name="Abbey Road", released_at=datetime(1969, 9, 26, tzinfo=timezone.utc), artists=[beatles]),
            Release(name="Dark Side of the Moon", released_at=datetime(1973, 3, 1, tzinfo=timezone.utc), artists=[floyd]),
            Release(name="Kind of Blue", released_at=datetime(1959, 8, 17, tzinfo=timezone.utc), artists=[miles, coltrane]),
            # Upcoming, no album yet
            Release(name="Lost Sessions", released_at=now + timedelta(days=30), artists=[miles, coltrane]),
        ]
        session.add_all(releases)
        await session.flush()

        albums = [
            Album(name="Abbey Road", duration_in_minutes=47, release=releases[0], artist=beatles),
            Album(name="The Dark Side of the Moon", duration_in_minutes=43, release=releases[1], artist=floyd),
            Album(name="Kind of Blue", duration_in_minutes=46, release=releases[2], artist=miles),
        ]
        session.add_all(albums)

        await session.commit()
        print("✅ Demo data created successfully!")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_demo_data())
