import asyncio
import os
import sys
from dotenv import load_dotenv

# STEP 1: Make the 'Backend' directory importable when running from a checkout
backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend'))
sys.path.append(backend_dir)

# STEP 2: Load the project-root .env to get the DATABASE_URL
project_root = os.path.dirname(backend_dir)
load_dotenv(os.path.join(project_root, ".env"))
print(" Environment loaded.")

# STEP 3: Import application modules (now that path and env are set)
from catalog.services.database import engine, Base

# Import all models so their tables are registered on Base.metadata.
# artist_releases comes along with Artist and Release.
from catalog.models.artist import Artist
from catalog.models.release import Release
from catalog.models.album import Album
print(" Application modules imported successfully.")

async def create_all_tables():
    """Connects to the database and creates all tables for the imported models."""
    print("\nConnecting to the database to create tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print(" All tables created successfully!")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_all_tables())
