"""Create the form_submissions and geocoded_addresses tables."""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine

from geoform.config import settings
from geoform.models import Base


async def init_db():
    """Create any missing tables; existing tables and rows are left alone."""
    engine = create_async_engine(settings.sqlalchemy_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    for table in Base.metadata.sorted_tables:
        print(f"  + Table: {table.name}")

    await engine.dispose()
    print("\nDatabase ready!")


if __name__ == "__main__":
    asyncio.run(init_db())
