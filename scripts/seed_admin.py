"""Script to seed the admin user into the configured database."""

import asyncio
import sys
from pathlib import Path

# Add the parent directory to the path so we can import from rental_admin
sys.path.insert(0, str(Path(__file__).parent.parent))

from rental_admin.config.settings import settings
from rental_admin.db.db import Database
from rental_admin.db.seed import ensure_seed_admin_user, ensure_sample_listings


async def seed_admin_user(with_samples: bool = False):
    """Create the admin user (and optionally the sample listings) if missing."""
    db = Database(settings.effective_database_url)
    await db.init()

    try:
        async with db.session() as session:
            admin_user = await ensure_seed_admin_user(
                session,
                settings.SEED_ADMIN_USERNAME,
                settings.SEED_ADMIN_PASSWORD,
            )
            inserted = await ensure_sample_listings(session) if with_samples else 0

        print("=" * 50)
        print(f"Username: {admin_user.username}")
        print(f"Role: {admin_user.role}")
        print(f"User ID: {admin_user.id}")
        if with_samples:
            print(f"Sample listings inserted: {inserted}")
        print("=" * 50)
        return admin_user
    finally:
        await db.close()


async def main():
    """Main entry point."""
    print("Seeding admin user...")
    await seed_admin_user(with_samples="--with-samples" in sys.argv[1:])
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
