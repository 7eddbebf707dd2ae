"""Database seed helpers."""

from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.logger import app_logger
from rental_admin.db import crud
from rental_admin.models import ADMIN_ROLE, ListingStatus, User
from rental_admin.utils.passwords import hash_password

SAMPLE_LISTINGS = [
    {
        "title": "Toyota Camry 2022 - Reliable & Comfortable",
        "description": "Perfect for city drives and long trips. Clean interior, excellent fuel economy.",
        "make": "Toyota",
        "model": "Camry",
        "year": 2022,
        "price_per_day": 45.00,
        "location": "Downtown",
        "image_url": "https://via.placeholder.com/300x200?text=Toyota+Camry",
        "status": ListingStatus.PENDING.value,
    },
    {
        "title": "Honda Accord 2021 - Premium Sedan",
        "description": "Spacious sedan with advanced safety features and premium interior.",
        "make": "Honda",
        "model": "Accord",
        "year": 2021,
        "price_per_day": 50.00,
        "location": "Airport",
        "image_url": "https://via.placeholder.com/300x200?text=Honda+Accord",
        "status": ListingStatus.APPROVED.value,
    },
    {
        "title": "Ford Mustang 2023 - Sports Car",
        "description": "Experience the thrill of driving a classic American muscle car.",
        "make": "Ford",
        "model": "Mustang",
        "year": 2023,
        "price_per_day": 85.00,
        "location": "City Center",
        "image_url": "https://via.placeholder.com/300x200?text=Ford+Mustang",
        "status": ListingStatus.REJECTED.value,
    },
    {
        "title": "Tesla Model 3 2023 - Electric Luxury",
        "description": "Eco-friendly electric vehicle with cutting-edge technology.",
        "make": "Tesla",
        "model": "Model 3",
        "year": 2023,
        "price_per_day": 75.00,
        "location": "Tech District",
        "image_url": "https://via.placeholder.com/300x200?text=Tesla+Model+3",
        "status": ListingStatus.PENDING.value,
    },
    {
        "title": "BMW X5 2022 - Luxury SUV",
        "description": "Premium SUV perfect for family trips and business travel.",
        "make": "BMW",
        "model": "X5",
        "year": 2022,
        "price_per_day": 95.00,
        "location": "Uptown",
        "image_url": "https://via.placeholder.com/300x200?text=BMW+X5",
        "status": ListingStatus.APPROVED.value,
    },
]


async def ensure_seed_admin_user(session: AsyncSession, username: str, password: str) -> User:
    """Create the seed admin user if it doesn't exist."""
    existing = await crud.get_user_by_username(session, username)
    if existing:
        app_logger.info(f"Seed admin user already exists: {username}")
        return existing

    user = await crud.create_user(
        session,
        username=username,
        password_hash=hash_password(password),
        role=ADMIN_ROLE,
    )
    await session.commit()
    app_logger.info(f"Seeded default admin user: {username} (ID: {user.id})")
    return user


async def ensure_sample_listings(session: AsyncSession) -> int:
    """Insert the sample listings when the listings table is empty.

    Returns:
        Number of listings inserted.
    """
    if await crud.count_listings(session) > 0:
        return 0

    for fields in SAMPLE_LISTINGS:
        crud.add_listing(session, **fields)
    await session.commit()

    app_logger.info(f"Seeded {len(SAMPLE_LISTINGS)} sample listings")
    return len(SAMPLE_LISTINGS)
