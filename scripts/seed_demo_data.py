"""Seed demo data for local development.

Creates the tables, an admin, a customer, two specialists and a handful of
services. Existing accounts and services are left alone, so the script can
be re-run.
"""

import asyncio
import secrets

DEMO_SERVICES = [
    {"title": "Consultation", "price": 50.0, "duration_minutes": 60},
    {"title": "Follow-up", "price": 30.0, "duration_minutes": 60},
    {"title": "Extended Session", "price": 90.0, "duration_minutes": 120},
]

DEMO_SPECIALISTS = [
    {
        "name": "Alex Morgan",
        "email": "alex.morgan@demo.booking.local",
        "description": "General practice with a focus on first consultations.",
        "classification": "senior",
        "years_experience": 12,
    },
    {
        "name": "Sam Patel",
        "email": "sam.patel@demo.booking.local",
        "description": "Follow-up care and long-term plans.",
        "classification": "junior",
        "years_experience": 3,
    },
]

DEMO_CUSTOMER = {
    "name": "Demo Customer",
    "email": "customer@demo.booking.local",
}


def generate_temp_password() -> str:
    """Generate a temporary password for demo accounts."""
    return f"Demo{secrets.token_urlsafe(8)}!"


async def seed() -> list[dict]:
    """Create demo rows; returns credentials of newly created accounts."""
    from sqlalchemy import select

    from app.db.init_db import create_tables, init_db
    from app.db.session import AsyncSessionLocal
    from app.models.service import Service
    from app.services.auth import AuthService
    from app.services.catalog import CatalogService
    from app.services.specialist import SpecialistService

    await create_tables()
    created = []

    async with AsyncSessionLocal() as session:
        await init_db(session)

        catalog = CatalogService(session)
        for entry in DEMO_SERVICES:
            existing = await session.scalar(
                select(Service).where(Service.title == entry["title"])
            )
            if existing:
                continue
            await catalog.create_service(**entry)

        auth_service = AuthService(session)
        if not await auth_service.get_user_by_email(DEMO_CUSTOMER["email"]):
            password = generate_temp_password()
            await auth_service.register_customer(password=password, **DEMO_CUSTOMER)
            created.append({"email": DEMO_CUSTOMER["email"], "password": password, "role": "customer"})

        specialist_service = SpecialistService(session)
        for entry in DEMO_SPECIALISTS:
            if await auth_service.get_user_by_email(entry["email"]):
                continue
            password = generate_temp_password()
            await specialist_service.create_specialist(password=password, **entry)
            created.append({"email": entry["email"], "password": password, "role": "specialist"})

    return created


async def main():
    """Main entry point."""
    created = await seed()

    print("=" * 60)
    print("DEMO DATA SEEDED")
    print("=" * 60)
    print()
    if created:
        print("NEW ACCOUNTS:")
        for account in created:
            print(f"  - {account['email']} ({account['role']}): {account['password']}")
    else:
        print("No new accounts (all demo accounts already exist).")


if __name__ == "__main__":
    asyncio.run(main())
