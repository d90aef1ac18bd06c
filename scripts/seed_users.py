#!/usr/bin/env python3
"""Seed the database with active and inactive development users."""
import argparse
import asyncio

from userapi.core.database import async_session_factory, engine
from userapi.core.security import hash_password
from userapi.models import Base, User


async def seed_users(active: int, inactive: int, password: str) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    password_hash = hash_password(password)
    async with async_session_factory() as session:
        for i in range(active + inactive):
            session.add(User(
                username=f"user{i + 1}",
                email=f"user{i + 1}@mail.com",
                password=password_hash,
                inactive=i >= active,
            ))
        await session.commit()

    print(f"Created {active} active and {inactive} inactive users")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--active", type=int, default=25)
    parser.add_argument("--inactive", type=int, default=0)
    parser.add_argument("--password", default="P4ssword")
    args = parser.parse_args()
    asyncio.run(seed_users(args.active, args.inactive, args.password))
