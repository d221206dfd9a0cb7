#!/usr/bin/env python3
"""
Create demo accounts for local development.

Creates one admin, one staff and one member per tier. Existing emails are
left untouched, so the script is safe to run repeatedly.

Usage:
    python scripts/seed_demo_members.py
    python scripts/seed_demo_members.py --password "S3cret-demo"
"""

import argparse
import asyncio

from sqlalchemy import select

from ministry_hub.core.database import AsyncSessionLocal, init_db
from ministry_hub.core.security import get_password_hash
from ministry_hub.models import Member, MemberRole, MemberTier

DEFAULT_PASSWORD = "MinistryHub123!"

DEMO_MEMBERS = [
    {"email": "admin@ministryhub.dev", "first_name": "Ada", "last_name": "Admin",
     "role": MemberRole.ADMIN, "tier": MemberTier.COVENANT},
    {"email": "staff@ministryhub.dev", "first_name": "Sam", "last_name": "Staff",
     "role": MemberRole.STAFF, "tier": MemberTier.PARTNER},
    {"email": "free@ministryhub.dev", "first_name": "Faith", "last_name": "Free",
     "role": MemberRole.MEMBER, "tier": MemberTier.FREE},
    {"email": "member@ministryhub.dev", "first_name": "Mark", "last_name": "Member",
     "role": MemberRole.MEMBER, "tier": MemberTier.MEMBER},
    {"email": "partner@ministryhub.dev", "first_name": "Paula", "last_name": "Partner",
     "role": MemberRole.MEMBER, "tier": MemberTier.PARTNER},
    {"email": "covenant@ministryhub.dev", "first_name": "Caleb", "last_name": "Covenant",
     "role": MemberRole.MEMBER, "tier": MemberTier.COVENANT},
]


async def seed_demo_members(password: str) -> int:
    await init_db()

    created = 0
    async with AsyncSessionLocal() as session:
        for data in DEMO_MEMBERS:
            existing = await session.execute(select(Member).where(Member.email == data["email"]))
            if existing.scalar_one_or_none():
                print(f"[Seed] exists   {data['email']}")
                continue

            session.add(Member(
                email=data["email"],
                hashed_password=get_password_hash(password),
                first_name=data["first_name"],
                last_name=data["last_name"],
                role=data["role"].value,
                tier=data["tier"].value,
            ))
            created += 1
            print(f"[Seed] created  {data['email']} ({data['role'].value}/{data['tier'].value})")

        await session.commit()

    return created


def main():
    parser = argparse.ArgumentParser(description="Create demo Ministry Hub accounts")
    parser.add_argument("--password", default=DEFAULT_PASSWORD, help="Password for new demo accounts")
    args = parser.parse_args()

    created = asyncio.run(seed_demo_members(args.password))
    print(f"\n[Seed] Done. {created} account(s) created.")


if __name__ == "__main__":
    main()
