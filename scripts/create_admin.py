#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Script to create admin user if it doesn't exist
"""
import asyncio
import sys
import os
import codecs

# Set UTF-8 encoding for Windows console
if sys.platform == "win32":
    sys.stdout = codecs.getwriter("utf-8")(sys.stdout.buffer, "strict")
    sys.stderr = codecs.getwriter("utf-8")(sys.stderr.buffer, "strict")

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Import all models first to register them with SQLAlchemy
import src.models  # This will register all models

from sqlalchemy import select
from src.auth.utils import get_password_hash
from src.database import AsyncSessionLocal, engine
from src.users.models import User, UserRole

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@auditionstudio.vn")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


async def create_admin_user():
    """Create admin user if it doesn't exist"""
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(
                select(User).where(User.username == ADMIN_USERNAME)
            )
            existing_admin = result.scalar_one_or_none()

            if existing_admin:
                print(f"ℹ️  Admin user already exists with ID {existing_admin.id}")
                print(f"   Email: {existing_admin.email}")
                print(f"   Role: {existing_admin.role.value}")
                return

            admin_user = User(
                email=ADMIN_EMAIL,
                username=ADMIN_USERNAME,
                full_name="Admin User",
                hashed_password=get_password_hash(ADMIN_PASSWORD),
                role=UserRole.ADMIN,
                is_active=True
            )

            session.add(admin_user)
            await session.commit()
            await session.refresh(admin_user)

            print("✅ Admin user created successfully!")
            print(f"   ID: {admin_user.id}")
            print(f"   Email: {admin_user.email}")
            print(f"   Username: {admin_user.username}")
            print(f"   Role: {admin_user.role.value}")
    except Exception as e:
        print(f"❌ Error creating admin user: {e}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(create_admin_user())
