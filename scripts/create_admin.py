import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from socialhub.core.config import settings
from socialhub.core.errors import AppError
from socialhub.db.session import async_session_maker
from socialhub.schemas.user import UserCreate
from socialhub.services.auth_service import create_user


async def create_admin(username, name, password):
    if not settings.ADMIN_EMAIL:
        print("Error: ADMIN_EMAIL is not configured.")
        return 1
    data = UserCreate(email=settings.ADMIN_EMAIL, username=username, name=name, password=password)
    async with async_session_maker() as session:
        try:
            user = await create_user(session, data, role="admin")
        except AppError as exc:
            print(f"Error: {exc.message}")
            return 1
        await session.commit()
        print("Success: Admin created!")
        print(f"Id: {user.id}")
        print(f"Email: {user.email}")
        print(f"Username: {user.username}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python scripts/create_admin.py <username> <name> <password>")
        sys.exit(1)

    username = sys.argv[1]
    name = sys.argv[2]
    password = sys.argv[3]
    sys.exit(asyncio.run(create_admin(username, name, password)))
