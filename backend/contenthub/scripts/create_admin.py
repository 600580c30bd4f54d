"""
Content Hub - Admin Bootstrap
Creates the first approved admin account; registration only produces contributors
"""
import argparse
import asyncio
import getpass

from sqlalchemy import select

from contenthub.core.database import async_session_maker, init_db
from contenthub.core.security import get_password_hash
from contenthub.models.user import User, UserRole


async def create_admin(email: str, full_name: str, password: str) -> None:
    """Create or promote ``email`` to an approved, active admin."""
    await init_db()

    async with async_session_maker() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user:
            print(f"Promoting existing account {email} to admin")
        else:
            user = User(email=email, full_name=full_name)
            session.add(user)
            print(f"Creating admin account {email}")

        user.hashed_password = get_password_hash(password)
        user.role = UserRole.ADMIN.value
        user.is_active = True
        user.is_approved = True
        user.failed_login_attempts = 0
        user.locked_until = None

        await session.commit()
        print("Done.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a Content Hub admin account")
    parser.add_argument("email")
    parser.add_argument("--name", default="Administrator")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if len(password) < 8:
        parser.error("password must be at least 8 characters")

    asyncio.run(create_admin(args.email, args.name, password))


if __name__ == "__main__":
    main()
