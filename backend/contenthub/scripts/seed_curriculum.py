"""
Content Hub - Curriculum Seeder
Stores the built-in curriculum tree, optionally replacing the current one
"""
import argparse
import asyncio

from contenthub.core.constants import DEFAULT_CURRICULUM
from contenthub.core.database import async_session_maker, init_db
from contenthub.services.curriculum import CurriculumRepository


async def seed_curriculum(key: str | None = None, reset: bool = False) -> None:
    await init_db()

    async with async_session_maker() as session:
        repository = CurriculumRepository(session, key=key)
        stored = await repository.load()

        if reset:
            stored = await repository.save(DEFAULT_CURRICULUM)
            print(f"Reset curriculum '{repository.key}' to the default tree")

        await session.commit()

        for class_name, subjects in stored.tree.items():
            print(f"  {class_name}: {', '.join(subjects) or '-'}")
        print(f"\nCurriculum '{repository.key}' at revision {stored.revision}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the curriculum document")
    parser.add_argument("--key", default=None, help="Document key (defaults to settings)")
    parser.add_argument("--reset", action="store_true", help="Overwrite the stored tree")
    args = parser.parse_args()

    asyncio.run(seed_curriculum(args.key, args.reset))
