"""Database seeder for local development of the StudyHub API."""
import asyncio
import argparse
import logging
import random
import time

from studyhub.database import engine, async_session, Base
from studyhub.models import Like, Resource, StudyListEntry, Tag, User, resource_tags

logger = logging.getLogger("seed")

TAGS = [
    ("python", "#3776ab"), ("javascript", "#f7df1e"), ("typescript", "#3178c6"),
    ("react", "#61dafb"), ("sql", "#336791"), ("testing", "#99425b"),
    ("git", "#f05032"), ("algorithms", "#6a737d"), ("css", "#264de4"),
]
TYPES = ["article", "video", "documentation", "course", "exercise"]


async def seed(small: bool = False, reset: bool = False):
    num_users = 5 if small else 30
    num_resources = 20 if small else 500

    start = time.perf_counter()
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        tags = [Tag(tag_name=name, tag_colour=colour) for name, colour in TAGS]
        session.add_all(tags)

        users = [
            User(name=f"User {i}", is_faculty=(i % 5 == 0))
            for i in range(num_users)
        ]
        session.add_all(users)
        await session.flush()
        logger.info("Created %d tags and %d users", len(tags), len(users))

        resources = []
        for i in range(num_resources):
            resource = Resource(
                author_id=random.choice(users).id,
                title=f"Resource {i}: notes on {random.choice(TAGS)[0]}",
                description=f"Study material number {i}.",
                type=random.choice(TYPES),
                recommended=random.choice(["Recommended", "Worth a look", None]),
                url=f"https://example.com/resources/{i}",
                week=f"week {random.randint(1, 12)}",
            )
            session.add(resource)
            resources.append(resource)
        await session.flush()
        logger.info("Created %d resources", len(resources))

        for resource in resources:
            for tag in random.sample(tags, k=random.randint(1, 3)):
                await session.execute(
                    resource_tags.insert().values(resource_id=resource.id, tag_id=tag.tag_id)
                )
            for voter in random.sample(users, k=random.randint(0, min(5, len(users)))):
                session.add(Like(author_id=voter.id, resource_id=resource.id, liked=random.random() > 0.3))

        for user in users:
            for resource in random.sample(resources, k=min(3, len(resources))):
                session.add(StudyListEntry(user_id=user.id, resource_id=resource.id, studied=random.random() > 0.5))

        await session.commit()

    logger.info("Seeding complete in %.1fs", time.perf_counter() - start)


def main():
    parser = argparse.ArgumentParser(description="Seed the StudyHub database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset (20 resources)")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(seed(small=args.small, reset=args.reset))


if __name__ == "__main__":
    main()
