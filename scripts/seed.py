"""Fill the guest book with sample entries."""
import argparse
import asyncio
import random
import time

from app.config import settings
from app.database import Base, build_engine
from app.gateway import CommentGateway

NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi"]
MESSAGES = [
    "Hello!",
    "Lovely site, thanks for having me.",
    "Greetings from the other side of the world.",
    "First time here, will come back.",
    "Keep up the good work!",
]


async def seed(count: int, reset: bool = False) -> None:
    engine = build_engine(settings.DATABASE_URL, settings.DATABASE_KEY)
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    gateway = CommentGateway(engine=engine)

    print(f"Seeding {count} comments")
    start = time.perf_counter()
    for _ in range(count):
        await gateway.insert(random.choice(NAMES), random.choice(MESSAGES))
    await gateway.dispose()

    elapsed = time.perf_counter() - start
    print(f"Seeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the guest book database")
    parser.add_argument("--count", type=int, default=20, help="Number of comments to create")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate the table first")
    args = parser.parse_args()
    asyncio.run(seed(args.count, reset=args.reset))


if __name__ == "__main__":
    main()
