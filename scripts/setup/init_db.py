"""
Initialize the document store and check the state cache.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed-staff]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import redis
from redis.exceptions import RedisError
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from zoo.config import settings
from zoo.database import SessionLocal, create_tables, engine
from zoo.services.staff_service import StaffService
from zoo.services.zoo_service import REQUIRED_ROLES


def seed_staff():
    """One staff member per role required to open the zoo, skipping roles already covered."""
    db = SessionLocal()
    try:
        staff = StaffService(db)
        for role in REQUIRED_ROLES:
            if staff.store.count_where({"job.title": role.value}):
                print(f"   · {role.value} already staffed")
                continue
            staff.create_staff(role, first_name="Default", last_name=role.value,
                               email=f"{role.value.lower()}@zoo.local")
            print(f"   ✓ {role.value} created")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables and check connections")
    parser.add_argument("--seed-staff", action="store_true",
                        help="create one staff member for each role required to open")
    args = parser.parse_args()

    print("🗄️  Zoo backend initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print(f"📡 State cache: {settings.REDIS_URL}")
    try:
        client = redis.Redis.from_url(settings.REDIS_URL)
        client.ping()
        print("✅ State cache connection OK")
    except RedisError as e:
        print(f"❌ Cannot connect to state cache: {e}")
        print("\nMake sure Redis Stack (RedisJSON) is running:")
        print("  docker run -d -p 6379:6379 redis/redis-stack-server")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = inspect(engine).get_table_names()
    print(f"📊 Tables ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed_staff:
        print("\n👥 Seeding staff...")
        seed_staff()

    print("\n🎉 Ready! Start the backend:")
    print(f"   uvicorn zoo.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
