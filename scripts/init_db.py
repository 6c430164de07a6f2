"""Initialize the journaling database.

Usage:
  python scripts/init_db.py                          # create missing tables
  python scripts/init_db.py --drop                   # drop and recreate all tables
  python scripts/init_db.py --user alice --user bob  # also create login users
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from journaling.database import Base, SessionLocal, engine
import journaling.models  # noqa: F401 - registers all models
from journaling.models.user import User
from journaling.services.journal_registry import registry


def init_db(bind=None, drop: bool = False) -> list:
    bind = bind or engine
    if drop:
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    return sorted(Base.metadata.tables)


def ensure_users(db, logins) -> list:
    created = []
    for login in logins:
        if db.query(User).filter(User.login == login).first():
            continue
        db.add(User(login=login, name=login.capitalize()))
        created.append(login)
    db.commit()
    return created


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--drop", action="store_true", help="Drop all tables before creating them")
    parser.add_argument("--user", action="append", default=[], help="Login name to create if missing")
    args = parser.parse_args()

    tables = init_db(drop=args.drop)
    print(f"Tables ready: {len(tables)}")
    print(f"  journable types: {', '.join(registry.journable_types())}")

    if args.user:
        db = SessionLocal()
        try:
            created = ensure_users(db, args.user)
        finally:
            db.close()
        print(f"  users created: {', '.join(created) or '-'}")


if __name__ == "__main__":
    main()
