#!/usr/bin/env python3
"""
Fixture loading script

Creates the tables and fills the configured database with demonstration
data.
Usage:
    python scripts/load_fixtures.py
    python scripts/load_fixtures.py --reset
"""

import argparse
import sys

from bilemo.persistence import db
from bilemo.persistence.fixtures import load_fixtures
from bilemo.persistence.models import User


def main():
    parser = argparse.ArgumentParser(description="Load BileMo demonstration data")
    parser.add_argument(
        "--reset", action="store_true", help="Drop every table before loading"
    )
    parser.add_argument(
        "--seed", type=int, default=2022, help="Seed of the data generator"
    )
    args = parser.parse_args()

    engine = db.get_engine()
    if args.reset:
        print("Dropping existing tables...")
        db.Base.metadata.drop_all(bind=engine)
    db.create_tables()

    session = db.get_session_local()()
    try:
        if session.query(User).first() is not None:
            print("Database already holds accounts; use --reset to reload.")
            return 1
        counts = load_fixtures(session, seed=args.seed)
    finally:
        session.close()

    for entity, count in counts.items():
        print(f"  {entity}: {count}")
    print("Fixtures loaded.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
