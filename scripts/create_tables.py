"""Create the raffle tables in the configured database and seed bootstrap data.

Reads DATABASE_URL (or PG* variables) from .env / environment.

Usage:
  python scripts/create_tables.py [--no-seed]
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

# Config classes read the environment at import time.
load_dotenv()
if (PROJECT_ROOT / ".env.local").exists():
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env.local", override=True)

from raffle_admin import models  # noqa: E402,F401  (registers tables on Base.metadata)
from raffle_admin.config import get_config, resolve_database_url  # noqa: E402
from raffle_admin.db import create_app_engine, create_session_factory  # noqa: E402
from raffle_admin.models.base import Base  # noqa: E402
from raffle_admin.services.bootstrap_service import seed_defaults  # noqa: E402

logger = logging.getLogger("create_tables")


def main(argv: list[str] | None = None) -> int:
    """Create all ORM tables, then the default admin and sample raffle if missing."""

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--no-seed", action="store_true", help="only create tables")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    engine = create_app_engine(resolve_database_url())
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created (or already exist).")

    if not args.no_seed:
        config = get_config()
        with create_session_factory(engine).begin() as session:
            result = seed_defaults(
                session,
                admin_username=config.DEFAULT_ADMIN_USERNAME,
                admin_password=config.DEFAULT_ADMIN_PASSWORD,
                lottery_reference=config.DEFAULT_LOTTERY_REFERENCE,
            )
        logger.info("Seed: admin_created=%s sample_raffle_id=%s", result.admin_created, result.sample_raffle_id)

    engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
