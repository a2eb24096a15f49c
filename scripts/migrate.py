#!/usr/bin/env python
"""Run alembic against the configured database.

    python scripts/migrate.py upgrade            # apply all migrations
    python scripts/migrate.py revision "message" # autogenerate a new revision
    python scripts/migrate.py downgrade -1
"""
import logging
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

COMMANDS = {
    "upgrade": lambda args: ["upgrade", args[0] if args else "head"],
    "downgrade": lambda args: ["downgrade", args[0] if args else "-1"],
    "revision": lambda args: ["revision", "--autogenerate", "-m", args[0]],
}


def main():
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        logger.error("Usage: python scripts/migrate.py {upgrade|downgrade|revision} [arg]")
        sys.exit(1)
    command, args = sys.argv[1], sys.argv[2:]
    if command == "revision" and not args:
        logger.error('Usage: python scripts/migrate.py revision "message"')
        sys.exit(1)

    repo_root = Path(__file__).resolve().parents[1]
    env_path = repo_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    # Host-run migrations may target a different URL than the app container
    migrations_url = os.getenv("MIGRATIONS_DATABASE_URL")
    if migrations_url:
        os.environ["DATABASE_URL"] = migrations_url

    cmd = [sys.executable, "-m", "alembic", *COMMANDS[command](args)]
    logger.info("Running %s", " ".join(cmd[2:]))
    result = subprocess.run(cmd, cwd=repo_root)
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
