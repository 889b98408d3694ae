#!/usr/bin/env python3
"""Seed the data directory with sample contacts and tasks, or wipe it.

Goes through ContactService/TaskService, so seeded data passes the same
validation and phone-uniqueness rules as API requests. Contacts whose phone
already exists are skipped, which makes the script safe to re-run.

Usage:
    python scripts/seed_contacts.py [--data-dir data] [--count 25]
    python scripts/seed_contacts.py --reset
"""
import argparse
import logging
import os
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402

from contactbook.application import (  # noqa: E402
    ContactInput,
    ContactService,
    TaskInput,
    TaskService,
    ValidationFailed,
)
from contactbook.infrastructure import (  # noqa: E402
    JsonContactRepository,
    JsonTaskRepository,
)

load_dotenv(REPO_ROOT / ".env")

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger("seed_contacts")

FIRST_NAMES = ["Ann", "Ben", "Chloe", "Dev", "Elena", "Farid", "Grace", "Hugo"]
LAST_NAMES = ["Lee", "Moreno", "Okafor", "Patel", "Quinn", "Rossi", "Silva"]
STREETS = ["Main Street", "Oak Avenue", "Harbor Road", "Elm Court", "Mill Lane"]
TASK_TITLES = ["Call back", "Send proposal", "Schedule meeting", "Follow up"]


def _sample_contact(i: int) -> ContactInput:
    first = FIRST_NAMES[i % len(FIRST_NAMES)]
    last = LAST_NAMES[(i // len(FIRST_NAMES)) % len(LAST_NAMES)]
    return ContactInput(
        name=f"{first} {last}",
        email=f"{first.lower()}.{last.lower()}{i}@example.com",
        phone=f"555-{i:04d}",
        address=f"{i + 1} {STREETS[i % len(STREETS)]}",
    )


def seed(data_dir: Path, count: int) -> None:
    contacts = ContactService(JsonContactRepository(data_dir / "contacts.json"))
    tasks = TaskService(JsonTaskRepository(data_dir / "tasks.json"))
    created = 0
    for i in range(count):
        try:
            contact = contacts.create_contact(_sample_contact(i))
        except ValidationFailed as exc:
            logger.info("Skipping sample %d: %s", i, exc)
            continue
        created += 1
        for j in range(i % 3):
            tasks.create_task(
                TaskInput(
                    contact_id=contact.id,
                    title=TASK_TITLES[(i + j) % len(TASK_TITLES)],
                    due_date=(date.today() + timedelta(days=7 * (j + 1))).isoformat(),
                )
            )
    logger.info(
        "Seeded %d contacts; store now holds %d contacts and %d tasks",
        created,
        contacts.count(),
        tasks.count(),
    )


def reset(data_dir: Path) -> None:
    JsonContactRepository(data_dir / "contacts.json").reset()
    JsonTaskRepository(data_dir / "tasks.json").reset()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(os.environ.get("CONTACTBOOK_DATA_DIR", "data")),
    )
    parser.add_argument("--count", type=int, default=25)
    parser.add_argument("--reset", action="store_true", help="delete all data")
    args = parser.parse_args()

    if args.reset:
        reset(args.data_dir)
    else:
        seed(args.data_dir, args.count)


if __name__ == "__main__":
    main()
