"""Reconcile legal-document expiry notifications outside a web request.

Meant for a daily cron so badges move on even when nobody opens the portal:

    python scripts/sync_notifications.py            # every client
    python scripts/sync_notifications.py --client-id 3
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.compliance_portal.compliance_portal.container import build_container
from src.compliance_portal.compliance_portal.main import configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--client-id", type=int, default=None)
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=settings.DB_CONFIG)
    result = container.notification_service.sync(client_id=args.client_id)
    logging.getLogger("compliance_portal.scripts").info(
        "OK: desired=%d created=%d deleted=%d", result.desired, result.created, result.deleted
    )


if __name__ == "__main__":
    main()
