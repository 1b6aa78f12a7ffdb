"""Seeding orchestrator.

Builds the configured storage (BOOKSHELF_STORAGE / BOOKSHELF_DB_PATH), ensures
the schema exists and loads the sample catalog when the catalog is empty.
Produces one concise line per step.

Exit Codes:
  0 = seeded / or already present
  3 = seeding failed (non-fatal for manual invocation)
"""
from __future__ import annotations

import sys
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from bookshelf.services.container import Services, build_services
from bookshelf.services.sample_data import seed_sample_catalog


def main() -> int:
    services: Optional[Services] = None
    try:
        services = build_services()
        summary = seed_sample_catalog(services)
    except SQLAlchemyError as exc:
        print(f"[SEED] catalog ERROR {exc}", file=sys.stderr)
        return 3
    finally:
        if services is not None:
            services.close()
    print(
        f"[SEED] catalog ok storage={services.storage} created={'yes' if summary['seeded'] else 'no'} "
        f"books={summary['books']} reviews={summary['reviews']} shelf_entries={summary['shelf_entries']}"
    )
    return 0


__all__ = ["main"]
