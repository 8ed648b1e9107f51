#!/usr/bin/env python3
"""
Seed the vendor directory from JSON files.

Usage:
    python data/seed_vendors.py

Reads every *.json file in data/raw/ (a list of vendor objects, or
{"vendors": [...]} as produced by GET /api/admin/vendors/export). With no
files present, loads the built-in default directory.

Vendors are matched on (name, city): existing rows are updated, new rows
are inserted. Nothing is deleted.
"""

import json
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

REQUIRED_FIELDS = ("name", "category", "city", "state")


def load_vendor_file(filepath: Path) -> list:
    """Vendor dicts from one file. Rows missing a required field are skipped."""
    with open(filepath) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("vendors", [])

    vendors = []
    for row in data:
        missing = [k for k in REQUIRED_FIELDS if not row.get(k)]
        if missing:
            print(f"  Skipping {row.get('name', '?')}: missing {', '.join(missing)}")
            continue
        vendors.append(row)
    return vendors


def upsert_vendors(vendors: list) -> tuple:
    """Returns (created, updated)."""
    from expo_estimator.database import Base, SessionLocal, engine
    from expo_estimator import models

    Base.metadata.create_all(bind=engine)
    columns = {c.name for c in models.Vendor.__table__.columns} - {"id", "created_at", "updated_at"}

    db = SessionLocal()
    created, updated = 0, 0
    try:
        for row in vendors:
            data = {k: v for k, v in row.items() if k in columns}
            existing = db.query(models.Vendor).filter(
                models.Vendor.name == data["name"],
                models.Vendor.city == data["city"],
            ).first()
            if existing:
                for field, value in data.items():
                    setattr(existing, field, value)
                existing.updated_at = datetime.utcnow()
                updated += 1
            else:
                db.add(models.Vendor(**data))
                created += 1
        db.commit()
    except Exception as e:
        db.rollback()
        print(f"  ERROR loading vendors: {e}")
        raise
    finally:
        db.close()

    return created, updated


def main():
    raw_dir = Path(__file__).parent / "raw"
    vendors = []

    if raw_dir.exists():
        for filepath in sorted(raw_dir.glob("*.json")):
            print(f"Processing {filepath.name}...")
            rows = load_vendor_file(filepath)
            print(f"  {len(rows)} vendors parsed")
            vendors.extend(rows)

    if not vendors:
        from expo_estimator.vendor_directory import DEFAULT_VENDORS
        print("No vendor files found, loading the default directory")
        vendors = list(DEFAULT_VENDORS)

    created, updated = upsert_vendors(vendors)

    print("\n--- Summary ---")
    print(f"Vendors created: {created}")
    print(f"Vendors updated: {updated}")
    print("Done.")


if __name__ == "__main__":
    main()
