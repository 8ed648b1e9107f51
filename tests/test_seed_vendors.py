"""
Vendor seed script tests — JSON parsing and upsert by (name, city).
"""

import json
import sys
from pathlib import Path

from expo_estimator import models
from expo_estimator.vendor_directory import DEFAULT_VENDORS

sys.path.insert(0, str(Path(__file__).parent.parent / "data"))
from seed_vendors import load_vendor_file, upsert_vendors  # noqa: E402


def test_load_accepts_export_shape_and_skips_incomplete_rows(tmp_path):
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps({"vendors": [
        {"name": "Stagecraft Events", "category": "stall_fabrication", "city": "Pune", "state": "Maharashtra"},
        {"name": "No City Co", "category": "logistics", "state": "Delhi"},
    ]}))
    rows = load_vendor_file(path)
    assert [r["name"] for r in rows] == ["Stagecraft Events"]


def test_load_accepts_plain_list(tmp_path):
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps(DEFAULT_VENDORS[:2]))
    assert len(load_vendor_file(path)) == 2


def test_upsert_inserts_then_updates(db):
    assert upsert_vendors(DEFAULT_VENDORS) == (len(DEFAULT_VENDORS), 0)

    changed = [{**DEFAULT_VENDORS[0], "rating": 4.0, "unknown_column": "ignored"}]
    assert upsert_vendors(changed) == (0, 1)

    vendor = db.query(models.Vendor).filter(models.Vendor.name == DEFAULT_VENDORS[0]["name"]).one()
    assert vendor.rating == 4.0
    assert db.query(models.Vendor).count() == len(DEFAULT_VENDORS)
