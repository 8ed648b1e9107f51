"""
Vendor endpoints.

Public (wizard vendor step):
POST /api/vendors/search — substring filters over active vendors
GET  /api/vendors/match  — vendors ranked for a destination city + booth size

Admin (Bearer JWT):
GET/POST   /api/admin/vendors
PUT/DELETE /api/admin/vendors/{id}
POST       /api/admin/vendors/import
GET        /api/admin/vendors/export
GET        /api/admin/vendors/stats
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_admin
from ..database import get_db
from ..vendor_directory import match_vendors, search_vendors, vendor_stats, vendor_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendors", tags=["vendors"])
admin_router = APIRouter(
    prefix="/admin/vendors",
    tags=["admin"],
    dependencies=[Depends(get_current_admin)],
)


def _all_vendors(db: Session, active_only: bool = False) -> list:
    query = db.query(models.Vendor)
    if active_only:
        query = query.filter(models.Vendor.is_active == True)  # noqa: E712
    return [vendor_to_dict(v) for v in query.order_by(models.Vendor.name).all()]


def _get_vendor(vendor_id: int, db: Session) -> models.Vendor:
    vendor = db.query(models.Vendor).filter(models.Vendor.id == vendor_id).first()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


# --- Public ---

@router.post("/search")
def search(request: schemas.VendorSearch, db: Session = Depends(get_db)):
    vendors = search_vendors(
        _all_vendors(db, active_only=True),
        query=request.query,
        location=request.location,
        category=request.category,
    )
    return {
        "vendors": vendors,
        "total": len(vendors),
        "search_params": request.model_dump(),
    }


@router.get("/match")
def match(
    destination_city: Optional[str] = None,
    booth_size: Optional[float] = None,
    category: Optional[str] = None,
    limit: int = 10,
    db: Session = Depends(get_db),
):
    """booth_size in sqm."""
    if not destination_city or booth_size is None:
        return {
            "vendors": [],
            "total": 0,
            "message": "Provide destination_city and booth_size",
        }
    vendors = match_vendors(
        _all_vendors(db, active_only=True),
        destination_city=destination_city,
        booth_sqm=max(booth_size, 0.0),
        category=category,
        limit=limit,
    )
    return {"vendors": vendors, "total": len(vendors)}


# --- Admin ---

@admin_router.get("/")
def list_vendors(db: Session = Depends(get_db)):
    return _all_vendors(db)


@admin_router.post("/", status_code=201)
def create_vendor(vendor: schemas.VendorCreate, db: Session = Depends(get_db)):
    db_vendor = models.Vendor(**vendor.model_dump())
    db.add(db_vendor)
    db.commit()
    db.refresh(db_vendor)
    return vendor_to_dict(db_vendor)


@admin_router.put("/{vendor_id}")
def update_vendor(vendor_id: int, update: schemas.VendorUpdate, db: Session = Depends(get_db)):
    vendor = _get_vendor(vendor_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(vendor, field, value)
    vendor.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(vendor)
    return vendor_to_dict(vendor)


@admin_router.delete("/{vendor_id}")
def delete_vendor(vendor_id: int, db: Session = Depends(get_db)):
    vendor = _get_vendor(vendor_id, db)
    db.delete(vendor)
    db.commit()
    return {"ok": True}


@admin_router.post("/import")
def import_vendors(request: schemas.VendorImport, db: Session = Depends(get_db)):
    """
    Upsert by (name, city). With replace=True every vendor not in the batch
    is deactivated, not deleted.
    """
    created, updated = 0, 0
    seen_ids = set()
    for item in request.vendors:
        data = item.model_dump()
        existing = db.query(models.Vendor).filter(
            models.Vendor.name == item.name,
            models.Vendor.city == item.city,
        ).first()
        if existing:
            for field, value in data.items():
                setattr(existing, field, value)
            existing.updated_at = datetime.utcnow()
            updated += 1
            seen_ids.add(existing.id)
        else:
            vendor = models.Vendor(**data)
            db.add(vendor)
            db.flush()
            created += 1
            seen_ids.add(vendor.id)

    deactivated = 0
    if request.replace:
        for vendor in db.query(models.Vendor).filter(models.Vendor.id.notin_(seen_ids)).all():
            if vendor.is_active:
                vendor.is_active = False
                deactivated += 1

    db.commit()
    logger.info("Vendor import: %d created, %d updated, %d deactivated", created, updated, deactivated)
    return {"created": created, "updated": updated, "deactivated": deactivated}


@admin_router.get("/export")
def export_vendors(db: Session = Depends(get_db)):
    """Same shape the import endpoint accepts."""
    exported = []
    for v in _all_vendors(db):
        exported.append({k: v[k] for k in schemas.VendorCreate.model_fields})
    return {"vendors": exported, "exported_at": datetime.utcnow().isoformat()}


@admin_router.get("/stats")
def stats(db: Session = Depends(get_db)):
    return vendor_stats(_all_vendors(db))
