import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..pdf_generator import generate_quote_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def generate_quote_number(db: Session) -> str:
    count = db.query(models.Quote).count()
    year = datetime.utcnow().year
    return f"EXH-{year}-{str(count + 1).zfill(4)}"


def _get_quote(quote_id: int, db: Session) -> models.Quote:
    quote = db.query(models.Quote).filter(models.Quote.id == quote_id).first()
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


def _quote_to_dict(q: models.Quote) -> dict:
    return {
        "id": q.id,
        "quote_number": q.quote_number,
        "status": q.status.value if q.status else "draft",
        "exhibition_name": q.exhibition_name,
        "destination_city": q.destination_city,
        "notes": q.notes,
        "currency": q.currency,
        "total": q.total,
        "valid_days": q.valid_days,
        "session_id": q.session_id,
        "inputs": q.inputs_json,
        "outputs": q.outputs_json,
        "created_at": q.created_at.isoformat() if q.created_at else None,
        "updated_at": q.updated_at.isoformat() if q.updated_at else None,
        "exhibitor": {
            "id": q.exhibitor.id,
            "name": q.exhibitor.name,
            "company": q.exhibitor.company,
            "email": q.exhibitor.email,
            "phone": q.exhibitor.phone,
        } if q.exhibitor else None,
        "exhibitor_id": q.exhibitor_id,
    }


@router.get("/")
def list_quotes(
    skip: int = 0,
    limit: int = 50,
    status: Optional[models.QuoteStatus] = None,
    db: Session = Depends(get_db),
):
    """Newest first. Summary rows only; fetch one quote for inputs/outputs."""
    query = db.query(models.Quote)
    if status is not None:
        query = query.filter(models.Quote.status == status)
    quotes = query.order_by(models.Quote.created_at.desc(), models.Quote.id.desc()).offset(skip).limit(limit).all()
    return [
        {
            "id": q.id,
            "quote_number": q.quote_number,
            "status": q.status.value if q.status else "draft",
            "exhibition_name": q.exhibition_name,
            "destination_city": q.destination_city,
            "total": q.total,
            "currency": q.currency,
            "exhibitor_id": q.exhibitor_id,
            "created_at": q.created_at.isoformat() if q.created_at else None,
        }
        for q in quotes
    ]


@router.get("/{quote_id}")
def get_quote(quote_id: int, db: Session = Depends(get_db)):
    return _quote_to_dict(_get_quote(quote_id, db))


@router.patch("/{quote_id}")
def update_quote(quote_id: int, update: schemas.QuoteUpdate, db: Session = Depends(get_db)):
    """Status, notes, exhibitor and validity only. Amounts are fixed once saved."""
    quote = _get_quote(quote_id, db)
    changes = update.model_dump(exclude_unset=True)
    # status and valid_days are never cleared; an explicit null leaves them as they are
    for field in ("status", "valid_days"):
        if field in changes and changes[field] is None:
            del changes[field]

    exhibitor_id = changes.get("exhibitor_id")
    if exhibitor_id is not None:
        exhibitor = db.query(models.Exhibitor).filter(models.Exhibitor.id == exhibitor_id).first()
        if not exhibitor:
            raise HTTPException(status_code=404, detail="Exhibitor not found")
    if changes.get("valid_days") is not None and changes["valid_days"] < 1:
        raise HTTPException(status_code=400, detail="valid_days must be at least 1")

    for field, value in changes.items():
        setattr(quote, field, value)
    quote.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(quote)
    return _quote_to_dict(quote)


@router.get("/{quote_id}/pdf")
def download_pdf(quote_id: int, db: Session = Depends(get_db)):
    """Returns: application/pdf"""
    quote = _get_quote(quote_id, db)

    if not quote.outputs_json:
        raise HTTPException(status_code=400, detail="Quote has no estimate data")

    exhibitor = None
    if quote.exhibitor:
        exhibitor = {"name": quote.exhibitor.name, "company": quote.exhibitor.company}

    pdf_bytes = generate_quote_pdf(
        quote.outputs_json,
        quote_number=quote.quote_number,
        valid_days=quote.valid_days,
        exhibitor=exhibitor,
    )
    logger.info("Rendered PDF for %s (%d bytes)", quote.quote_number, len(pdf_bytes))

    filename = f"Quotation-{quote.quote_number}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )
