"""
Estimate wizard API — server-held form state, one session per run.

POST  /api/wizard/start          — New session with default selections
GET   /api/wizard/{id}           — Current state + estimate
PATCH /api/wizard/{id}/event     — Exhibition, cities, dates, team size
PATCH /api/wizard/{id}/stall     — Any subset of stall design fields
POST  /api/wizard/{id}/flights   — Chosen outbound/return flights
POST  /api/wizard/{id}/hotel     — Chosen hotel
POST  /api/wizard/{id}/vendors   — Chosen vendor ids
PATCH /api/wizard/{id}/costs     — Override marketing/logistics amounts
POST  /api/wizard/{id}/reset     — Back to defaults
POST  /api/wizard/{id}/quote     — Save the current estimate as a Quote

Every mutation rebuilds a FormStateController from the stored state, applies
the change (which recomputes the estimate), and writes both back.
"""

import uuid
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from .. import models, schemas
from ..config import settings
from ..database import get_db
from ..form_state import FormStateController
from ..models import WizardStep
from ..vendor_directory import vendor_to_dict
from .quotes import _quote_to_dict, generate_quote_number

router = APIRouter(prefix="/wizard", tags=["wizard"])

# Vendor fields carried into the estimate and the PDF
VENDOR_SUMMARY_FIELDS = ("id", "name", "category", "city", "state", "rating", "price_range", "contact")


def _get_session(session_id: str, db: Session) -> models.WizardSession:
    session = db.query(models.WizardSession).filter(
        models.WizardSession.id == session_id,
    ).first()
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _require_active(session: models.WizardSession):
    if session.status != "active":
        raise HTTPException(status_code=400, detail=f"Session is {session.status}, not active")


def _controller(session: models.WizardSession) -> FormStateController:
    return FormStateController.from_state(session.state_json)


def _save(session: models.WizardSession, controller: FormStateController,
          step: WizardStep, db: Session) -> dict:
    session.state_json = controller.to_state()
    session.estimate_json = controller.estimate
    session.step = step.value
    session.updated_at = datetime.utcnow()
    flag_modified(session, "state_json")
    flag_modified(session, "estimate_json")
    db.commit()
    db.refresh(session)
    return _session_to_dict(session)


def _session_to_dict(session: models.WizardSession) -> dict:
    return {
        "session_id": session.id,
        "step": session.step,
        "status": session.status,
        "state": session.state_json,
        "estimate": session.estimate_json,
        "created_at": session.created_at.isoformat() if session.created_at else None,
        "updated_at": session.updated_at.isoformat() if session.updated_at else None,
    }


@router.post("/start")
def start_wizard(db: Session = Depends(get_db)):
    controller = FormStateController()
    session = models.WizardSession(
        id=str(uuid.uuid4()),
        step=WizardStep.EVENT.value,
        state_json=controller.to_state(),
        estimate_json=controller.estimate,
        status="active",
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return _session_to_dict(session)


@router.get("/{session_id}")
def get_wizard(session_id: str, db: Session = Depends(get_db)):
    return _session_to_dict(_get_session(session_id, db))


@router.patch("/{session_id}/event")
def update_event(session_id: str, request: schemas.EventDetails, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    _require_active(session)
    controller = _controller(session)
    controller.update_event(**request.model_dump(exclude_unset=True))
    return _save(session, controller, WizardStep.EVENT, db)


@router.patch("/{session_id}/stall")
def update_stall(session_id: str, fields: Dict[str, Any], db: Session = Depends(get_db)):
    """Loose field payload, snake_case or camelCase. Unknown keys are ignored."""
    session = _get_session(session_id, db)
    _require_active(session)
    controller = _controller(session)
    controller.update_stall(**fields)
    return _save(session, controller, WizardStep.STALL_DESIGN, db)


@router.post("/{session_id}/flights")
def select_flights(session_id: str, request: schemas.FlightSelection, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    _require_active(session)
    controller = _controller(session)
    controller.select_flights(request.outbound, request.return_flight)
    return _save(session, controller, WizardStep.FLIGHTS, db)


@router.post("/{session_id}/hotel")
def select_hotel(session_id: str, request: schemas.HotelSelection, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    _require_active(session)
    controller = _controller(session)
    controller.select_hotel(request.hotel)
    return _save(session, controller, WizardStep.HOTEL, db)


@router.post("/{session_id}/vendors")
def select_vendors(session_id: str, request: schemas.VendorSelection, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    _require_active(session)

    vendors = []
    if request.vendor_ids:
        rows = db.query(models.Vendor).filter(models.Vendor.id.in_(request.vendor_ids)).all()
        found = {v.id for v in rows}
        missing = [vid for vid in request.vendor_ids if vid not in found]
        if missing:
            raise HTTPException(status_code=404, detail=f"Vendor(s) not found: {missing}")
        by_id = {v.id: vendor_to_dict(v) for v in rows}
        # Keep the order the user picked them in
        vendors = [
            {k: by_id[vid][k] for k in VENDOR_SUMMARY_FIELDS}
            for vid in dict.fromkeys(request.vendor_ids)
        ]

    controller = _controller(session)
    controller.select_vendors(vendors)
    return _save(session, controller, WizardStep.VENDORS, db)


@router.patch("/{session_id}/costs")
def set_fixed_costs(session_id: str, request: schemas.FixedCosts, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    _require_active(session)
    controller = _controller(session)
    controller.set_fixed_costs(request.marketing_cost, request.logistics_cost)
    return _save(session, controller, WizardStep.SUMMARY, db)


@router.post("/{session_id}/reset")
def reset_wizard(session_id: str, db: Session = Depends(get_db)):
    session = _get_session(session_id, db)
    controller = _controller(session)
    controller.reset()
    session.status = "active"
    return _save(session, controller, WizardStep.EVENT, db)


@router.post("/{session_id}/quote", status_code=201)
def save_quote(session_id: str, request: schemas.SaveQuoteRequest, db: Session = Depends(get_db)):
    """Snapshot the current state and estimate into a Quote. Marks the session complete."""
    session = _get_session(session_id, db)
    _require_active(session)

    if request.exhibitor_id is not None:
        exhibitor = db.query(models.Exhibitor).filter(
            models.Exhibitor.id == request.exhibitor_id,
        ).first()
        if not exhibitor:
            raise HTTPException(status_code=404, detail="Exhibitor not found")

    # Recompute rather than trusting the stored estimate
    controller = _controller(session)
    estimate = controller.estimate
    event = controller.event

    quote = models.Quote(
        quote_number=generate_quote_number(db),
        exhibitor_id=request.exhibitor_id,
        session_id=session.id,
        exhibition_name=event.exhibition_name or None,
        destination_city=event.destination_city or None,
        notes=request.notes,
        currency=settings.CURRENCY,
        total=estimate["total"],
        valid_days=settings.QUOTE_VALID_DAYS,
        inputs_json=controller.to_state(),
        outputs_json=estimate,
    )
    db.add(quote)

    session.status = "complete"
    session.step = WizardStep.SUMMARY.value
    session.estimate_json = estimate
    flag_modified(session, "estimate_json")
    db.commit()
    db.refresh(quote)

    return _quote_to_dict(quote)
