from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/exhibitors", tags=["exhibitors"])

@router.post("/", response_model=schemas.Exhibitor)
def create_exhibitor(exhibitor: schemas.ExhibitorCreate, db: Session = Depends(get_db)):
    db_exhibitor = models.Exhibitor(**exhibitor.model_dump())
    db.add(db_exhibitor)
    db.commit()
    db.refresh(db_exhibitor)
    return db_exhibitor

@router.get("/", response_model=List[schemas.Exhibitor])
def list_exhibitors(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return db.query(models.Exhibitor).order_by(models.Exhibitor.name).offset(skip).limit(limit).all()

@router.get("/{exhibitor_id}", response_model=schemas.Exhibitor)
def get_exhibitor(exhibitor_id: int, db: Session = Depends(get_db)):
    exhibitor = db.query(models.Exhibitor).filter(models.Exhibitor.id == exhibitor_id).first()
    if not exhibitor:
        raise HTTPException(status_code=404, detail="Exhibitor not found")
    return exhibitor

@router.patch("/{exhibitor_id}", response_model=schemas.Exhibitor)
def update_exhibitor(exhibitor_id: int, update: schemas.ExhibitorUpdate, db: Session = Depends(get_db)):
    exhibitor = db.query(models.Exhibitor).filter(models.Exhibitor.id == exhibitor_id).first()
    if not exhibitor:
        raise HTTPException(status_code=404, detail="Exhibitor not found")
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(exhibitor, field, value)
    db.commit()
    db.refresh(exhibitor)
    return exhibitor
