"""
Travel search endpoints for the flights, hotel and logistics wizard steps.

POST /api/travel/flights/search
POST /api/travel/hotels/search
POST /api/travel/logistics/search
"""

from fastapi import APIRouter

from .. import schemas
from ..travel_catalog import TravelCatalog

router = APIRouter(prefix="/travel", tags=["travel"])

catalog = TravelCatalog()


@router.post("/flights/search")
def search_flights(request: schemas.FlightSearch):
    flights = catalog.search_flights(request.model_dump())
    return {"flights": flights, "total": len(flights)}


@router.post("/hotels/search")
def search_hotels(request: schemas.HotelSearch):
    criteria = request.model_dump()
    hotels = catalog.search_hotels(criteria)
    return {"state": catalog.resolve_state(criteria), "hotels": hotels, "total": len(hotels)}


@router.post("/logistics/search")
def search_logistics(request: schemas.LogisticsSearch):
    providers = catalog.search_logistics(request.model_dump())
    return {"providers": providers, "total": len(providers)}
