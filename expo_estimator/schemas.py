from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from .models import QuoteStatus

class ExhibitorBase(BaseModel):
    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    notes: Optional[str] = None

class ExhibitorCreate(ExhibitorBase):
    pass

class ExhibitorUpdate(BaseModel):
    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    notes: Optional[str] = None

class Exhibitor(ExhibitorBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True

class VendorBase(BaseModel):
    name: str
    category: str
    city: str
    state: str
    location: Optional[str] = None
    description: Optional[str] = None
    specialties: List[str] = []
    services: List[str] = []
    contact: Dict[str, Any] = {}
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    experience: Optional[str] = None
    price_range: str = "Standard"
    keywords: List[str] = []
    logo_url: Optional[str] = None
    is_active: bool = True

class VendorCreate(VendorBase):
    pass

class VendorUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    specialties: Optional[List[str]] = None
    services: Optional[List[str]] = None
    contact: Optional[Dict[str, Any]] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    experience: Optional[str] = None
    price_range: Optional[str] = None
    keywords: Optional[List[str]] = None
    logo_url: Optional[str] = None
    is_active: Optional[bool] = None

class Vendor(VendorBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class VendorSearch(BaseModel):
    query: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None

class VendorImport(BaseModel):
    vendors: List[VendorCreate]
    replace: bool = False  # deactivate everything not in this batch

# --- Estimates ---

class EventDetails(BaseModel):
    exhibition_name: Optional[str] = None
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    team_size: Optional[int] = None
    nights: Optional[int] = None

class EstimateRequest(BaseModel):
    """
    Stateless estimate. `stall` is the loose form payload: snake_case or
    camelCase keys, unknown options are accepted and price at zero.
    """
    stall: Dict[str, Any] = {}
    event: Optional[EventDetails] = None
    flight_cost: float = Field(default=0.0, ge=0)
    hotel_cost: float = Field(default=0.0, ge=0)
    marketing_cost: Optional[float] = Field(default=None, ge=0)
    logistics_cost: Optional[float] = Field(default=None, ge=0)

# --- Wizard ---

class FlightSelection(BaseModel):
    outbound: Optional[Dict[str, Any]] = None
    return_flight: Optional[Dict[str, Any]] = None

class HotelSelection(BaseModel):
    hotel: Optional[Dict[str, Any]] = None

class VendorSelection(BaseModel):
    vendor_ids: List[int] = []

class FixedCosts(BaseModel):
    marketing_cost: Optional[float] = Field(default=None, ge=0)
    logistics_cost: Optional[float] = Field(default=None, ge=0)

class SaveQuoteRequest(BaseModel):
    exhibitor_id: Optional[int] = None
    notes: Optional[str] = None

# --- Travel ---

class FlightSearch(BaseModel):
    origin_city: str
    destination_city: str
    departure_date: Optional[str] = None
    passengers: int = Field(default=1, ge=1)
    travel_class: str = "economy"

class HotelSearch(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    check_in: Optional[str] = None
    nights: int = Field(default=3, ge=1)
    rooms: int = Field(default=1, ge=1)
    min_rating: Optional[int] = None

class LogisticsSearch(BaseModel):
    origin_city: Optional[str] = None
    destination_city: Optional[str] = None
    require_insurance: bool = False

# --- Quotes ---

class QuoteUpdate(BaseModel):
    status: Optional[QuoteStatus] = None
    notes: Optional[str] = None
    exhibitor_id: Optional[int] = None
    valid_days: Optional[int] = None

class Quote(BaseModel):
    id: int
    quote_number: str
    exhibitor_id: Optional[int] = None
    session_id: Optional[str] = None
    exhibition_name: Optional[str] = None
    destination_city: Optional[str] = None
    status: QuoteStatus
    notes: Optional[str] = None
    currency: str
    total: float
    valid_days: int
    inputs_json: Optional[Dict[str, Any]] = None
    outputs_json: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    exhibitor: Optional[Exhibitor] = None
    class Config:
        from_attributes = True

# --- Auth ---

class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=8)
    full_name: Optional[str] = None

class LoginRequest(BaseModel):
    email: str
    password: str
