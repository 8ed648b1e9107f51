"""
Vendor directory: search, matching and admin statistics over vendor records.

Works on plain dicts (see vendor_to_dict) so the same logic runs over ORM
rows in the routers and over fixtures in tests.

DEFAULT_VENDORS seeds an empty vendors table on startup.
"""

import logging
from collections import Counter

logger = logging.getLogger(__name__)

DEFAULT_VENDORS = [
    {
        "name": "ExpoTech Solutions",
        "category": "stall_fabrication",
        "city": "Mumbai",
        "state": "Maharashtra",
        "location": "Mumbai, Maharashtra",
        "description": "Premium exhibition booth design and construction",
        "specialties": ["Custom Booths", "Modular Systems", "LED Displays"],
        "services": ["Design", "Fabrication", "On-site installation"],
        "contact": {"phone": "+91-98765-43210", "email": "contact@expotech.com"},
        "rating": 4.8,
        "experience": "12 years",
        "price_range": "Premium",
        "keywords": ["booth", "fabrication", "led"],
    },
    {
        "name": "LogiFast Services",
        "category": "logistics",
        "city": "Delhi",
        "state": "Delhi",
        "location": "Delhi, NCR",
        "description": "Complete logistics and transportation solutions",
        "specialties": ["Freight Forwarding", "Warehousing", "Last Mile Delivery"],
        "services": ["Venue delivery", "Return logistics"],
        "contact": {"phone": "+91-98765-43211", "email": "info@logifast.com"},
        "rating": 4.6,
        "experience": "8 years",
        "price_range": "Standard",
        "keywords": ["freight", "shipping", "transport"],
    },
    {
        "name": "PrintCraft Media",
        "category": "printing_branding",
        "city": "Bangalore",
        "state": "Karnataka",
        "location": "Bangalore, Karnataka",
        "description": "Large-format printing, backlit panels and vinyl graphics",
        "specialties": ["Flex Prints", "Backlit Panels", "Vinyl Graphics"],
        "services": ["Printing", "Installation"],
        "contact": {"phone": "+91-98765-43212", "email": "orders@printcraft.in"},
        "rating": 4.5,
        "experience": "6 years",
        "price_range": "Budget",
        "keywords": ["printing", "branding", "graphics"],
    },
    {
        "name": "SoundStage AV",
        "category": "av_equipment",
        "city": "Mumbai",
        "state": "Maharashtra",
        "location": "Goregaon, Mumbai",
        "description": "LED walls, displays and sound systems on rent",
        "specialties": ["LED Walls", "Digital Displays", "Sound Systems"],
        "services": ["Rental", "Technician on site"],
        "contact": {"phone": "+91-98765-43213", "email": "rentals@soundstage.in"},
        "rating": 4.4,
        "experience": "10 years",
        "price_range": "Standard",
        "keywords": ["av", "led wall", "display"],
    },
    {
        "name": "Comfort Rentals",
        "category": "furniture_rental",
        "city": "Delhi",
        "state": "Delhi",
        "location": "Okhla, New Delhi",
        "description": "Exhibition furniture rental, counters and display shelving",
        "specialties": ["Reception Counters", "Display Shelves", "Lounge Seating"],
        "services": ["Rental", "Delivery and pickup"],
        "contact": {"phone": "+91-98765-43214", "email": "hello@comfortrentals.in"},
        "rating": 4.2,
        "experience": "5 years",
        "price_range": "Budget",
        "keywords": ["furniture", "rental", "counter"],
    },
]

# Booth area (sqm) bands and the price range that suits them
SMALL_BOOTH_SQM = 18
LARGE_BOOTH_SQM = 54

MATCH_BASE_SCORE = 60


def vendor_to_dict(v) -> dict:
    return {
        "id": v.id,
        "name": v.name,
        "category": v.category,
        "location": v.location,
        "city": v.city,
        "state": v.state,
        "description": v.description,
        "specialties": list(v.specialties or []),
        "services": list(v.services or []),
        "contact": dict(v.contact or {}),
        "rating": v.rating,
        "experience": v.experience,
        "price_range": v.price_range,
        "keywords": list(v.keywords or []),
        "logo_url": v.logo_url,
        "is_active": bool(v.is_active),
        "created_at": v.created_at.isoformat() if v.created_at else None,
        "updated_at": v.updated_at.isoformat() if v.updated_at else None,
    }


def _contains(haystack, needle: str) -> bool:
    return bool(haystack) and needle in str(haystack).lower()


def search_vendors(vendors: list, query: str = None, location: str = None,
                   category: str = None) -> list:
    """
    Case-insensitive substring filters over active vendors. Each filter is
    optional; all given filters must match.

    query matches name, description, specialties or keywords.
    location matches location or city. category matches category.
    """
    results = [v for v in vendors if v.get("is_active", True)]

    if query:
        q = query.strip().lower()
        results = [
            v for v in results
            if _contains(v.get("name"), q)
            or _contains(v.get("description"), q)
            or any(_contains(s, q) for s in v.get("specialties") or [])
            or any(_contains(k, q) for k in v.get("keywords") or [])
        ]

    if location:
        loc = location.strip().lower()
        results = [v for v in results if _contains(v.get("location"), loc) or _contains(v.get("city"), loc)]

    if category:
        cat = category.strip().lower()
        results = [v for v in results if _contains(v.get("category"), cat)]

    return results


def suited_price_range(booth_sqm: float) -> str:
    if booth_sqm <= SMALL_BOOTH_SQM:
        return "Budget"
    if booth_sqm >= LARGE_BOOTH_SQM:
        return "Premium"
    return "Standard"


def match_score(vendor: dict, destination_city: str, booth_sqm: float) -> int:
    """
    0-100 fit of a vendor for an exhibition. Same inputs, same score.

    60 base, +20 for the venue city (+10 for the city appearing in the
    vendor's location), up to +10 for rating, +10 when the vendor's price
    range suits the booth size.
    """
    score = MATCH_BASE_SCORE
    city = (destination_city or "").strip().lower()
    if city:
        if (vendor.get("city") or "").strip().lower() == city:
            score += 20
        elif _contains(vendor.get("location"), city):
            score += 10

    rating = vendor.get("rating") or 0.0
    score += round(min(max(rating, 0.0), 5.0) * 2)

    if (vendor.get("price_range") or "").lower() == suited_price_range(booth_sqm).lower():
        score += 10

    return min(score, 100)


def match_vendors(vendors: list, destination_city: str, booth_sqm: float,
                  category: str = None, limit: int = None) -> list:
    """Active vendors with a match_score, best first. Ties break on rating, then name."""
    candidates = search_vendors(vendors, category=category)
    scored = [
        {**v, "match_score": match_score(v, destination_city, booth_sqm)}
        for v in candidates
    ]
    scored.sort(key=lambda v: (-v["match_score"], -(v.get("rating") or 0.0), v.get("name") or ""))
    if limit:
        scored = scored[:limit]
    logger.debug("Matched %d vendors for %s / %.1f sqm", len(scored), destination_city, booth_sqm)
    return scored


def vendor_stats(vendors: list) -> dict:
    """Admin dashboard numbers over all vendors (active or not)."""
    rated = [v["rating"] for v in vendors if v.get("rating") is not None]
    top = sorted(
        (v for v in vendors if v.get("rating") is not None),
        key=lambda v: (-v["rating"], v.get("name") or ""),
    )[:5]
    return {
        "total": len(vendors),
        "active": sum(1 for v in vendors if v.get("is_active", True)),
        "by_category": dict(Counter(v.get("category") or "unknown" for v in vendors)),
        "by_state": dict(Counter(v.get("state") or "unknown" for v in vendors)),
        "by_price_range": dict(Counter(v.get("price_range") or "Standard" for v in vendors)),
        "average_rating": round(sum(rated) / len(rated), 2) if rated else None,
        "top_rated": [{"id": v.get("id"), "name": v.get("name"), "rating": v["rating"]} for v in top],
    }
