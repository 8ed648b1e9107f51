"""
Travel & logistics catalog: priced options for the flights, hotel and
logistics steps of the wizard.

Static catalog with representative 2024 market fares. Deterministic: the same
criteria always return the same options in the same order. A live fare API
can replace TravelCatalog without touching the estimate code, which only
consumes the chosen option's price.
"""

import logging

logger = logging.getLogger(__name__)

# Domestic India fares per passenger, one way, for a ~2.5h sector
DOMESTIC_FLIGHTS = [
    {"id": "6E-201", "airline": "IndiGo", "departure": "06:00", "arrival": "08:30",
     "duration": "2h 30m", "price": 4200, "stops": 0, "travel_class": "economy"},
    {"id": "AI-803", "airline": "Air India", "departure": "10:15", "arrival": "12:45",
     "duration": "2h 30m", "price": 4800, "stops": 0, "travel_class": "economy"},
    {"id": "SG-117", "airline": "SpiceJet", "departure": "14:30", "arrival": "17:00",
     "duration": "2h 30m", "price": 3600, "stops": 0, "travel_class": "economy"},
    {"id": "UK-955", "airline": "Vistara", "departure": "11:30", "arrival": "14:00",
     "duration": "2h 30m", "price": 5500, "stops": 0, "travel_class": "economy"},
    {"id": "6E-5312", "airline": "IndiGo", "departure": "07:45", "arrival": "10:15",
     "duration": "2h 30m", "price": 14500, "stops": 0, "travel_class": "business"},
    {"id": "UK-963", "airline": "Vistara", "departure": "16:20", "arrival": "18:50",
     "duration": "2h 30m", "price": 18000, "stops": 0, "travel_class": "business"},
    {"id": "AI-865", "airline": "Air India", "departure": "09:10", "arrival": "11:40",
     "duration": "2h 30m", "price": 16500, "stops": 0, "travel_class": "business"},
]

# Keyed by ISO 3166-2 state code of the exhibition venue
HOTELS_BY_STATE = {
    "IN-DL": [
        {"id": "dl-itc-maurya", "name": "ITC Maurya", "rating": 5,
         "location": "Diplomatic Enclave, Near Pragati Maidan", "price_per_night": 18000,
         "amenities": ["Business Center", "Exhibition Services", "Luxury Spa"],
         "distance_to_venue": "3.5 km from Pragati Maidan"},
        {"id": "dl-leela-palace", "name": "The Leela Palace", "rating": 5,
         "location": "Chanakyapuri", "price_per_night": 18000,
         "amenities": ["Luxury Suites", "Concierge", "Business Facilities"],
         "distance_to_venue": "8 km from ITPO"},
        {"id": "dl-treebo-capitol", "name": "Treebo Trend Capitol", "rating": 3,
         "location": "Karol Bagh", "price_per_night": 3200,
         "amenities": ["Basic Business Center", "WiFi", "Room Service"],
         "distance_to_venue": "12 km from Pragati Maidan"},
        {"id": "dl-taj-palace", "name": "Taj Palace", "rating": 5,
         "location": "Diplomatic Enclave", "price_per_night": 22000,
         "amenities": ["Exhibition Planning", "24/7 Business Center"],
         "distance_to_venue": "6 km from ITPO"},
    ],
    "IN-MH": [
        {"id": "mh-itc-grand-central", "name": "ITC Grand Central", "rating": 5,
         "location": "Parel, Near BEC", "price_per_night": 12000,
         "amenities": ["Exhibition Services", "Business Center", "Airport Transfer"],
         "distance_to_venue": "3 km from Bombay Exhibition Centre"},
        {"id": "mh-leela-mumbai", "name": "The Leela Mumbai", "rating": 5,
         "location": "Andheri East", "price_per_night": 14000,
         "amenities": ["Luxury Business Facilities", "Exhibition Support", "Spa"],
         "distance_to_venue": "5 km from BEC"},
        {"id": "mh-treebo-abhiraj", "name": "Treebo Trend Abhiraj", "rating": 3,
         "location": "Goregaon", "price_per_night": 2800,
         "amenities": ["Basic WiFi", "Room Service", "Business Corner"],
         "distance_to_venue": "8 km from BEC"},
        {"id": "mh-jw-sahar", "name": "JW Marriott Mumbai Sahar", "rating": 5,
         "location": "Andheri East", "price_per_night": 16000,
         "amenities": ["Executive Floors", "Conference Facilities"],
         "distance_to_venue": "4 km from BEC"},
    ],
    "IN-KA": [
        {"id": "ka-itc-gardenia", "name": "ITC Gardenia", "rating": 5,
         "location": "Residency Road", "price_per_night": 10000,
         "amenities": ["Business Center", "Exhibition Services", "Tech Support"],
         "distance_to_venue": "5 km from BIEC"},
        {"id": "ka-leela-palace", "name": "The Leela Palace Bangalore", "rating": 5,
         "location": "HAL Airport Road", "price_per_night": 12000,
         "amenities": ["Luxury Facilities", "Business Services", "Airport Proximity"],
         "distance_to_venue": "8 km from BIEC"},
        {"id": "ka-treebo-bliss", "name": "Treebo Trend Bliss", "rating": 3,
         "location": "Electronic City", "price_per_night": 2500,
         "amenities": ["WiFi", "Basic Business Facilities"],
         "distance_to_venue": "12 km from BIEC"},
    ],
}

DEFAULT_HOTEL_STATE = "IN-DL"

CITY_TO_STATE = {
    "delhi": "IN-DL",
    "new delhi": "IN-DL",
    "mumbai": "IN-MH",
    "pune": "IN-MH",
    "bangalore": "IN-KA",
    "bengaluru": "IN-KA",
}

LOGISTICS_PROVIDERS = [
    {"id": "bluedart", "provider": "Blue Dart Express", "service": "Exhibition Freight & Setup",
     "price": 45000, "delivery_time": "2-3 days", "tracking": True, "insurance": True,
     "includes": ["Door-to-door pickup", "Setup assistance", "Insurance"]},
    {"id": "allcargo", "provider": "All Cargo Logistics", "service": "Trade Show Shipping",
     "price": 42000, "delivery_time": "2-3 days", "tracking": True, "insurance": True,
     "includes": ["Specialized exhibition transport", "Venue delivery", "Return logistics"]},
    {"id": "gati", "provider": "Gati KWE", "service": "Exhibition Logistics",
     "price": 38000, "delivery_time": "3-4 days", "tracking": True, "insurance": False,
     "includes": ["Freight transport", "Storage facilities", "Basic setup support"]},
    {"id": "vrl", "provider": "VRL Logistics", "service": "Exhibition Material Transport",
     "price": 18000, "delivery_time": "4-5 days", "tracking": False, "insurance": False,
     "includes": ["Road transport", "Basic handling", "Delivery confirmation"]},
]


class TravelCatalog:
    """
    Search the static catalog by criteria.

    Every result carries a total_price for the whole party, which is what
    the form state feeds into the estimate.
    """

    GROUP_DISCOUNT_SIZE = 5       # passengers
    GROUP_DISCOUNT = 0.10         # 10% off fares for 5+ travellers

    def search_flights(self, criteria: dict) -> list:
        """
        criteria: origin_city, destination_city, departure_date, passengers,
                  travel_class ('economy' | 'business', default economy)
        """
        passengers = max(int(criteria.get("passengers") or 1), 1)
        travel_class = str(criteria.get("travel_class") or "economy").lower()

        fares = [f for f in DOMESTIC_FLIGHTS if f["travel_class"] == travel_class]
        if not fares:
            logger.info("No %s fares in catalog, falling back to economy", travel_class)
            fares = [f for f in DOMESTIC_FLIGHTS if f["travel_class"] == "economy"]

        discount = self.GROUP_DISCOUNT if passengers >= self.GROUP_DISCOUNT_SIZE else 0.0
        results = []
        for fare in fares:
            price = round(fare["price"] * (1 - discount))
            results.append({
                **fare,
                "origin_city": criteria.get("origin_city", ""),
                "destination_city": criteria.get("destination_city", ""),
                "departure_date": criteria.get("departure_date", ""),
                "price": price,
                "passengers": passengers,
                "total_price": price * passengers,
            })
        return sorted(results, key=lambda f: f["price"])

    def resolve_state(self, criteria: dict) -> str:
        """State code from an explicit state or a known city. Defaults to Delhi."""
        state = str(criteria.get("state") or "").upper()
        if state in HOTELS_BY_STATE:
            return state
        city = str(criteria.get("city") or "").strip().lower()
        return CITY_TO_STATE.get(city, DEFAULT_HOTEL_STATE)

    def search_hotels(self, criteria: dict) -> list:
        """
        criteria: city or state, nights (default 3), rooms (default 1),
                  min_rating (optional)
        """
        nights = max(int(criteria.get("nights") or 3), 1)
        rooms = max(int(criteria.get("rooms") or 1), 1)
        min_rating = criteria.get("min_rating") or 0

        state = self.resolve_state(criteria)
        results = []
        for hotel in HOTELS_BY_STATE[state]:
            if hotel["rating"] < min_rating:
                continue
            results.append({
                **hotel,
                "state": state,
                "nights": nights,
                "rooms": rooms,
                "total_price": hotel["price_per_night"] * nights * rooms,
            })
        return sorted(results, key=lambda h: h["price_per_night"])

    def search_logistics(self, criteria: dict) -> list:
        """
        criteria: origin_city, destination_city, require_insurance (optional)
        """
        require_insurance = bool(criteria.get("require_insurance"))
        return [
            {**p, "origin_city": criteria.get("origin_city", ""),
             "destination_city": criteria.get("destination_city", "")}
            for p in sorted(LOGISTICS_PROVIDERS, key=lambda p: p["price"])
            if p["insurance"] or not require_insurance
        ]
