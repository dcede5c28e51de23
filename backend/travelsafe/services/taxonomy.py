# backend/travelsafe/services/taxonomy.py
"""
Static reference tables for the incident generator and the map.

Countries -> cities / local scam names / baseline safety rating,
city -> approximate centroid, scam name -> canonical category,
category -> description pool. Loaded once, never mutated.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple

DEFAULT_CATEGORY = "Other"
DEFAULT_ARCHETYPE = "Tourist Trap"
DEFAULT_VERIFICATION_PROBABILITY = 0.5


class CountryEntry(NamedTuple):
    country: str
    cities: Tuple[str, ...]
    common_scams: Tuple[str, ...]
    safety_level: str


def _entry(country: str, cities: List[str], scams: List[str], level: str) -> CountryEntry:
    return CountryEntry(country, tuple(cities), tuple(scams), level)


_COUNTRIES: Tuple[CountryEntry, ...] = (
    _entry("France", ["Paris", "Nice", "Marseille", "Lyon", "Bordeaux"],
           ["Petition Scam", "Friendship Bracelet", "Taxi Overcharging", "Pickpocketing"], "High"),
    _entry("Italy", ["Rome", "Venice", "Milan", "Florence", "Naples"],
           ["Rose Gift Scam", "Fake Police", "Taxi Scam", "Pickpocketing"], "Medium"),
    _entry("Spain", ["Barcelona", "Madrid", "Seville", "Valencia", "Málaga"],
           ["Bird Poop Scam", "The Flamenco Scam", "Fake Hotel Reception", "Mustard Scam"], "Medium"),
    _entry("United Kingdom", ["London", "Manchester", "Edinburgh", "Liverpool", "Glasgow"],
           ["Charity Clipboard Scam", "Fake Accommodation", "Three Card Monte", "ATM Fraud"], "High"),
    _entry("Germany", ["Berlin", "Munich", "Hamburg", "Frankfurt", "Cologne"],
           ["Fake Police", "Apartment Rental Scam", "Card Game Scam", "Pickpocketing"], "Very High"),
    _entry("United States", ["New York", "Los Angeles", "Chicago", "Miami", "Las Vegas"],
           ["Three Card Monte", "Broken Camera Scam", "Taxi Overcharging", "Vacation Rental Scam"], "Medium"),
    _entry("Thailand", ["Bangkok", "Phuket", "Chiang Mai", "Pattaya", "Krabi"],
           ["Tuk Tuk Scam", "Gem Scam", "Rented Motorbike Scam", "Tiger Temple Scam"], "Medium"),
    _entry("China", ["Beijing", "Shanghai", "Guangzhou", "Shenzhen", "Xi'an"],
           ["Tea House Scam", "Art Student Scam", "Black Taxi Scam", "Counterfeit Currency"], "Medium"),
    _entry("Japan", ["Tokyo", "Osaka", "Kyoto", "Yokohama", "Sapporo"],
           ["Bar Scam", "Fake Accommodation", "Restaurant Overcharging", "Fake Monk"], "Very High"),
    _entry("India", ["New Delhi", "Mumbai", "Jaipur", "Agra", "Kolkata"],
           ["Fake Tourist Office", "Taxi Meter Scam", "Fake Guide Scam", "Gem Scam"], "Low"),
    _entry("Brazil", ["Rio de Janeiro", "São Paulo", "Salvador", "Brasília", "Fortaleza"],
           ["Fake Taxi", "Distraction Theft", "Spilled Liquid Scam", "Express Kidnapping"], "Low"),
    _entry("Egypt", ["Cairo", "Alexandria", "Luxor", "Hurghada", "Sharm El Sheikh"],
           ["Camel Ride Scam", "Photo Scam", "Papyrus Scam", "Local Guide Scam"], "Medium"),
    _entry("Morocco", ["Marrakech", "Casablanca", "Fez", "Tangier", "Rabat"],
           ["Fake Guide Scam", "Rug Shop Scam", "Henna Tattoo Scam", "Money Exchange Scam"], "Medium"),
    _entry("South Africa", ["Cape Town", "Johannesburg", "Durban", "Pretoria", "Port Elizabeth"],
           ["ATM Scam", "Parking Attendant Scam", "Car Break-in", "Fake Police"], "Low"),
    _entry("Australia", ["Sydney", "Melbourne", "Brisbane", "Perth", "Adelaide"],
           ["Rental Scam", "Online Shopping Scam", "Tourist Attraction Scam", "Job Offer Scam"], "Very High"),
    _entry("Netherlands", ["Amsterdam", "Rotterdam", "The Hague", "Utrecht", "Eindhoven"],
           ["Fake Drug Dealer", "Fake Ticket Seller", "Pickpocketing", "Accommodation Scam"], "High"),
    _entry("Greece", ["Athens", "Santorini", "Mykonos", "Rhodes", "Crete"],
           ["Restaurant Overcharging", "Taxi Scam", "Shell Game", "Friendship Bracelet"], "Medium"),
    _entry("Turkey", ["Istanbul", "Antalya", "Bodrum", "Izmir", "Cappadocia"],
           ["Shoe Shine Scam", "Carpet Scam", "Turkish Bath Overcharging", "Fake Tour Guide"], "Medium"),
    _entry("Vietnam", ["Hanoi", "Ho Chi Minh City", "Da Nang", "Hoi An", "Nha Trang"],
           ["Cyclo Scam", "Motorbike Rental Scam", "Rigged Taxi Meter", "Fake Travel Agency"], "Medium"),
    _entry("Indonesia", ["Bali", "Jakarta", "Yogyakarta", "Lombok", "Bandung"],
           ["Currency Exchange Scam", "Fake Tour Guide", "ATM Skimming", "Ticket Scam"], "Medium"),
    _entry("Malaysia", ["Kuala Lumpur", "Penang", "Langkawi", "Johor Bahru", "Malacca"],
           ["Currency Exchange Scam", "Taxi Meter Scam", "Pickpocketing", "Credit Card Fraud"], "Medium"),
    _entry("Singapore", ["Singapore City"],
           ["Fake Job Offer", "Lucky Draw Scam", "Investment Scam", "E-commerce Scam"], "Very High"),
    _entry("Russia", ["Moscow", "Saint Petersburg", "Kazan", "Sochi", "Novosibirsk"],
           ["Police Scam", "Bar/Restaurant Scam", "Taxi Scam", "Apartment Rental Scam"], "Medium"),
    _entry("Mexico", ["Mexico City", "Cancun", "Playa del Carmen", "Guadalajara", "Puerto Vallarta"],
           ["Peso Exchange Scam", "Rental Car Damage Scam", "Police Bribery", "ATM Fraud"], "Low"),
    _entry("Argentina", ["Buenos Aires", "Cordoba", "Mendoza", "Bariloche", "Salta"],
           ["Mustard Scam", "Taxi Scam", "Fake Tour Guide", "Counterfeit Money"], "Medium"),
    _entry("Peru", ["Lima", "Cusco", "Arequipa", "Iquitos", "Puno"],
           ["Fake Tour Operator", "Taxi Scam", "ATM Skimming", "Fake Police"], "Low"),
    _entry("Colombia", ["Bogotá", "Medellín", "Cartagena", "Cali", "Santa Marta"],
           ["Taxi Scam", "ATM Fraud", "Drink Spiking", "Fake Police"], "Low"),
    _entry("Costa Rica", ["San José", "Manuel Antonio", "Tamarindo", "La Fortuna", "Monteverde"],
           ["Rental Car Damage", "Fake Tour Guide", "Counterfeit Money", "ATM Fraud"], "Medium"),
    _entry("Portugal", ["Lisbon", "Porto", "Faro", "Madeira", "Coimbra"],
           ["Restaurant Scam", "Fake Drugs", "Pickpocketing", "ATM Fraud"], "High"),
    _entry("Ireland", ["Dublin", "Cork", "Galway", "Limerick", "Belfast"],
           ["Accommodation Scam", "Fake Charity", "ATM Fraud", "Pickpocketing"], "High"),
)

# (lat, lng), approximate
_CITY_COORDINATES: Dict[str, Tuple[float, float]] = {
    "Paris": (48.8566, 2.3522),
    "Nice": (43.7102, 7.2620),
    "Marseille": (43.2965, 5.3698),
    "Lyon": (45.7640, 4.8357),
    "Bordeaux": (44.8378, -0.5792),
    "Rome": (41.9028, 12.4964),
    "Venice": (45.4408, 12.3155),
    "Milan": (45.4642, 9.1900),
    "Florence": (43.7696, 11.2558),
    "Naples": (40.8518, 14.2681),
    "Barcelona": (41.3851, 2.1734),
    "Madrid": (40.4168, -3.7038),
    "Seville": (37.3891, -5.9845),
    "Valencia": (39.4699, -0.3763),
    "Málaga": (36.7213, -4.4213),
    "London": (51.5074, -0.1278),
    "Manchester": (53.4808, -2.2426),
    "Edinburgh": (55.9533, -3.1883),
    "Liverpool": (53.4084, -2.9916),
    "Glasgow": (55.8642, -4.2518),
    "Berlin": (52.5200, 13.4050),
    "Munich": (48.1351, 11.5820),
    "Hamburg": (53.5511, 9.9937),
    "Frankfurt": (50.1109, 8.6821),
    "Cologne": (50.9375, 6.9603),
    "New York": (40.7128, -74.0060),
    "Los Angeles": (34.0522, -118.2437),
    "Chicago": (41.8781, -87.6298),
    "Miami": (25.7617, -80.1918),
    "Las Vegas": (36.1699, -115.1398),
    "Bangkok": (13.7563, 100.5018),
    "Phuket": (7.9519, 98.3381),
    "Chiang Mai": (18.7883, 98.9853),
    "Pattaya": (12.9236, 100.8825),
    "Krabi": (8.0862, 98.9062),
    "Beijing": (39.9042, 116.4074),
    "Shanghai": (31.2304, 121.4737),
    "Guangzhou": (23.1291, 113.2644),
    "Shenzhen": (22.5431, 114.0579),
    "Xi'an": (34.3416, 108.9398),
    "Tokyo": (35.6762, 139.6503),
    "Osaka": (34.6937, 135.5023),
    "Kyoto": (35.0116, 135.7681),
    "Yokohama": (35.4437, 139.6380),
    "Sapporo": (43.0618, 141.3545),
    "New Delhi": (28.6139, 77.2090),
    "Mumbai": (19.0760, 72.8777),
    "Jaipur": (26.9124, 75.7873),
    "Agra": (27.1767, 78.0081),
    "Kolkata": (22.5726, 88.3639),
    "Rio de Janeiro": (-22.9068, -43.1729),
    "São Paulo": (-23.5505, -46.6333),
    "Salvador": (-12.9714, -38.5014),
    "Brasília": (-15.7801, -47.9292),
    "Fortaleza": (-3.7319, -38.5267),
    "Cairo": (30.0444, 31.2357),
    "Alexandria": (31.2001, 29.9187),
    "Luxor": (25.6872, 32.6396),
    "Hurghada": (27.2579, 33.8116),
    "Sharm El Sheikh": (27.9158, 34.3300),
    "Marrakech": (31.6295, -7.9811),
    "Casablanca": (33.5731, -7.5898),
    "Fez": (34.0181, -5.0078),
    "Tangier": (35.7673, -5.7978),
    "Rabat": (34.0209, -6.8416),
    "Cape Town": (-33.9249, 18.4241),
    "Johannesburg": (-26.2041, 28.0473),
    "Durban": (-29.8587, 31.0218),
    "Pretoria": (-25.7461, 28.1881),
    "Port Elizabeth": (-33.9608, 25.6022),
    "Sydney": (-33.8688, 151.2093),
    "Melbourne": (-37.8136, 144.9631),
    "Brisbane": (-27.4698, 153.0251),
    "Perth": (-31.9505, 115.8605),
    "Adelaide": (-34.9285, 138.6007),
    "Amsterdam": (52.3676, 4.9041),
    "Rotterdam": (51.9244, 4.4777),
    "The Hague": (52.0705, 4.3007),
    "Utrecht": (52.0907, 5.1214),
    "Eindhoven": (51.4416, 5.4697),
    "Athens": (37.9838, 23.7275),
    "Santorini": (36.3932, 25.4615),
    "Mykonos": (37.4467, 25.3289),
    "Rhodes": (36.4341, 28.2176),
    "Crete": (35.2401, 24.8093),
    "Istanbul": (41.0082, 28.9784),
    "Antalya": (36.8969, 30.7133),
    "Bodrum": (37.0342, 27.4305),
    "Izmir": (38.4237, 27.1428),
    "Cappadocia": (38.6431, 34.9286),
    "Hanoi": (21.0278, 105.8342),
    "Ho Chi Minh City": (10.8231, 106.6297),
    "Da Nang": (16.0544, 108.2022),
    "Hoi An": (15.8801, 108.3380),
    "Nha Trang": (12.2388, 109.1968),
    "Bali": (-8.3405, 115.0920),
    "Jakarta": (-6.2088, 106.8456),
    "Yogyakarta": (-7.7971, 110.3688),
    "Lombok": (-8.5832, 116.2860),
    "Bandung": (-6.9175, 107.6191),
    "Kuala Lumpur": (3.1390, 101.6869),
    "Penang": (5.4141, 100.3288),
    "Langkawi": (6.3500, 99.8000),
    "Johor Bahru": (1.4927, 103.7414),
    "Malacca": (2.1896, 102.2501),
    "Singapore City": (1.3521, 103.8198),
    "Moscow": (55.7558, 37.6173),
    "Saint Petersburg": (59.9343, 30.3351),
    "Kazan": (55.8304, 49.0661),
    "Sochi": (43.6028, 39.7342),
    "Novosibirsk": (55.0084, 82.9357),
    "Mexico City": (19.4326, -99.1332),
    "Cancun": (21.1619, -86.8515),
    "Playa del Carmen": (20.6296, -87.0739),
    "Guadalajara": (20.6597, -103.3496),
    "Puerto Vallarta": (20.6534, -105.2253),
    "Buenos Aires": (-34.6037, -58.3816),
    "Cordoba": (-31.4201, -64.1888),
    "Mendoza": (-32.8908, -68.8272),
    "Bariloche": (-41.1335, -71.3103),
    "Salta": (-24.7859, -65.4117),
    "Lima": (-12.0464, -77.0428),
    "Cusco": (-13.5320, -71.9675),
    "Arequipa": (-16.4090, -71.5375),
    "Iquitos": (-3.7491, -73.2538),
    "Puno": (-15.8402, -70.0219),
    "Bogotá": (4.7110, -74.0721),
    "Medellín": (6.2476, -75.5699),
    "Cartagena": (10.3910, -75.4794),
    "Cali": (3.4516, -76.5320),
    "Santa Marta": (11.2404, -74.2110),
    "San José": (9.9281, -84.0907),
    "Manuel Antonio": (9.3920, -84.1370),
    "Tamarindo": (10.2993, -85.8371),
    "La Fortuna": (10.4673, -84.6426),
    "Monteverde": (10.3010, -84.8131),
    "Lisbon": (38.7223, -9.1393),
    "Porto": (41.1579, -8.6291),
    "Faro": (37.0193, -7.9304),
    "Madeira": (32.7607, -16.9595),
    "Coimbra": (40.2033, -8.4103),
    "Dublin": (53.3498, -6.2603),
    "Cork": (51.8969, -8.4863),
    "Galway": (53.2707, -9.0568),
    "Limerick": (52.6638, -8.6267),
    "Belfast": (54.5973, -5.9301),
}

# Local scam names -> canonical category (anything missing resolves to "Other")
_ARCHETYPE_CATEGORIES: Dict[str, str] = {
    "Petition Scam": "Tourist Trap",
    "Friendship Bracelet": "Tourist Trap",
    "Rose Gift Scam": "Tourist Trap",
    "Bird Poop Scam": "Distraction Theft",
    "The Flamenco Scam": "Tourist Trap",
    "Taxi Overcharging": "Taxi Scam",
    "Fake Police": "Fake Officials",
    "Taxi Scam": "Taxi Scam",
    "Pickpocketing": "Pickpocketing",
    "Fake Hotel Reception": "Accommodation Scam",
    "Mustard Scam": "Distraction Theft",
    "Charity Clipboard Scam": "Tourist Trap",
    "Fake Accommodation": "Accommodation Scam",
    "Three Card Monte": "Tourist Trap",
    "ATM Fraud": "ATM Fraud",
    "Apartment Rental Scam": "Accommodation Scam",
    "Card Game Scam": "Tourist Trap",
    "Broken Camera Scam": "Tourist Trap",
    "Vacation Rental Scam": "Accommodation Scam",
    "Tuk Tuk Scam": "Taxi Scam",
    "Gem Scam": "Fake Products",
    "Rented Motorbike Scam": "Tourist Trap",
    "Tiger Temple Scam": "Tourist Trap",
    "Tea House Scam": "Overcharging",
    "Art Student Scam": "Fake Products",
    "Black Taxi Scam": "Taxi Scam",
    "Counterfeit Currency": "Counterfeit Currency",
    "Bar Scam": "Overcharging",
    "Restaurant Overcharging": "Overcharging",
    "Fake Monk": "Fake Officials",
    "Fake Tourist Office": "Fake Officials",
    "Taxi Meter Scam": "Taxi Scam",
    "Fake Guide Scam": "Fake Officials",
    "Fake Taxi": "Taxi Scam",
    "Distraction Theft": "Distraction Theft",
    "Spilled Liquid Scam": "Distraction Theft",
    "Express Kidnapping": "Other",
    "Camel Ride Scam": "Overcharging",
    "Photo Scam": "Overcharging",
    "Papyrus Scam": "Fake Products",
    "Local Guide Scam": "Fake Officials",
    "Rug Shop Scam": "Overcharging",
    "Henna Tattoo Scam": "Tourist Trap",
    "Money Exchange Scam": "Counterfeit Currency",
    "Parking Attendant Scam": "Fake Officials",
    "Car Break-in": "Other",
    "Rental Scam": "Accommodation Scam",
    "Online Shopping Scam": "Other",
    "Tourist Attraction Scam": "Tourist Trap",
    "Job Offer Scam": "Other",
    "Fake Drug Dealer": "Fake Products",
    "Fake Ticket Seller": "Fake Products",
    "Shell Game": "Tourist Trap",
    "Shoe Shine Scam": "Overcharging",
    "Carpet Scam": "Overcharging",
    "Turkish Bath Overcharging": "Overcharging",
    "Fake Tour Guide": "Fake Officials",
    "Cyclo Scam": "Taxi Scam",
    "Motorbike Rental Scam": "Tourist Trap",
    "Rigged Taxi Meter": "Taxi Scam",
    "Fake Travel Agency": "Accommodation Scam",
    "Currency Exchange Scam": "Counterfeit Currency",
    "Credit Card Fraud": "ATM Fraud",
    "Fake Job Offer": "Other",
    "Lucky Draw Scam": "Tourist Trap",
    "Investment Scam": "Other",
    "E-commerce Scam": "Other",
    "Police Scam": "Fake Officials",
    "Bar/Restaurant Scam": "Overcharging",
    "Peso Exchange Scam": "Counterfeit Currency",
    "Rental Car Damage Scam": "Tourist Trap",
    "Police Bribery": "Fake Officials",
    "Fake Tour Operator": "Accommodation Scam",
    "ATM Skimming": "ATM Fraud",
    "Drink Spiking": "Other",
    "Rental Car Damage": "Tourist Trap",
    "Fake Drugs": "Fake Products",
    "Fake Charity": "Fake Officials",
}

_DESCRIPTIONS: Dict[str, Tuple[str, ...]] = {
    "Tourist Trap": (
        "Vendors charge exorbitant prices for low-quality souvenirs or services targeted at tourists.",
        'This area has multiple shops known to target tourists with inflated prices and fake "special deals".',
        "Local businesses may collude to artificially inflate prices for tourists, particularly in high season.",
        'Be wary of "tourist menus" that cost significantly more than the regular menu items.',
    ),
    "Pickpocketing": (
        "Crowded areas where thieves work in teams to distract victims while stealing valuables.",
        "Reports of skilled pickpockets targeting tourists, especially in public transport and tourist sites.",
        "Multiple incidents of wallet and phone theft in this area, often using children or distraction techniques.",
        "Pickpockets target visitors near this attraction, particularly during busy hours.",
    ),
    "Taxi Scam": (
        "Unlicensed taxis charging excessive fares or taking longer routes to increase the fare.",
        "Taxi drivers claim the meter is broken and then charge exorbitant flat rates.",
        "Drivers may take deliberately convoluted routes to increase fares for tourists unfamiliar with the area.",
        "Some taxis use rigged meters that run faster than they should, resulting in inflated fares.",
    ),
    "Fake Officials": (
        "Individuals posing as police officers demanding to see ID or money for fictional infractions.",
        'People claiming to be government officials requesting "inspection fees" or immediate fines.',
        "Fake tour guides posing as official city representatives to charge for services or access to public sites.",
        'Scammers dressed as authority figures target tourists to extract bribes or "fines".',
    ),
    "Accommodation Scam": (
        "Fake rental listings for properties that don't exist or are significantly different than advertised.",
        "Hosts demanding additional fees upon arrival not mentioned in the original booking.",
        "Vacation rentals that don't match online descriptions or photos, with owners refusing refunds.",
        "Booking sites showing properties that don't exist, collecting payment for non-existent accommodations.",
    ),
    "ATM Fraud": (
        "Skimming devices installed on ATMs to collect card data and PINs.",
        "Tampered ATMs that capture cards or compromise banking information.",
        "Criminals observe PIN entries and then steal cards through distraction techniques.",
        "ATMs in this area have been found with card skimmers and hidden cameras to capture PIN numbers.",
    ),
    "Overcharging": (
        "Restaurants adding items to bills that weren't ordered or inflating prices after service.",
        "Vendors charging foreign tourists significantly higher prices than locals for the same items.",
        "Businesses using confusing pricing or hidden charges to extract more money from customers.",
        "Services quoting one price initially but demanding a much higher amount after completion.",
    ),
    "Fake Products": (
        "Counterfeit goods sold as authentic brand-name items, particularly in markets and street stalls.",
        "Fake antiques or artifacts sold as genuine historical items.",
        "Low-quality imitation products sold as high-end luxury goods to unsuspecting tourists.",
        "Vendors selling counterfeit electronics, watches, and clothing that quickly malfunction.",
    ),
    "Counterfeit Currency": (
        "Being given fake banknotes as change, particularly after small purchases.",
        "Money exchange services providing counterfeit bills mixed with legitimate currency.",
        "Street money changers offering favorable rates but providing counterfeit notes.",
        "Businesses passing counterfeit bills to tourists who may not be familiar with local currency.",
    ),
    "Distraction Theft": (
        "A person creates a commotion or spills something on you while an accomplice steals your belongings.",
        "Groups working together to distract tourists while picking pockets or stealing bags.",
        "Someone asks for directions or help while an accomplice steals your valuables.",
        "Individuals stage arguments or performances to distract attention from theft activities.",
    ),
    "Other": (
        "Various scams targeting tourists including fraudulent services and deceptive practices.",
        "Reports of elaborate schemes designed to defraud visitors of money or personal information.",
        "Scammers using a variety of tactics to trick tourists and extract money or valuables.",
        "Multiple reports of scams in this area targeting vulnerable tourists and visitors.",
    ),
}

ADVISORIES: Tuple[str, ...] = (
    "Local authorities have increased patrols in this area.",
    "Recent reports indicate a decrease in incidents.",
    "Several tourists reported new variations of this scam.",
    "Embassy has issued a warning about this type of scam.",
    "Local police have arrested several individuals involved in this scam.",
    "Tourism board has established a helpline for reporting these incidents.",
    "New security measures have been implemented at this location.",
    "This scam has evolved to include digital payment methods.",
    "Multiple reports confirm this issue is ongoing and persistent.",
)

# Safer countries lean toward verified reports
_VERIFICATION_PROBABILITY: Dict[str, float] = {
    "Very High": 0.8,
    "High": 0.7,
    "Medium": 0.5,
    "Low": 0.3,
    "Very Low": 0.2,
}

# Marker colours used by the map layer (hex, tailwind 500 shades)
_CATEGORY_COLORS: Dict[str, str] = {
    "Tourist Trap": "#EF4444",
    "Overcharging": "#F59E0B",
    "Fake Products": "#10B981",
    "Pickpocketing": "#3B82F6",
    "Taxi Scam": "#8B5CF6",
    "Fake Officials": "#EC4899",
    "Counterfeit Currency": "#F97316",
    "Accommodation Scam": "#14B8A6",
    "ATM Fraud": "#6366F1",
    "Distraction Theft": "#A855F7",
    "Other": "#6B7280",
}

CITY_COORDINATES = MappingProxyType(_CITY_COORDINATES)


def countries() -> Tuple[CountryEntry, ...]:
    return _COUNTRIES


def city_coordinates(city: str) -> Optional[Tuple[float, float]]:
    return _CITY_COORDINATES.get(city)


def category_for(archetype: str) -> str:
    return _ARCHETYPE_CATEGORIES.get(archetype, DEFAULT_CATEGORY)


def descriptions_for(category: str) -> Tuple[str, ...]:
    return _DESCRIPTIONS.get(category) or _DESCRIPTIONS[DEFAULT_CATEGORY]


def verification_probability(safety_level: str) -> float:
    return _VERIFICATION_PROBABILITY.get(safety_level, DEFAULT_VERIFICATION_PROBABILITY)


def color_for(category: Optional[str]) -> str:
    return _CATEGORY_COLORS.get(category or DEFAULT_CATEGORY, _CATEGORY_COLORS[DEFAULT_CATEGORY])


def known_locations() -> FrozenSet[str]:
    """Every "<city>, <country>" pair the generator can emit."""
    return frozenset(
        f"{entry_city}, {entry.country}"
        for entry in _COUNTRIES
        for entry_city in entry.cities
        if entry_city in _CITY_COORDINATES
    )
