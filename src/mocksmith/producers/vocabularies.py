"""Fixed reference vocabularies used by industry producers."""

# Aviation

AIRCRAFT_TYPES = [
    "Boeing 737",
    "Boeing 747",
    "Boeing 777",
    "Boeing 787",
    "Airbus A320",
    "Airbus A330",
    "Airbus A350",
    "Airbus A380",
    "Embraer E190",
    "Bombardier CRJ900",
]

FLIGHT_STATUSES = [
    "On Time",
    "Delayed",
    "Boarding",
    "Departed",
    "Arrived",
    "Cancelled",
    "Diverted",
    "Gate Changed",
]

AIRPORT_CODES = [
    "JFK", "LAX", "ORD", "ATL", "LHR", "CDG", "FRA", "AMS", "SIN", "DXB",
    "HKG", "NRT", "SYD", "MEL", "SFO", "DFW", "DEN", "SEA", "MIA", "BOS",
]

BAGGAGE_CLAIMS = ["A", "B", "C", "D", "E"]

AIRLINE_CODES = ["AA", "UA", "DL", "BA", "LH", "AF", "KL", "SQ", "EK", "QF"]

TERMINALS = ["A", "B", "C", "D", "E", "F", "G", "H", "T"]

SEAT_LETTERS = ["A", "B", "C", "D", "E", "F"]

# Health

BLOOD_TYPES = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

MEDICAL_CONDITIONS = [
    "Hypertension",
    "Type 2 Diabetes",
    "Asthma",
    "Arthritis",
    "Migraine",
    "Anxiety",
    "Depression",
    "Hypothyroidism",
    "GERD",
    "Osteoporosis",
    "Fibromyalgia",
    "Sleep Apnea",
]

MEDICATIONS = [
    "Lisinopril",
    "Metformin",
    "Albuterol",
    "Ibuprofen",
    "Sumatriptan",
    "Sertraline",
    "Levothyroxine",
    "Omeprazole",
    "Alendronate",
    "Gabapentin",
    "CPAP",
    "Atorvastatin",
]

SYMPTOMS = [
    "Fever",
    "Cough",
    "Headache",
    "Fatigue",
    "Shortness of breath",
    "Chest pain",
    "Nausea",
    "Dizziness",
    "Joint pain",
    "Rash",
    "Sore throat",
    "Muscle aches",
]

DIAGNOSES = [
    "Common Cold",
    "Influenza",
    "Pneumonia",
    "Bronchitis",
    "Urinary Tract Infection",
    "Gastroenteritis",
    "Sinusitis",
    "Conjunctivitis",
    "Otitis Media",
    "Pharyngitis",
]

ALLERGIES = [
    "Penicillin",
    "Peanuts",
    "Shellfish",
    "Latex",
    "Pollen",
    "Dust mites",
    "Pet dander",
    "Sulfa drugs",
    "Eggs",
    "Tree nuts",
    "Soy",
    "Wheat",
]

UNIT_MG_DL = "mg/dL"
UNIT_G_DL = "g/dL"
UNIT_MM_HG = "mmHg"
UNIT_BPM = "bpm"
UNIT_FAHRENHEIT = "°F"
UNIT_BREATHS_MIN = "breaths/min"

# (min, max, unit)
LAB_RANGES = {
    "glucose": (70.0, 140.0, UNIT_MG_DL),
    "cholesterol": (125.0, 200.0, UNIT_MG_DL),
    "hemoglobin": (12.0, 17.0, UNIT_G_DL),
}

SYSTOLIC_RANGE = (90, 120)
DIASTOLIC_RANGE = (60, 80)
HEART_RATE_RANGE = (60, 100)
TEMPERATURE_RANGE = (97.0, 99.0)
RESPIRATORY_RATE_RANGE = (12, 20)

# Databases

MONGO_REGEX_PATTERNS = [
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$",
    r"^\d{3}-\d{2}-\d{4}$",
    r"^\d{10}$",
    r"^[A-Z]{2}\d{6}$",
    r"^\w{3,20}$",
]

MONGO_REGEX_OPTIONS = ["i", "m", "s", "x", ""]

MONGO_JS_FUNCTIONS = [
    "function(x) { return x * 2; }",
    "function(a, b) { return a + b; }",
    "function() { return new Date(); }",
    "function(str) { return str.toUpperCase(); }",
    "function(arr) { return arr.length; }",
]

# subtype name -> (subtype byte, fixed payload length or None)
MONGO_BINARY_SUBTYPES = {
    "generic": (0x00, None),
    "uuid": (0x04, 16),
    "md5": (0x05, 16),
    "user_defined": (0x80, None),
}

TSVECTOR_LEXEMES = [
    "data", "seed", "table", "row", "key", "index", "query", "value",
    "record", "schema", "column", "engine", "report", "batch", "stream",
]

# Base

CURRENCY_CODES = [
    "USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD", "CNY", "INR", "SGD",
]

PRODUCT_ADJECTIVES = [
    "Ergonomic", "Rustic", "Sleek", "Durable", "Compact", "Wireless",
    "Handcrafted", "Smart", "Portable", "Premium", "Lightweight", "Classic",
]

PRODUCT_MATERIALS = [
    "Steel", "Wooden", "Cotton", "Leather", "Plastic", "Granite",
    "Bamboo", "Ceramic", "Rubber", "Aluminum",
]

PRODUCT_NOUNS = [
    "Chair", "Lamp", "Keyboard", "Backpack", "Bottle", "Table", "Watch",
    "Headphones", "Wallet", "Mug", "Speaker", "Jacket",
]
