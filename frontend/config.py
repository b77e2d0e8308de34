"""
Client configuration and constants
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Lookup API
API_URL = os.getenv("DAWN2DUSK_API_URL", "http://localhost:4000").rstrip("/")
LOOKUP_TIMEOUT = float(os.getenv("DAWN2DUSK_LOOKUP_TIMEOUT", "60"))

# Approximate device location
GEOLOCATION_URL = os.getenv("GEOLOCATION_URL", "https://ipapi.co/json/")

# Used when the device location is unavailable (central London)
DEFAULT_LAT = 51.505
DEFAULT_LON = -0.09

LOADING_TEXT = "Loading..."
ERROR_TEXT = "Error fetching similar place"
