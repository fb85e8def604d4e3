from dotenv import load_dotenv
import os

# Load environment variables from .env
load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL")
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", 5432)
DB_NAME = os.getenv("DB_NAME", "carnival")

# Public URL of the web front end (payment redirects, demo checkout)
APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")

# Paystack
PAYSTACK_SECRET_KEY = os.getenv("PAYSTACK_SECRET_KEY", "")
PAYSTACK_BASE_URL = os.getenv("PAYSTACK_BASE_URL", "https://api.paystack.co")
PAYMENT_TIMEOUT = float(os.getenv("PAYMENT_TIMEOUT", 10))

# Concierge chat (any OpenAI compatible endpoint, Groq by default)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.groq.com/openai/v1")
CHAT_MODEL = os.getenv("CHAT_MODEL", "llama-3.3-70b-versatile")

# Geocoding
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GEOCODING_TIMEOUT = float(os.getenv("GEOCODING_TIMEOUT", 5))
GEOCODING_USER_AGENT = "CarnivalXperience/1.0"

# Sessions
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "cx_session")
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", 24 * 7))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
