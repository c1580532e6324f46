import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./salon.db")

# Optional shared backend for the settings cache (falls back to process memory)
REDIS_URL = os.getenv("REDIS_URL")

# Settings cache lifetime in seconds (5 minutes)
SETTINGS_CACHE_TTL = int(os.getenv("SETTINGS_CACHE_TTL", "300"))

# Scheduling defaults
# The runtime interval comes from the "horarios_intervalo_citas" setting; this is the fallback
APPOINTMENT_INTERVAL_MINUTES = int(os.getenv("APPOINTMENT_INTERVAL_MINUTES", "30"))
DEFAULT_SERVICE_DURATION = int(os.getenv("DEFAULT_SERVICE_DURATION", "30"))

# Window used to suggest alternative start times
SUGGESTION_WINDOW_START = os.getenv("SUGGESTION_WINDOW_START", "09:00")
SUGGESTION_WINDOW_END = os.getenv("SUGGESTION_WINDOW_END", "20:00")
MAX_SUGGESTIONS = int(os.getenv("MAX_SUGGESTIONS", "8"))

# Occupancy report: free half-hour listing and utilization denominator
OCCUPANCY_WINDOW_START = os.getenv("OCCUPANCY_WINDOW_START", "08:00")
OCCUPANCY_WINDOW_END = os.getenv("OCCUPANCY_WINDOW_END", "20:00")
OCCUPANCY_SLOT_MINUTES = int(os.getenv("OCCUPANCY_SLOT_MINUTES", "30"))
UTILIZATION_SLOTS = int(os.getenv("UTILIZATION_SLOTS", "26"))  # 30-min slots from 08:00 to 21:00

# Frontend base URL for CORS
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
