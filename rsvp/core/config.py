"""
Core configuration and environment variables
"""
import os
from dotenv import load_dotenv

load_dotenv()

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Environment Variables
STORE_BACKEND = os.getenv("STORE_BACKEND", "firestore")
FIRESTORE_PROJECT = os.getenv("FIRESTORE_PROJECT")
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
EVENTS_COLLECTION = os.getenv("EVENTS_COLLECTION", "Event")
TEMPLATES_DIR = os.getenv("TEMPLATES_DIR", os.path.join(_PACKAGE_DIR, "templates"))
MAX_APPEND_ATTEMPTS = int(os.getenv("MAX_APPEND_ATTEMPTS", "3"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Route segments that may never be used as event ids
EVENTS_SEGMENT = "events"
ATTENDEES_SEGMENT = "attendees"
RESERVED_IDS = frozenset({EVENTS_SEGMENT})
