from dotenv import load_dotenv
import os

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

# Storage
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "socialposts")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", 5000))

# Token verification
JWT_SECRET = os.getenv("JWT_SECRET", "socialposts-development-jwt-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Comma separated list of allowed frontend origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Post input rules
POST_TEXT_MIN_LENGTH = int(os.getenv("POST_TEXT_MIN_LENGTH", 1))
POST_TEXT_MAX_LENGTH = int(os.getenv("POST_TEXT_MAX_LENGTH", 300))
POST_NAME_MAX_LENGTH = int(os.getenv("POST_NAME_MAX_LENGTH", 100))

LIKE_TOGGLE_ATTEMPTS = int(os.getenv("LIKE_TOGGLE_ATTEMPTS", 5))
