import os

from dotenv import load_dotenv

load_dotenv()

FIREBASE_CREDENTIALS = os.environ.get("FIREBASE_CREDENTIALS", "./firebase.json")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Tolerated drift between our clock and Firebase's when checking token iat/exp
TOKEN_CLOCK_SKEW_SECONDS = int(os.environ.get("TOKEN_CLOCK_SKEW_SECONDS", "10"))
