import os

from dotenv import load_dotenv

load_dotenv()

FIREBASE_CREDENTIALS = os.environ.get("FIREBASE_CREDENTIALS", "./firebase.json")
POSTS_COLLECTION = os.environ.get("POSTS_COLLECTION", "posts")
USERS_COLLECTION = os.environ.get("USERS_COLLECTION", "users")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Comma separated, e.g. "http://localhost:3000,https://app.example.com"
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
