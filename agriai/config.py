# agriai/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# Load DATABASE_URL from environment; default to local SQLite under ./data
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/agriai.db")

JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
