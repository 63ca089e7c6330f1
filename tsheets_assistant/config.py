"""Shared configuration for the webhook."""
import os
from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("TSHEETS_BASE_URL", "https://rest.tsheets.com/api/v1")
TIMEOUT = float(os.getenv("TSHEETS_TIMEOUT", "10"))
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def auth_headers(token: str | None) -> dict:
    return {"Authorization": f"Bearer {token or ''}"}
