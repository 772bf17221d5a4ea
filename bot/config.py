"""Configuration for FoxBell bot."""

import json
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load .env from the project root when present
load_dotenv()

# Telegram bot token (required)
TELEGRAM_BOT_TOKEN: Optional[str] = os.environ.get("TELEGRAM_BOT_TOKEN")

# Public JSON endpoint for /fox
FOX_API_URL: str = os.environ.get("FOX_API_URL", "https://randomfox.ca/floof/")

# Firestore: either a path to the service-account JSON or the three variables below
FIREBASE_CREDENTIALS: Optional[str] = os.environ.get("FIREBASE_CREDENTIALS")
FIREBASE_PROJECT: Optional[str] = os.environ.get("FIREBASE_PROJECT")
FIREBASE_EMAIL: Optional[str] = os.environ.get("FIREBASE_EMAIL")
FIREBASE_KEY: Optional[str] = os.environ.get("FIREBASE_KEY")
FIREBASE_DATABASE_URL: Optional[str] = os.environ.get("FIREBASE_DATABASE_URL")


def _service_account_from_env() -> Optional[Dict[str, Any]]:
    if not (FIREBASE_PROJECT and FIREBASE_EMAIL and FIREBASE_KEY):
        return None
    return {
        "type": "service_account",
        "project_id": FIREBASE_PROJECT,
        "client_email": FIREBASE_EMAIL,
        # .env keeps the key on one line with escaped \n
        "private_key": FIREBASE_KEY.replace("\\n", "\n"),
        "token_uri": "https://oauth2.googleapis.com/token",
    }


def firestore_options() -> Optional[Dict[str, Any]]:
    """Options for ``FirestoreProvider`` or ``None`` when Firestore is not configured."""
    credentials: Any = None
    project = FIREBASE_PROJECT

    if FIREBASE_CREDENTIALS:
        credentials = FIREBASE_CREDENTIALS
        if not project:
            try:
                with open(FIREBASE_CREDENTIALS, "r", encoding="utf-8") as f:
                    project = json.load(f).get("project_id")
            except FileNotFoundError as exc:
                raise RuntimeError(f"Firebase credentials not found at {FIREBASE_CREDENTIALS!r}.") from exc
    else:
        credentials = _service_account_from_env()

    if credentials is None:
        return None

    database_url = FIREBASE_DATABASE_URL
    if not database_url and project:
        database_url = f"https://{project}.firebaseio.com"

    return {"credentials": credentials, "database_url": database_url}
