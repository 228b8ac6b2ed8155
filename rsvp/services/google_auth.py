"""
Google Authentication for the Firestore client
"""
import json
import logging
import os
from typing import Optional

from google.cloud import firestore
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/datastore']
KEY_FILE = "firebase-key.json"


def load_credentials(credentials_json: Optional[str] = None) -> Optional[service_account.Credentials]:
    """
    Service-account credentials from inline JSON or firebase-key.json.

    Returns None when neither is present so the client falls back to
    Application Default Credentials.
    """
    if credentials_json:
        return service_account.Credentials.from_service_account_info(
            json.loads(credentials_json), scopes=SCOPES
        )
    if os.path.exists(KEY_FILE):
        return service_account.Credentials.from_service_account_file(KEY_FILE, scopes=SCOPES)
    logger.info("No service account configured, using Application Default Credentials")
    return None


def build_firestore_client(project_id: Optional[str] = None,
                           credentials_json: Optional[str] = None) -> firestore.Client:
    creds = load_credentials(credentials_json)
    if creds:
        return firestore.Client(project=project_id or creds.project_id, credentials=creds)
    if project_id:
        return firestore.Client(project=project_id)
    return firestore.Client()
