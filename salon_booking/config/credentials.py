"""
Google service-account credential loading.

Credentials are loaded once during startup. A malformed key is fatal: the
service must not start in a half-configured state.
"""

import json
import os
from typing import Any, Dict, List, Optional

from google.oauth2 import service_account

from ..core.exceptions import ConfigurationError
from .external_apis import SHEETS_SCOPES
from .settings import Settings


def _parse_key(raw: str) -> Dict[str, Any]:
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            "GOOGLE_SERVICE_ACCOUNT_KEY is not valid JSON"
        ) from e

    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_SERVICE_ACCOUNT_KEY must be a JSON object")

    missing = [k for k in ("client_email", "private_key") if not info.get(k)]
    if missing:
        raise ConfigurationError(
            f"GOOGLE_SERVICE_ACCOUNT_KEY is missing: {', '.join(missing)}"
        )

    # Keys pasted into env vars usually carry escaped newlines
    info["private_key"] = info["private_key"].replace("\\n", "\n")
    return info


def load_service_account_credentials(
    settings: Settings, scopes: Optional[List[str]] = None
) -> service_account.Credentials:
    """
    Load service account credentials from one of:
    - GOOGLE_SERVICE_ACCOUNT_KEY (raw JSON)
    - GOOGLE_SERVICE_ACCOUNT_FILE (file path)

    Raises:
        ConfigurationError: if neither is usable
    """
    scopes = scopes or SHEETS_SCOPES

    if settings.google_service_account_key:
        info = _parse_key(settings.google_service_account_key)
    elif settings.google_service_account_file:
        path = settings.google_service_account_file
        if not os.path.exists(path):
            raise ConfigurationError(f"Service account file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            info = _parse_key(f.read())
    else:
        raise ConfigurationError(
            "No service account credentials provided. "
            "Set GOOGLE_SERVICE_ACCOUNT_KEY or GOOGLE_SERVICE_ACCOUNT_FILE."
        )

    try:
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)
    except (ValueError, KeyError) as e:
        raise ConfigurationError(f"Malformed service account key: {e}") from e
