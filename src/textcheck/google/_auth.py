from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Optional

from google.auth import exceptions as auth_exceptions
from google.oauth2 import service_account

from textcheck import logger as log

from .errors import CredentialsError

log = log.get_logger()


DEFAULT_SCOPES = ("https://www.googleapis.com/auth/cloud-platform",)


@dataclass(frozen=True)
class AuthConfig:
    """Where Google credentials should be loaded from."""

    credentials_json: Optional[str] = None
    credentials_file: Optional[str] = None
    scopes: tuple[str, ...] = DEFAULT_SCOPES


def _from_file(path: str, scopes: list[str]):
    if not os.path.isfile(path):
        raise CredentialsError(
            f"GOOGLE_APPLICATION_CREDENTIALS points to a missing file: {path}"
        )
    try:
        return service_account.Credentials.from_service_account_file(
            path, scopes=scopes
        )
    except (ValueError, auth_exceptions.GoogleAuthError) as e:
        raise CredentialsError(f"Invalid service account file {path}: {e}") from e


def load_credentials(config: AuthConfig):
    """Load service account credentials from inline JSON or a file.

    If the inline JSON is invalid, falls back to the credentials file.
    """

    scopes = list(config.scopes)

    if config.credentials_json:
        try:
            creds_dict = json.loads(config.credentials_json)
            if not isinstance(creds_dict, dict):
                raise ValueError("Decoded credentials JSON is not a dict")
            return service_account.Credentials.from_service_account_info(
                creds_dict, scopes=scopes
            )
        except (ValueError, auth_exceptions.GoogleAuthError) as e:
            if not config.credentials_file:
                raise CredentialsError(
                    f"Invalid GOOGLE_CREDENTIALS_JSON and no credentials file: {e}"
                ) from e
            log.warning(
                f"Invalid GOOGLE_CREDENTIALS_JSON ({e}); falling back to {config.credentials_file}"
            )

    if not config.credentials_file:
        raise CredentialsError(
            "Vertex AI needs GOOGLE_APPLICATION_CREDENTIALS or GOOGLE_CREDENTIALS_JSON"
        )

    return _from_file(config.credentials_file, scopes)


def resolve_project(creds, explicit: Optional[str] = None) -> str:
    """Explicit project wins; otherwise use the service account's project_id."""

    project = explicit or getattr(creds, "project_id", None)
    if not project:
        raise CredentialsError(
            "Could not determine the Google Cloud project; set GOOGLE_CLOUD_PROJECT"
        )
    return project
