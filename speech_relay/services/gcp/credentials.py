"""Google Cloud credential discovery shared by the GCP services."""

import logging
import os

from speech_relay.config.settings import settings

logger = logging.getLogger(__name__)

CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"


def ensure_credentials():
    """
    Export the configured service-account file for the Google client libraries.

    An explicit environment variable wins over settings. A relative path is
    resolved against the working directory. A missing file is logged and left
    unexported, so the clients fall back to Application Default Credentials.
    """
    if CREDENTIALS_ENV_VAR in os.environ or not settings.GOOGLE_APPLICATION_CREDENTIALS:
        return

    creds_path = os.path.abspath(os.path.expanduser(settings.GOOGLE_APPLICATION_CREDENTIALS))
    if not os.path.isfile(creds_path):
        logger.warning(f"[GCP] Credentials file not found at {creds_path}, using default credentials")
        return

    os.environ[CREDENTIALS_ENV_VAR] = creds_path
    logger.info(f"[GCP] Using credentials from {creds_path}")
