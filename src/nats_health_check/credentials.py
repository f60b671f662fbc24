"""Reading expiry information from NATS user credentials."""

import base64
import binascii
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from nats_health_check.checks.base import CheckError
from nats_health_check.models import Credential

logger = logging.getLogger(__name__)

_JWT_BLOCK = re.compile(
    r"-{3,}BEGIN NATS USER JWT-{3,}\s*(?P<jwt>\S+)\s*-{3,}END NATS USER JWT-{3,}"
)


class CredentialError(CheckError):
    """A credential could not be read or decoded."""


def extract_jwt(text: str) -> str:
    """Get the user JWT from a creds file, or the text itself if it is a bare JWT."""
    match = _JWT_BLOCK.search(text)
    if match:
        return match.group("jwt")

    token = text.strip()
    if token.count(".") == 2 and not any(c.isspace() for c in token):
        return token
    raise CredentialError("no user JWT found in credential")


def decode_claims(token: str) -> dict:
    """Decode the claims segment of a JWT without verifying its signature."""
    try:
        segment = token.split(".")[1]
        padded = segment + "=" * (-len(segment) % 4)
        claims = json.loads(base64.urlsafe_b64decode(padded))
    except (IndexError, binascii.Error, ValueError) as e:
        raise CredentialError(f"invalid JWT: {e}") from e

    if not isinstance(claims, dict):
        raise CredentialError("invalid JWT: claims are not an object")
    return claims


def parse_credential(text: str) -> Credential:
    """Build a Credential from creds file contents."""
    claims = decode_claims(extract_jwt(text))
    expires = claims.get("exp")
    if not expires:
        return Credential(expires_at=None)
    return Credential(expires_at=datetime.fromtimestamp(expires, tz=timezone.utc))


def load_credential(path: str | Path) -> Credential:
    """Load a creds file (or a file holding a bare JWT).

    Raises:
        CredentialError: If the file cannot be read or holds no valid JWT.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text()
    except OSError as e:
        raise CredentialError(f"could not read credential {path}: {e}") from e

    credential = parse_credential(text)
    logger.debug(f"Credential {path} expires at {credential.expires_at}")
    return credential
