"""Per-request authorization header generation.

Architecture:
    Every HTTP attempt (including each retry) asks the signer for a fresh
    set of headers. The timestamp is rendered once as an HTTP-date string;
    the same string is sent as the date header and, lower-cased, signed.

    Canonical payload::

        verb.lower() \\n resource_type.lower() \\n resource_link \\n date.lower() \\n \\n

    The payload is HMAC-SHA256 signed with the credential, base64-encoded and
    embedded in ``type=master&ver=1.0&sig=<digest>``, which is URL-encoded
    as a whole.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime
from urllib.parse import quote

from ..config import API_VERSION, HEADER_AUTHORIZATION, HEADER_DATE, HEADER_VERSION
from ..core.enums import HttpVerb, ResourceType
from .credential import CosmosCredential

TOKEN_TYPE = "master"
TOKEN_VERSION = "1.0"

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class SignedHeaders:
    """Headers produced for a single request attempt."""

    verb: str
    resource_type: str
    resource_link: str
    date: str
    signature: str
    authorization: str
    api_version: str = API_VERSION

    def as_dict(self) -> dict[str, str]:
        return {
            HEADER_AUTHORIZATION: self.authorization,
            HEADER_DATE: self.date,
            HEADER_VERSION: self.api_version,
        }


def format_http_date(moment: datetime) -> str:
    """Render a moment as an RFC 7231 HTTP-date, e.g. ``Tue, 01 Nov 1994 08:12:31 GMT``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC).replace(microsecond=0), usegmt=True)


def build_payload(verb: str, resource_type: str, resource_link: str, date: str) -> str:
    """Build the canonical string that gets signed."""
    return f"{verb.lower()}\n{resource_type.lower()}\n{resource_link}\n{date.lower()}\n\n"


def compute_signature(credential: CosmosCredential, payload: str) -> str:
    digest = hmac.new(credential.key, payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(
    credential: CosmosCredential,
    verb: HttpVerb | str,
    resource_type: ResourceType | str,
    resource_link: str = "",
    *,
    now: datetime | None = None,
) -> SignedHeaders:
    """Produce the authorization, date and version headers for one attempt.

    Args:
        credential: Signing credential
        verb: HTTP method of the request
        resource_type: Resource type tag (e.g. ``docs``)
        resource_link: Resource link, empty for root-level resources
        now: Moment to sign; defaults to the current UTC time

    Returns:
        SignedHeaders whose date is exactly the value that was signed
    """
    verb_str = verb.value if isinstance(verb, HttpVerb) else verb
    type_str = resource_type.value if isinstance(resource_type, ResourceType) else resource_type
    date = format_http_date(now or datetime.now(UTC))

    payload = build_payload(verb_str, type_str, resource_link, date)
    signature = compute_signature(credential, payload)
    token = f"type={TOKEN_TYPE}&ver={TOKEN_VERSION}&sig={signature}"

    return SignedHeaders(
        verb=verb_str,
        resource_type=type_str,
        resource_link=resource_link,
        date=date,
        signature=signature,
        authorization=quote(token, safe=_URI_COMPONENT_SAFE),
    )
