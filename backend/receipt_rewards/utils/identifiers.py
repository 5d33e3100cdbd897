"""Receipt identifier generation."""

from __future__ import annotations

import base64
import uuid


def new_receipt_id() -> str:
    """Return a fresh opaque receipt identifier.

    The identifier is the URL-safe base64 encoding of a random UUID4
    (122 random bits) with the padding stripped, giving a 22 character
    token that can be used directly in a URL path.
    """
    raw = uuid.uuid4().bytes
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
