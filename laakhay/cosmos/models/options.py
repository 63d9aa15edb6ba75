"""Per-call option structures.

All options are immutable and every field is optional. Defaults mean "do not
send the corresponding header".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RequestOptions(BaseModel):
    """Options shared by every document-level call.

    Attributes:
        session_token: Token from an earlier write; sent as
            ``x-ms-session-token`` for read-your-writes consistency.
    """

    session_token: str | None = None

    model_config = ConfigDict(frozen=True)


class CreateDocumentOptions(RequestOptions):
    """Options for creating a document.

    Attributes:
        upsert: Replace an existing document with the same id instead of
            failing. Defaults to False.
    """

    upsert: bool = False


class ReplaceDocumentOptions(RequestOptions):
    """Options for replacing a document.

    Attributes:
        if_match: ETag the stored document must still carry for the
            replacement to happen. None replaces unconditionally.
    """

    if_match: str | None = None
