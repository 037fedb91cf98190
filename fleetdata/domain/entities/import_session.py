"""Domain entity holding a previewed but unconfirmed import."""

from dataclasses import dataclass
from datetime import datetime

from .parsing import ParseResult


@dataclass(frozen=True)
class ImportSession:
    """Parse result retained between preview and confirm."""

    session_id: str
    parse_result: ParseResult
    original_filename: str
    raw_bytes: bytes
    created_at: datetime


__all__ = ["ImportSession"]
