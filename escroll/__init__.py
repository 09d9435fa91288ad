"""Pull every hit of an Elasticsearch search through the scroll API."""

from .cli import main
from .errors import (
    ConnectivityError,
    DecodeError,
    FetchError,
    PolicyViolation,
    ScrollCancelled,
    ScrollError,
    ValidationError,
)
from .models import Page, ScrollState, SearchRequest
from .scroll import ScrollSession
from .transport import Transport

__all__ = [
    "main",
    "ScrollSession",
    "Transport",
    "SearchRequest",
    "ScrollState",
    "Page",
    "ScrollError",
    "PolicyViolation",
    "ValidationError",
    "ConnectivityError",
    "FetchError",
    "DecodeError",
    "ScrollCancelled",
]
