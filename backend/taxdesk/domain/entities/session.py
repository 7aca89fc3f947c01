"""Domain enums describing the state of the table session."""

from enum import Enum


class LoadState(str, Enum):
    """Lifecycle of the initial (or retried) parallel load."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SubmitOutcome(str, Enum):
    """Result of one submit attempt on the edit transaction."""

    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    IGNORED = "ignored"
