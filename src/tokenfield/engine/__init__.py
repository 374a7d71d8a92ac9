"""Filtering gate, validation pass, replacement engine and their façade."""

from .base import EngineHooks, EventBus, FilterOutcome, ValidationReport
from .capabilities import (
    CallableValidator,
    ResultCallback,
    StaticSuggestionSource,
    SuggestionSource,
    Validator,
)
from .filtering import (
    DEFAULT_THRESHOLD,
    active_token_span,
    enough_to_filter,
    normalize_threshold,
)
from .manager import AutoCompleteEngine
from .replacement import replace_active_token, replace_whole_text
from .suggestions import QuerySequencer, QueryTicket
from .validation_pass import validate_tokens, validate_whole_text

__all__ = [
    "AutoCompleteEngine",
    "EngineHooks",
    "EventBus",
    "FilterOutcome",
    "ValidationReport",
    "Validator",
    "SuggestionSource",
    "ResultCallback",
    "CallableValidator",
    "StaticSuggestionSource",
    "DEFAULT_THRESHOLD",
    "enough_to_filter",
    "active_token_span",
    "normalize_threshold",
    "replace_active_token",
    "replace_whole_text",
    "QuerySequencer",
    "QueryTicket",
    "validate_tokens",
    "validate_whole_text",
]
