"""cnf-feedback - explain unknown commands and predict the fix."""

from loguru import logger

from .builtin import CommandNotFoundProvider
from .framework import FeedbackFramework
from .parser import parse_output
from .session import SuggestionSession
from .types import FeedbackItem, FeedbackLayout, FeedbackRequest, ParseResult

__version__ = "0.1.0"

# Silent inside a host shell until configure_logging turns it on.
logger.disable(__name__)

__all__ = [
    "CommandNotFoundProvider",
    "FeedbackFramework",
    "FeedbackItem",
    "FeedbackLayout",
    "FeedbackRequest",
    "ParseResult",
    "SuggestionSession",
    "parse_output",
]
