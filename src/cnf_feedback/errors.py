"""Application-level exception types for cnf-feedback."""

from __future__ import annotations


class CnfFeedbackError(Exception):
    """Base exception for cnf-feedback."""


class ConfigurationError(CnfFeedbackError):
    """Raised when settings cannot be turned into a working provider."""


class FeedbackUnavailableError(CnfFeedbackError):
    """Base exception for outcomes that yield no feedback.

    These never reach the user. The provider boundary converts them into an
    absent result.
    """


class UtilityNotFoundError(FeedbackUnavailableError):
    """Raised when no executable helper exists at any well-known path."""


class ProcessLaunchError(FeedbackUnavailableError):
    """Raised when the helper process could not be spawned."""


class UnsupportedPlatformError(FeedbackUnavailableError):
    """Raised when the helper is not applicable on this platform."""


class TargetNotApplicableError(FeedbackUnavailableError):
    """Raised when the failed command is empty or names a script file."""
