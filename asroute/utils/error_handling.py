#!/usr/bin/env python3
"""
asroute Error Handling Utilities

Provides the exception hierarchy and consistent error formatting for the
annotation pipeline and the command-line front end.

Error Format Standards:
- WARNING: "⚠ {message}"                 # Warning messages
- ERROR: "✗ {message}"                   # Error messages
- FATAL: "✗ Fatal: {message}"            # Run-terminating errors
- USAGE: "Usage: {usage_help}"           # Usage guidance

Only InputReadError is fatal. Everything raised per line is absorbed by the
annotator and reported through logging when verbose mode is on.
"""

import logging
import sys
from functools import wraps
from typing import Optional, Union

from asroute.utils.exit_codes import ASRouteExitCodes


class ErrorSeverity:
    """Error severity levels for consistent classification"""
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"
    USAGE = "usage"


class AsrouteError(Exception):
    """Base exception class for asroute with standardized error handling"""

    def __init__(self, message: str, severity: str = ErrorSeverity.ERROR,
                 guidance: Optional[str] = None, technical_details: Optional[str] = None):
        self.message = message
        self.severity = severity
        self.guidance = guidance
        self.technical_details = technical_details
        super().__init__(message)


class InputReadError(AsrouteError):
    """Raised when the input stream itself cannot be read"""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to read line. {cause}", ErrorSeverity.FATAL,
                         technical_details=type(cause).__name__)


class MissingIdentifierError(AsrouteError):
    """Raised when a candidate hop line has no [ASN] token"""

    GUIDANCE = ("Check you passed the -a argument to traceroute. "
                "Expected usage 'traceroute -a example.com | asroute'")

    def __init__(self, line: str):
        self.line = line
        super().__init__("Couldn't find [ASN] in line.", ErrorSeverity.WARNING,
                         self.GUIDANCE)


class InvalidIdentifierError(AsrouteError):
    """Raised when the bracketed token does not hold a 32-bit AS number"""

    def __init__(self, token: str, detail: str):
        self.token = token
        self.detail = detail
        super().__init__(f"Failed to parse ASN. {detail}", ErrorSeverity.WARNING)


class ResolverError(AsrouteError):
    """Raised by resolvers when the name service cannot answer"""
    pass


class LookupFailedError(AsrouteError):
    """Raised when the name lookup for a well-formed AS number fails"""

    def __init__(self, as_number: int, cause: Exception):
        self.as_number = as_number
        self.cause = cause
        super().__init__(f"Failed to lookup ASN {as_number}, {cause}",
                         ErrorSeverity.WARNING)


class ValidationError(AsrouteError):
    """Raised when parameter validation fails"""

    def __init__(self, message: str, parameter: str = None, guidance: str = None):
        self.parameter = parameter
        super().__init__(message, ErrorSeverity.ERROR, guidance)


class ConfigurationError(AsrouteError):
    """Raised when configuration is invalid or missing"""
    pass


class ErrorFormatter:
    """Centralized error message formatting with consistent symbols"""

    SYMBOLS = {
        ErrorSeverity.WARNING: "⚠",
        ErrorSeverity.ERROR: "✗",
        ErrorSeverity.FATAL: "✗ Fatal:",
        ErrorSeverity.USAGE: "Usage:"
    }

    @classmethod
    def format_message(cls, message: str, severity: str = ErrorSeverity.ERROR,
                       guidance: Optional[str] = None) -> str:
        """Format a message with the appropriate symbol and structure"""
        symbol = cls.SYMBOLS.get(severity, "•")
        formatted = f"{symbol} {message}"

        if guidance:
            formatted += f"\n  Suggestion: {guidance}"

        return formatted

    @classmethod
    def format_error(cls, error: Union[Exception, AsrouteError],
                     hide_technical: bool = True) -> str:
        """Format an exception with appropriate level of detail"""
        if isinstance(error, AsrouteError):
            formatted = cls.format_message(error.message, error.severity, error.guidance)
            if not hide_technical and error.technical_details:
                formatted += f"\n  Technical: {error.technical_details}"
            return formatted

        if hide_technical:
            return cls.format_message("Unexpected error occurred", ErrorSeverity.ERROR,
                                      "Check logs for details or run with --verbose")
        return cls.format_message(f"Unexpected {type(error).__name__}: {error}",
                                  ErrorSeverity.ERROR)


class ParameterValidator:
    """Parameter validation with range checks and user guidance"""

    @staticmethod
    def validate_timeout(timeout: float, parameter_name: str = "timeout") -> float:
        """Validate timeout values with reasonable ranges"""
        if timeout <= 0:
            raise ValidationError(
                f"Timeout must be positive (>0 seconds), got {timeout}",
                parameter_name,
                "Use a positive number of seconds (e.g., 10)"
            )

        if timeout > 300:
            logger = logging.getLogger('asroute.validation')
            logger.warning(f"Very high timeout ({timeout}s) - a hung lookup blocks the whole trace")

        return timeout


def handle_errors(logger_name: str = None, hide_technical: bool = True):
    """Decorator mapping asroute errors raised by a command to exit codes"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(logger_name or f'asroute.{func.__name__}')

            try:
                return func(*args, **kwargs)
            except InputReadError as e:
                logger.error(e.message)
                return ASRouteExitCodes.INPUT_READ_FAILED
            except (ValidationError, ConfigurationError) as e:
                logger.debug(f"{e.severity.title()} in {func.__name__}: {e.message}")
                print(ErrorFormatter.format_error(e, hide_technical), file=sys.stderr)
                return ASRouteExitCodes.INVALID_USAGE
            except KeyboardInterrupt:
                logger.info(f"Command {func.__name__} interrupted by user")
                return ASRouteExitCodes.SIGINT_TERMINATION

        return wrapper
    return decorator


__all__ = [
    'ErrorSeverity', 'AsrouteError', 'InputReadError', 'MissingIdentifierError',
    'InvalidIdentifierError', 'ResolverError', 'LookupFailedError',
    'ValidationError', 'ConfigurationError', 'ErrorFormatter',
    'ParameterValidator', 'handle_errors'
]
