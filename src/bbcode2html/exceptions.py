#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbcode2html library.

Malformed BBCode is never an error: the parser degrades bad markup to literal
text. The exceptions here cover the few conditions that genuinely cannot
produce output, plus configuration mistakes made by the caller.

Exception Hierarchy
-------------------
- Bbcode2HtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - EncodingError (input is not valid UTF-8 text)

  - ResourceLimitError (input exceeds a configured bound)
    - InputTooLargeError (input longer than max_input_size in reject mode)

  - RenderingError (output generation failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class Bbcode2HtmlError(Exception):
    """Base exception class for all bbcode2html-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Bbcode2HtmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when the wrong options class is handed to a component.

    For example, passing ``HtmlRendererOptions`` to ``BBCodeParser``.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class EncodingError(Bbcode2HtmlError):
    """Exception raised when input is not valid UTF-8 text.

    The engine never guesses or repairs an encoding. Bytes that fail strict
    UTF-8 decoding, and strings holding lone surrogates, are rejected.

    Parameters
    ----------
    message : str
        Description of the encoding failure
    position : int, optional
        Offset of the first offending byte or character
    original_error : Exception, optional
        The underlying ``UnicodeError``

    """

    def __init__(self, message: str, position: int | None = None, original_error: Exception | None = None):
        """Initialize the encoding error."""
        super().__init__(message, original_error)
        self.position = position


class ResourceLimitError(Bbcode2HtmlError):
    """Base exception for inputs that exceed a configured resource bound.

    Parameters
    ----------
    message : str
        Description of the violated limit
    limit : int, optional
        The configured limit
    actual : int, optional
        The measured value that exceeded it

    """

    def __init__(
        self,
        message: str,
        limit: int | None = None,
        actual: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the resource limit error."""
        super().__init__(message, original_error)
        self.limit = limit
        self.actual = actual


class InputTooLargeError(ResourceLimitError):
    """Exception raised when input exceeds ``max_input_size`` in reject mode."""

    def __init__(self, limit: int, actual: int, message: str | None = None):
        """Initialize the input too large error."""
        if message is None:
            message = f"Input of {actual} characters exceeds the maximum of {limit}"
        super().__init__(message, limit=limit, actual=actual)


class RenderingError(Bbcode2HtmlError):
    """Exception raised when output rendering fails.

    Only reachable with hand-built trees: every tree produced by the parser
    renders successfully.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(Bbcode2HtmlError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        self.original_import_error = original_import_error
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
            message = f"{feature_name} requires the following packages: {pkg_list}\nInstall with: pip install {packages_str}"
        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages


__all__ = [
    "Bbcode2HtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "EncodingError",
    "ResourceLimitError",
    "InputTooLargeError",
    "RenderingError",
    "DependencyError",
]
