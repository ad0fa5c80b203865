"""Core exception hierarchy for classadapter.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ClassAdapterError for unified error handling.
"""


class ClassAdapterError(Exception):
    """Base exception for all classadapter errors.

    All custom exceptions in the package inherit from this class,
    allowing users to catch all classadapter-specific errors with a single
    except clause.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            cause: Optional underlying exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ConfigError(ClassAdapterError):
    """Raised when an adapter definition cannot be turned into a class.

    This covers malformed directives, invalid manifest files, failed
    rendering and failed installation.
    """

    def __init__(
        self,
        message: str,
        target: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Human-readable error description.
            target: Optional dotted name of the adapter class being built.
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.target = target

    def __str__(self) -> str:
        """Return string representation including the target class."""
        base_msg = super().__str__()
        if self.target:
            return f"{base_msg} (target: {self.target})"
        return base_msg


class RenderError(ConfigError):
    """Raised when a builder received malformed input before rendering.

    Setters record problems instead of raising; rendering reports all of
    them at once.
    """

    def __init__(
        self,
        message: str,
        target: str | None = None,
        problems: list[str] | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the render error.

        Args:
            message: Human-readable error description.
            target: Optional dotted name of the adapter class being built.
            problems: Problems recorded by the builder setters.
            cause: Optional underlying exception.
        """
        super().__init__(message, target, cause)
        self.problems = list(problems or [])


class InstallError(ConfigError):
    """Raised when rendered source cannot be evaluated into a class.

    This includes empty source text, syntax errors, errors raised while
    executing the class body, and a missing completion marker.
    """

    pass


class DuplicateAdapterError(ConfigError):
    """Raised when installing a target that is already registered."""

    pass


class MisuseError(ClassAdapterError, TypeError):
    """Raised when an instance-only operation is invoked on the class.

    This is a programmer error, such as calling ``wrapped_object`` on an
    adapter class instead of an adapter instance.
    """

    pass


class MissingMethodError(MisuseError, AttributeError):
    """Raised when an autoloaded method is looked up on the adapter class.

    Autoload forwarding only works on instances. Looking the name up on
    the class has no wrapped object to forward to.
    """

    def __init__(self, method: str, class_name: str):
        """Initialize the missing method error.

        Args:
            method: Name of the method that was looked up.
            class_name: Dotted path of the adapter class it was looked up on.
        """
        super().__init__(
            f'Can\'t locate method "{method}" via class "{class_name}" '
            f"(autoloaded methods must be called on an instance)"
        )
        self.method = method
        self.class_name = class_name
