class ConverterError(Exception):
    """Base class for errors raised by the converter."""


class ConfigError(ConverterError):
    pass


class BookFileError(ConverterError):
    """A source file could not be decoded into book entries."""

    def __init__(self, path, reason):
        super().__init__(f"Invalid or empty JSON file: {path} ({reason})")
        self.path = path
        self.reason = reason


class CleanupError(ConverterError):
    """A temporary file could not be removed after all retries."""

    def __init__(self, path, attempts):
        super().__init__(f"Could not delete temp file after {attempts} attempts: {path}")
        self.path = path
        self.attempts = attempts
