"""Enveil custom exceptions."""

from __future__ import annotations


class EnveilError(Exception):
    """Base class for scan and protection errors tied to a path."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.path:
            msg += f": {self.path}"
        return msg


class PathNotFound(EnveilError):
    """Raised when the scan root does not exist."""


class NotADirectory(EnveilError):
    """Raised when the scan root exists but is not a directory."""


class SourceNotFound(EnveilError):
    """Raised when a file to protect does not exist."""


class QuarantineUnavailable(EnveilError):
    """Raised when the quarantine directory cannot be created."""


class ReadFailure(EnveilError):
    """Raised when a file cannot be read."""


class EncryptionFailure(EnveilError):
    """Raised on key, cipher or authentication errors."""


class WriteFailure(EnveilError):
    """Raised when a quarantine artifact cannot be written."""


class EnveilConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg
