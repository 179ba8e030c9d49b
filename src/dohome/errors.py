"""Exceptions raised by dohome."""

from __future__ import annotations

from dohome.models.enums import ErrorCode


class DoHomeError(Exception):
    """Base class for all dohome errors."""


class ConfigurationError(DoHomeError, ValueError):
    """Invalid listener or settings configuration."""


class MalformedMessageError(DoHomeError, ValueError):
    """A datagram or TCP reply that does not follow the wire format."""


class DeviceConnectionError(DoHomeError, ConnectionError):
    """The TCP control channel to a device failed."""


class DeviceCommandError(DoHomeError):
    """A device answered a command with a non-zero result code."""

    def __init__(self, code: int, command: int | None = None) -> None:
        try:
            self.code: ErrorCode | int = ErrorCode(code)
            label = self.code.name
        except ValueError:
            self.code = code
            label = f"unknown error {code}"
        self.command = command
        suffix = f" (command {command})" if command is not None else ""
        super().__init__(f"Device rejected command: {label}{suffix}")
