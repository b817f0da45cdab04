"""
errors.py

Responsibility: every failure cargo-erlangapp reports.

Each error aborts the current command; `cli.main` reports it once and picks the
exit status. Errors caused by an OS error keep it in `cause` and show it in
parentheses after the message.
"""

from __future__ import annotations


class ErlangAppError(RuntimeError):
    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} ({self.cause})"


class InvalidConfig(ErlangAppError):
    pass


class CannotEnumerate(ErlangAppError):
    pass


class ToolchainUnavailable(ErlangAppError):
    pass


class ManifestUnparsable(ErlangAppError):
    pass


class ToolchainCommandFailed(ErlangAppError):
    pass


class ToolchainBuildFailed(ToolchainCommandFailed):
    pass


class ToolchainTestFailed(ToolchainCommandFailed):
    pass


class ToolchainCleanFailed(ToolchainCommandFailed):
    pass


class CannotCreateOutputDir(ErlangAppError):
    pass


class CannotCopyArtifact(ErlangAppError):
    pass


class CannotDeleteOutputDir(ErlangAppError):
    pass
