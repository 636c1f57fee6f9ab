# src/markdown_tasks/core/errors.py

"""
Error taxonomy.

Lower layers translate library exceptions (OSError, JSON, openai SDK) into these
and chain the cause. Only the CLI catches them: one line on stderr, exit code 1.
"""

from __future__ import annotations


class TasksError(Exception):
    """Base class for every failure the CLI reports to the user."""

    exit_code = 1


class ConfigReadError(TasksError):
    """The persisted configuration exists but cannot be read or parsed."""


class ConfigWriteError(TasksError):
    """The configuration could not be persisted (or the path was rejected)."""


class MissingApiKeyError(TasksError):
    def __init__(self, message: str = "OPENROUTER_API_KEY is not set.") -> None:
        super().__init__(message)


class NoTargetFileError(TasksError):
    def __init__(
        self,
        message: str = (
            "No file path provided. Use --file <PATH>, or set a global default with: "
            "tasks config --global-file <PATH>"
        ),
    ) -> None:
        super().__init__(message)


class ClientError(TasksError):
    """The completion request failed."""


class HttpError(ClientError):
    def __init__(self, status: int, body_snippet: str = "") -> None:
        self.status = status
        self.body_snippet = body_snippet
        msg = f"LLM API returned HTTP {status}"
        if body_snippet:
            msg = f"{msg}: {body_snippet}"
        super().__init__(msg)


class NetworkError(ClientError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"LLM network error: {cause}")


class MalformedResponseError(ClientError):
    """The response did not carry choices[0].message.content."""


class WriteError(TasksError):
    """The task line could not be appended to the target file."""
