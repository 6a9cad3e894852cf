from __future__ import annotations


class RunNotifierError(Exception):
    pass


class EngineExecutionError(RunNotifierError):
    """The execution engine failed while running the step graph."""


class UploadError(RunNotifierError):
    """Persisting a run artifact failed."""


class NotificationError(RunNotifierError):
    pass


class DirectoryError(NotificationError):
    """A team, channel or member lookup against the directory failed."""


class UserNotFoundError(DirectoryError):
    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Can not find user '{identifier}', check the email address (case sensitive)"
        )
        self.identifier = identifier


class DispatchError(NotificationError):
    """Posting a message to the channel failed."""


class ConfigError(RunNotifierError, ValueError):
    pass
