"""Exception hierarchy for the originals renamer."""


class RenamerError(Exception):
    """Base class for all renamer errors.

    ``stage`` names the pipeline stage that failed so the CLI can report it.
    """

    stage = 'run'


class ConfigurationError(RenamerError):
    stage = 'config'


class OriginalsDirectoryError(RenamerError):
    stage = 'scan'


class MalformedTimestamp(RenamerError):
    """A timestamp did not match the expected source format."""

    stage = 'reconcile'

    def __init__(self, raw, source_format: str, context: str = ''):
        self.raw = raw
        self.source_format = source_format
        self.context = context
        message = f"Malformed {source_format} timestamp {raw!r}"
        if context:
            message += f" ({context})"
        super().__init__(message)


class ExtractionFailed(RenamerError):
    """Capture time could not be read from a local file."""

    stage = 'extract'

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read capture time from {path}: {reason}")


class RemoteCallFailed(RenamerError):
    """Transport failure or non-success HTTP status from the listing service."""

    stage = 'remote'


class RemoteApiError(RenamerError):
    """The listing service answered with ``stat != "ok"``."""

    stage = 'remote'

    def __init__(self, method: str, message: str, code=None):
        self.method = method
        self.api_message = message
        self.code = code
        super().__init__(f"Unsuccessful call to {method}: {message}")


class RenameError(RenamerError):
    """Per-plan failure while applying renames; never fatal to the batch."""

    stage = 'apply'


class RenameConflict(RenameError):
    def __init__(self, target):
        self.target = target
        super().__init__(f"Target already exists: {target}")


class SourceMissing(RenameError):
    def __init__(self, source):
        self.source = source
        super().__init__(f"Source no longer exists: {source}")


class InvalidTargetName(RenameError):
    def __init__(self, title):
        self.title = title
        super().__init__(f"Remote title cannot be used as a file name: {title!r}")


class RenameFailed(RenameError):
    pass
