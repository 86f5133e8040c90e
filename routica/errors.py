class AnalysisError(Exception):
    """Raised by analyze_project when a run cannot produce a result."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FatalDirectoryError(AnalysisError):
    def __init__(self, directory: str, reason: str):
        super().__init__(f"Cannot read project directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class FileError(AnalysisError):
    """A failure scoped to one source file. The run skips the file and goes on."""

    kind = "file"

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileReadError(FileError):
    kind = "read"


class ParseError(FileError):
    kind = "parse"
