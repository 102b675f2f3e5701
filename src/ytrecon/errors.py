class ReconError(RuntimeError):
    """Base error type."""


class ConfigError(ReconError):
    """Config or flag contract violation."""


class CatalogError(ReconError):
    """Metadata dump could not be opened or read."""


class ScanError(ReconError):
    """Target directory could not be listed."""


class DumpError(ReconError):
    """missing.txt could not be written."""


class CatalogLineError(ReconError):
    """One metadata line is not a usable JSON object."""

    def __init__(self, line_no: int, reason: str) -> None:
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


class DirectoryNameError(ReconError):
    """A folder name does not follow the "[date] [id] title" layout."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name!r}: {reason}")
        self.name = name
        self.reason = reason
