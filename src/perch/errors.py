"""Perch exception hierarchy.

Shared by the segment parser, the directory walker, the manifest
assembler, and the router so every module raises and catches the
same types.  Compilation is all-or-nothing: any of these aborts the
whole walk.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the manifest configuration or routes directory is invalid."""


class RouteSyntaxError(PerchError):
    """Malformed bracket or qualifier syntax in a route file name."""

    def __init__(self, file: str, reason: str) -> None:
        self.file = file
        self.reason = reason
        super().__init__(f"Invalid route {file}: {reason}")


class RouteClashError(PerchError):
    """Two routes (or two components) resolve to the same key."""

    def __init__(self, first: str, second: str, kind: str = "pages") -> None:
        self.files = (first, second)
        self.kind = kind
        super().__init__(f"The {first} and {second} {kind} clash")


class MissingIndexError(PerchError):
    """A page depends on an intermediate index component that does not exist."""

    def __init__(self, missing: str, dependent: str) -> None:
        self.missing = missing
        self.dependent = dependent
        super().__init__(f"Missing {missing}, which is required for {dependent} to be valid")


class NotFound(PerchError):  # noqa: N818
    """No route in the manifest matches the path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No route matches {path!r}")
