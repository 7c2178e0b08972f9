from dataclasses import dataclass


@dataclass
class ErrorVal:
    """A runtime condition: a category name and a human readable message."""
    name: str
    message: str


class KarouError(Exception):
    """Exception type used to propagate Karou runtime conditions."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"KarouError: {err.name}: {err.message}")
        self.err = err


@dataclass(frozen=True)
class ParseError:
    """A recoverable syntax error collected by the parser."""
    line: int
    message: str

    def __str__(self) -> str:
        return f"Line {self.line}: {self.message}"
