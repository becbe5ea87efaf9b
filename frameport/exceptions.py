"""
Custom exception hierarchy for frameport.

Why a custom hierarchy:
- Callers can catch specific failures (e.g., SchemaError vs SinkError)
  without relying on generic ValueError/RuntimeError.
- Messages carry the location of the problem (source line, row index,
  batch index) so a bad record can be found without re-running.

Missing sources and clobbered destinations use the builtin
``FileNotFoundError`` / ``FileExistsError`` directly.
"""


class FrameportError(Exception):
    """Base exception for all frameport errors."""


class SchemaError(FrameportError, ValueError):
    """Raised when a row does not match the frame's column layout.

    Attributes:
        line: 1-based line in the source file, when the row came from a file.
        row: 0-based index of the offending row.
    """

    def __init__(self, message: str, *, line: int | None = None, row: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.row = row


class ParsingError(FrameportError):
    """Raised when a source file cannot be tokenized.

    For example, an unterminated quoted field in a CSV file.
    """

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class ExportError(FrameportError):
    """Raised when writing an output file fails.

    For example, permission errors or a disk running full mid-write.
    """


class SinkError(FrameportError):
    """Raised when a batch of rows cannot be inserted into a destination table.

    Attributes:
        batch_index: 0-based index of the failing batch.
    """

    def __init__(self, message: str, *, batch_index: int | None = None) -> None:
        super().__init__(message)
        self.batch_index = batch_index


class OptionsError(FrameportError, ValueError):
    """Raised when adapter options are invalid or unknown."""


class UnsupportedOperationError(FrameportError, NotImplementedError):
    """Raised for an output path that is documented but not implemented."""
