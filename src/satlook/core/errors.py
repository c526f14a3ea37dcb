"""Error taxonomy surfaced to callers of the tracking pipeline.

Every failure the pipeline can report derives from :class:`TrackingError`,
so a host can catch one type and show ``str(error)`` to the user.
"""

from __future__ import annotations


class TrackingError(Exception):
    """Base class for all user-facing pipeline failures."""

    kind: str = "TrackingError"


class UnrecognizedFormatError(TrackingError):
    """Input text is neither a TLE nor an OMM message."""

    kind = "UnrecognizedFormat"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Invalid format. Please enter either TLE (Two-Line Element) or "
            "OMM (Orbital Mean-Elements Message) data."
        )


class _ValidationError(TrackingError):
    """Input was recognized but failed structural validation."""

    label = "Invalid input"

    def __init__(self, reasons: list[str] | tuple[str, ...]) -> None:
        self.reasons = tuple(reasons)
        detail = "; ".join(self.reasons) if self.reasons else "validation failed"
        super().__init__(f"{self.label}: {detail}")


class InvalidTleError(_ValidationError):
    """A TLE line pair failed validation or could not be decoded."""

    kind = "InvalidTle"
    label = "Invalid TLE format"


class InvalidOmmError(_ValidationError):
    """An OMM record failed validation or could not be decoded."""

    kind = "InvalidOmm"
    label = "Invalid OMM format"


class PropagationError(TrackingError):
    """The SGP4 propagator reported a named failure code.

    Attributes:
        code: SGP4 error code (1-6 for known failures).
        message: Human-readable description of the code.
    """

    kind = "PropagationError"

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Satellite propagation error: {message}")


class TransformFailure(TrackingError):
    """Propagation succeeded but produced non-finite coordinates."""

    kind = "TransformFailure"
