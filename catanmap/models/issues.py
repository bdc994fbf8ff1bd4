"""Validation issues, reports and exceptions.

Validators never stop at the first problem: each check appends
:class:`MapIssue` entries to a :class:`ValidationReport`.  Exceptions are
reserved for the resolver's refusal of out-of-bounds input, decode failures
and callers that explicitly ask a report to raise.
"""

from __future__ import annotations

import enum
import typing

import pydantic


class ErrorKind(enum.StrEnum):
    """Kinds of problem a map document can have."""

    INVALID_COORDINATE = 'invalid_coordinate'
    BANK_MISMATCH = 'bank_mismatch'
    DUPLICATE_TILE_POSITION = 'duplicate_tile_position'
    CONFLICTING_FIXED_TILE = 'conflicting_fixed_tile'
    INCOMPLETE_FIXED_TILES = 'incomplete_fixed_tiles'
    OVERCONSTRAINED_FIXED_TILES = 'overconstrained_fixed_tiles'
    SHAPE_MISMATCH = 'shape_mismatch'  # array lengths or mapSize shape
    OUT_OF_BOUNDS = 'out_of_bounds'
    SKIPPED_DUE_TO_PRIOR_ERROR = 'skipped_due_to_prior_error'
    MALFORMED_DOCUMENT = 'malformed_document'  # rejected while decoding


class Severity(enum.StrEnum):
    ERROR = 'error'
    WARNING = 'warning'


class MapIssue(pydantic.BaseModel):
    """A single problem found in a map document."""

    model_config = pydantic.ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    severity: Severity = Severity.ERROR
    field: str | None = None  # wire field name, e.g. 'tilePlacement'
    index: int | None = None  # offending tile/harbour ID or array index
    details: dict[str, typing.Any] = pydantic.Field(default_factory=dict)

    def __str__(self) -> str:
        where = self.field or 'document'
        if self.index is not None:
            where = f'{where}[{self.index}]'
        return f'{self.kind} at {where}: {self.message}'


def skipped(check: str, reason: str, field: str | None = None) -> MapIssue:
    """Return a marker for a check that could not run safely."""
    return MapIssue(
        kind=ErrorKind.SKIPPED_DUE_TO_PRIOR_ERROR,
        severity=Severity.WARNING,
        message=f'{check} skipped: {reason}',
        field=field,
        details={'check': check},
    )


class ValidationReport(pydantic.BaseModel):
    """Every issue detected in one validation pass, in detection order."""

    issues: list[MapIssue] = pydantic.Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no error-severity issue was found."""
        return not self.errors

    @property
    def errors(self) -> list[MapIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[MapIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def of_kind(self, kind: ErrorKind) -> list[MapIssue]:
        """Return all issues of the given kind."""
        return [i for i in self.issues if i.kind == kind]

    def extend(self, issues: typing.Iterable[MapIssue]) -> None:
        self.issues.extend(issues)

    def raise_for_errors(self) -> None:
        """Raise :class:`MapValidationError` if the report holds any error."""
        if not self.ok:
            raise MapValidationError(self.errors)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MapError(ValueError):
    """Base class for map document errors. Carries the underlying issues."""

    def __init__(self, issues: list[MapIssue]) -> None:
        self.issues = issues
        super().__init__('; '.join(str(i) for i in issues) or 'invalid map')


class MalformedDocument(MapError):
    """The raw document does not match the wire schema."""


class MapValidationError(MapError):
    """A validation report contained errors."""


class InvalidCoordinate(MapError):
    """A grid coordinate outside the map was given to the resolver."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(
            [
                MapIssue(
                    kind=ErrorKind.INVALID_COORDINATE,
                    message=(
                        f'({x}, {y}) is outside the {width}x{height} grid'
                    ),
                    details={'coordinate': [x, y], 'map_size': [width, height]},
                )
            ]
        )
