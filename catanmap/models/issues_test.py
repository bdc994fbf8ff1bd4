"""Unit tests for validation issues and reports."""

from __future__ import annotations

import unittest

from catanmap.models.issues import (
    ErrorKind,
    InvalidCoordinate,
    MapError,
    MapIssue,
    MapValidationError,
    Severity,
    ValidationReport,
    skipped,
)


def _issue(kind: ErrorKind, severity: Severity = Severity.ERROR) -> MapIssue:
    return MapIssue(kind=kind, severity=severity, message=str(kind))


class TestMapIssue(unittest.TestCase):
    """Tests for MapIssue."""

    def test_defaults_to_error(self) -> None:
        issue = MapIssue(kind=ErrorKind.OUT_OF_BOUNDS, message='x')
        self.assertEqual(issue.severity, Severity.ERROR)
        self.assertEqual(issue.details, {})

    def test_str_names_field_and_index(self) -> None:
        issue = MapIssue(
            kind=ErrorKind.OUT_OF_BOUNDS,
            message='outside',
            field='tilePlacement',
            index=4,
        )
        self.assertEqual(str(issue), 'out_of_bounds at tilePlacement[4]: outside')

    def test_skipped_marker_is_warning(self) -> None:
        marker = skipped('bounds check', 'bad mapSize', 'tilePlacement')
        self.assertEqual(marker.kind, ErrorKind.SKIPPED_DUE_TO_PRIOR_ERROR)
        self.assertEqual(marker.severity, Severity.WARNING)
        self.assertEqual(marker.details['check'], 'bounds check')


class TestValidationReport(unittest.TestCase):
    """Tests for ValidationReport."""

    def test_empty_report_is_ok(self) -> None:
        report = ValidationReport()
        self.assertTrue(report.ok)
        report.raise_for_errors()  # should not raise

    def test_warnings_do_not_fail(self) -> None:
        report = ValidationReport(
            issues=[_issue(ErrorKind.INCOMPLETE_FIXED_TILES, Severity.WARNING)]
        )
        self.assertTrue(report.ok)
        self.assertEqual(len(report.warnings), 1)
        self.assertEqual(report.errors, [])

    def test_errors_fail(self) -> None:
        report = ValidationReport()
        report.extend(
            [_issue(ErrorKind.BANK_MISMATCH), _issue(ErrorKind.SHAPE_MISMATCH)]
        )
        self.assertFalse(report.ok)
        self.assertEqual(len(report.of_kind(ErrorKind.BANK_MISMATCH)), 1)
        with self.assertRaises(MapValidationError) as ctx:
            report.raise_for_errors()
        self.assertEqual(len(ctx.exception.issues), 2)


class TestExceptions(unittest.TestCase):
    """Tests for the exception hierarchy."""

    def test_invalid_coordinate(self) -> None:
        exc = InvalidCoordinate(5, -1, 3, 3)
        self.assertIsInstance(exc, MapError)
        self.assertIsInstance(exc, ValueError)
        self.assertEqual((exc.x, exc.y), (5, -1))
        self.assertEqual(exc.issues[0].kind, ErrorKind.INVALID_COORDINATE)
        self.assertIn('3x3', str(exc))


if __name__ == '__main__':
    unittest.main()
