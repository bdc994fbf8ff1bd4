"""Unit tests for whole-document validation."""

from __future__ import annotations

import typing
import unittest
import unittest.mock

from catanmap.common import settings
from catanmap.models.issues import ErrorKind, MapValidationError, Severity
from catanmap.models.map_document import MapDocument
from catanmap.models.presets import standard_map_document
from catanmap.models.serializers import decode_map_document
from catanmap.validation.document import validate_document


def _doc(**overrides: typing.Any) -> MapDocument:
    data: dict[str, typing.Any] = {
        'tileBank': {'desert': 1, 'field': 2},
        'mapSize': [3, 3],
        'tilePlacement': [[0, 0], [1, 0], [0, 1]],
        'defaultTiles': ['desert', 'field', 'field'],
        'fixedTiles': {'desert': [0]},
        'harbourPlacement': [{'position': [0, 0], 'side': 'ne'}],
        'defaultHarbours': ['wheat'],
    }
    data.update(overrides)
    return decode_map_document(data)


class TestValidateDocument(unittest.TestCase):
    """Tests for validate_document()."""

    def test_standard_map_ok(self) -> None:
        report = validate_document(standard_map_document())
        self.assertTrue(report.ok)

    def test_placement_and_bank_errors_accumulate(self) -> None:
        doc = _doc(
            tileBank={'desert': 1, 'field': 5},
            tilePlacement=[[0, 0], [0, 0], [1, 1]],
        )
        report = validate_document(doc)
        self.assertFalse(report.ok)
        self.assertEqual(len(report.of_kind(ErrorKind.DUPLICATE_TILE_POSITION)), 1)
        self.assertGreaterEqual(len(report.of_kind(ErrorKind.BANK_MISMATCH)), 1)
        with self.assertRaises(MapValidationError):
            report.raise_for_errors()

    def test_partial_fixed_tiles_follows_settings(self) -> None:
        with unittest.mock.patch.object(settings, 'ALLOW_PARTIAL_FIXED_TILES', False):
            report = validate_document(_doc())
        self.assertFalse(report.ok)
        self.assertEqual(report.errors[0].kind, ErrorKind.INCOMPLETE_FIXED_TILES)

    def test_partial_fixed_tiles_default_is_warning(self) -> None:
        report = validate_document(_doc(), allow_partial_fixed_tiles=True)
        self.assertTrue(report.ok)
        self.assertEqual(report.warnings[0].severity, Severity.WARNING)

    def test_randomized_requires_fixed_tiles_object(self) -> None:
        doc = _doc(fixedTiles=None)
        self.assertEqual(validate_document(doc).issues, [])
        report = validate_document(
            doc, randomized=True, allow_partial_fixed_tiles=False
        )
        self.assertEqual(
            [i.kind for i in report.errors], [ErrorKind.INCOMPLETE_FIXED_TILES]
        )


if __name__ == '__main__':
    unittest.main()
