"""Unit tests for the tile bank validator."""

from __future__ import annotations

import typing
import unittest

from catanmap.models.issues import ErrorKind
from catanmap.models.map_document import MapDocument
from catanmap.models.presets import standard_map_document
from catanmap.models.serializers import decode_map_document
from catanmap.validation.bank import validate_bank


def _doc(**overrides: typing.Any) -> MapDocument:
    data: dict[str, typing.Any] = {
        'tileBank': {'desert': 1, 'field': 2},
        'mapSize': [3, 3],
        'tilePlacement': [[0, 0], [1, 0], [0, 1]],
        'defaultTiles': ['desert', 'field', 'field'],
        'harbourPlacement': [],
        'defaultHarbours': [],
    }
    data.update(overrides)
    return decode_map_document(data)


class TestBankTotals(unittest.TestCase):
    """Bank counts against the number of placed tiles."""

    def test_matching_bank(self) -> None:
        self.assertEqual(validate_bank(_doc()), [])

    def test_standard_map(self) -> None:
        self.assertEqual(validate_bank(standard_map_document()), [])

    def test_bank_too_small(self) -> None:
        issues = validate_bank(
            _doc(tileBank={'desert': 1, 'field': 1}, defaultTiles=['desert'] * 3)
        )
        totals = [i for i in issues if i.field == 'tileBank']
        self.assertEqual(len(totals), 1)
        self.assertEqual(totals[0].kind, ErrorKind.BANK_MISMATCH)
        self.assertEqual(totals[0].details, {'expected': 3, 'actual': 2})

    def test_bank_too_large_no_slack(self) -> None:
        """Spare bank tiles are an error, not slack."""
        issues = validate_bank(_doc(tileBank={'desert': 1, 'field': 2, 'forest': 1}))
        totals = [i for i in issues if i.field == 'tileBank']
        self.assertEqual(totals[0].details, {'expected': 3, 'actual': 4})

    def test_negative_count(self) -> None:
        issues = validate_bank(_doc(tileBank={'desert': 2, 'field': 2, 'mesa': -1}))
        negative = [i for i in issues if i.field == 'tileBank.mesa']
        self.assertEqual(len(negative), 1)
        self.assertEqual(negative[0].kind, ErrorKind.BANK_MISMATCH)


class TestDefaultTileCounts(unittest.TestCase):
    """defaultTiles must use the bank's quantities."""

    def test_default_tiles_disagree_with_bank(self) -> None:
        issues = validate_bank(_doc(defaultTiles=['desert', 'desert', 'field']))
        by_resource = {
            i.details['resource']: i.details
            for i in issues
            if i.field == 'defaultTiles'
        }
        self.assertEqual(by_resource['desert']['actual'], 2)
        self.assertEqual(by_resource['field']['actual'], 1)

    def test_skipped_when_lengths_differ(self) -> None:
        issues = validate_bank(_doc(defaultTiles=['desert']))
        self.assertEqual(
            [i.kind for i in issues], [ErrorKind.SKIPPED_DUE_TO_PRIOR_ERROR]
        )


class TestFixedCounts(unittest.TestCase):
    """Fixed tiles may not exceed the bank."""

    def test_overconstrained(self) -> None:
        issues = validate_bank(_doc(fixedTiles={'desert': [0, 1]}))
        self.assertEqual(
            [i.kind for i in issues], [ErrorKind.OVERCONSTRAINED_FIXED_TILES]
        )
        self.assertEqual(issues[0].details['fixed'], 2)
        self.assertEqual(issues[0].details['available'], 1)

    def test_fixed_within_bank(self) -> None:
        self.assertEqual(validate_bank(_doc(fixedTiles={'field': [1, 2]})), [])


if __name__ == '__main__':
    unittest.main()
