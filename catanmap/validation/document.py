"""Whole-document validation: placement checks followed by bank checks."""

from __future__ import annotations

import logging

from ..common import settings
from ..models.issues import ValidationReport
from ..models.map_document import MapDocument
from .bank import validate_bank
from .placement import validate_placement

logger = logging.getLogger(__name__)


def validate_document(
    document: MapDocument,
    *,
    randomized: bool = False,
    allow_partial_fixed_tiles: bool | None = None,
) -> ValidationReport:
    """Validate *document* and return a report of every detected issue.

    Args:
        document: The decoded map document.
        randomized: The caller intends randomized assignment, which makes
            ``fixedTiles`` structurally required.
        allow_partial_fixed_tiles: Override the
            ``CATANMAP_ALLOW_PARTIAL_FIXED_TILES`` setting.
    """
    if allow_partial_fixed_tiles is None:
        allow_partial_fixed_tiles = settings.ALLOW_PARTIAL_FIXED_TILES

    report = ValidationReport()
    report.extend(
        validate_placement(
            document,
            require_fixed_tiles=randomized,
            allow_partial_fixed_tiles=allow_partial_fixed_tiles,
        )
    )
    report.extend(validate_bank(document))

    if report.ok:
        logger.info(
            'Map document valid: %d tiles, %d harbours, %d warnings',
            document.tile_count,
            len(document.harbours),
            len(report.warnings),
        )
    else:
        logger.warning(
            'Map document invalid: %d errors (first: %s)',
            len(report.errors),
            report.errors[0],
        )
    return report
