"""Decoding and serialization helpers for map documents.

Thin wrappers around Pydantic so that collaborators (file loaders, editors,
renderers) can decode a raw document or dump any result model without
depending on Pydantic internals.  Reading files is left to the caller.
"""

from __future__ import annotations

import json
import typing

import pydantic
import yaml

from .issues import ErrorKind, MalformedDocument, MapIssue
from .map_document import MapDocument, RawMapDocument


def decode_map_document(data: typing.Any) -> MapDocument:
    """Decode a parsed mapping into a :class:`MapDocument`.

    Raises:
        MalformedDocument: one ``malformed_document`` issue per schema error.
    """
    try:
        raw = RawMapDocument.model_validate(data)
    except pydantic.ValidationError as exc:
        raise MalformedDocument(_issues_from_validation_error(exc)) from exc
    return MapDocument.from_raw(raw)


def map_document_from_json(json_str: str) -> MapDocument:
    """Parse a JSON string into a :class:`MapDocument`."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise MalformedDocument(
            [
                MapIssue(
                    kind=ErrorKind.MALFORMED_DOCUMENT,
                    message=f'invalid JSON: {exc.msg}',
                    details={'line': exc.lineno, 'column': exc.colno},
                )
            ]
        ) from exc
    return decode_map_document(data)


def map_document_from_yaml(yaml_str: str) -> MapDocument:
    """Parse a YAML string into a :class:`MapDocument`."""
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise MalformedDocument(
            [
                MapIssue(
                    kind=ErrorKind.MALFORMED_DOCUMENT, message=f'invalid YAML: {exc}'
                )
            ]
        ) from exc
    return decode_map_document(data)


def encode_map_document(document: MapDocument) -> dict[str, typing.Any]:
    """Return the wire-format mapping (camelCase keys) for *document*."""
    return document.to_raw().model_dump(mode='json', by_alias=True, exclude_none=True)


def serialize_model(model: pydantic.BaseModel) -> dict[str, typing.Any]:
    """Return a JSON-serializable dict representation of any Pydantic model."""
    return model.model_dump(mode='json')


def serialize_to_json(model: pydantic.BaseModel) -> str:
    """Serialize any Pydantic model to a compact JSON string."""
    return model.model_dump_json()


def map_json_schema() -> dict[str, typing.Any]:
    """Return the JSON schema of the wire format."""
    return RawMapDocument.model_json_schema(by_alias=True)


def _issues_from_validation_error(exc: pydantic.ValidationError) -> list[MapIssue]:
    issues: list[MapIssue] = []
    for error in exc.errors():
        loc = error['loc']
        field = str(loc[0]) if loc else None
        index = loc[1] if len(loc) > 1 and isinstance(loc[1], int) else None
        issues.append(
            MapIssue(
                kind=ErrorKind.MALFORMED_DOCUMENT,
                message=error['msg'],
                field=field,
                index=index,
                details={'loc': [str(part) for part in loc], 'type': error['type']},
            )
        )
    return issues
