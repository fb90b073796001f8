"""Conversion between backend documents and typed specs.

Decoding is driven by the target model's schema: keys are matched to field
names or wire aliases case-insensitively, nested models are followed, and
keys the model does not know are passed through untouched so they survive a
decode/encode round trip. Type mismatches surface as ``SchemaMismatch``
naming the offending field path.
"""

from collections.abc import Mapping
from typing import Any, TypeVar, get_args

from pydantic import BaseModel, ValidationError

from integrated_services.errors import SchemaMismatch
from integrated_services.models import Document

ModelT = TypeVar("ModelT", bound=BaseModel)


def _model_types(annotation: Any) -> list[type[BaseModel]]:
    """Pydantic models referenced directly or through a union by ``annotation``."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return [annotation]
    return [
        arg
        for arg in get_args(annotation)
        if isinstance(arg, type) and issubclass(arg, BaseModel)
    ]


def normalize_keys(data: Any, model: type[BaseModel]) -> Any:
    """Rename keys of ``data`` to the wire aliases of ``model``, recursively."""
    if not isinstance(data, Mapping):
        return data

    lookup: dict[str, tuple[str, Any]] = {}
    for name, field in model.model_fields.items():
        alias = field.alias or name
        lookup[name.lower()] = (alias, field.annotation)
        lookup[alias.lower()] = (alias, field.annotation)

    normalized: dict[str, Any] = {}
    for key, value in data.items():
        match = lookup.get(str(key).lower())
        if match is None:
            normalized[key] = value
            continue

        alias, annotation = match
        nested = _model_types(annotation)
        if nested and isinstance(value, Mapping):
            value = normalize_keys(value, nested[0])
        normalized[alias] = value

    return normalized


def decode_spec(document: Any, model: type[ModelT], kind: str | None = None) -> ModelT:
    """Decode an untyped document into ``model``.

    Raises:
        SchemaMismatch: A present field cannot be coerced into its type.
    """
    kind = kind or model.__name__
    try:
        return model.model_validate(normalize_keys(document, model))
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SchemaMismatch(
            "document does not conform to schema",
            kind=kind,
            field=path,
            reason=first["msg"],
        ) from e


def encode_spec(model: BaseModel) -> Document:
    """Encode a typed spec into its wire document."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def carry_extras(model: BaseModel | None) -> dict[str, Any]:
    """Unknown keys a decoded model picked up from its document."""
    if model is None:
        return {}
    return dict(model.model_extra or {})


def merge_document(current: Mapping[str, Any], updates: Mapping[str, Any]) -> Document:
    """Replace top-level keys of ``current`` with ``updates``, keeping the rest.

    Keys match case-insensitively, like decoding does. A replaced value is
    written under the first spelling found in ``current`` and every other
    case variant of that key is dropped.
    """
    pending = {str(key).lower(): (key, value) for key, value in updates.items()}
    replaced: set[str] = set()

    merged: dict[str, Any] = {}
    for key, value in current.items():
        folded = str(key).lower()
        if folded not in pending:
            merged[key] = value
        elif folded not in replaced:
            merged[key] = pending[folded][1]
            replaced.add(folded)

    for folded, (key, value) in pending.items():
        if folded not in replaced:
            merged[key] = value
    return merged
