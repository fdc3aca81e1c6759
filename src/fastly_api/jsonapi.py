"""JSON:API document encoding and decoding.

Fastly returns most configuration resources as JSON:API documents. Resource
objects are flattened (``id`` plus attributes plus each relationship as
``{"id": ...}``) and validated into the pydantic models from
:mod:`fastly_api.models`.
"""

import json
from typing import Any, TypeVar
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from fastly_api.exceptions import FastlyDecodeError
from fastly_api.models import JSONAPIModel, PaginationLinks

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
PAGE_NUMBER_PARAM = "page[number]"

ModelT = TypeVar("ModelT", bound=JSONAPIModel)


def _load_document(body: bytes | str) -> dict[str, Any]:
    try:
        document = json.loads(body)
    except ValueError as e:
        msg = f"Response body is not valid JSON: {e}"
        raise FastlyDecodeError(msg) from e
    if not isinstance(document, dict):
        msg = "JSON:API document must be an object"
        raise FastlyDecodeError(msg)
    return document


def _flatten_resource(
    resource: Any, model: type[ModelT]
) -> dict[str, Any]:
    if not isinstance(resource, dict):
        msg = f"Expected a resource object, got {type(resource).__name__}"
        raise FastlyDecodeError(msg)

    resource_type = resource.get("type")
    if model.jsonapi_type and resource_type != model.jsonapi_type:
        msg = (
            f"Trying to decode a resource of type '{resource_type}' "
            f"as '{model.jsonapi_type}'"
        )
        raise FastlyDecodeError(msg)

    attributes = resource.get("attributes") or {}
    if not isinstance(attributes, dict):
        msg = f"Resource 'attributes' must be an object, got {type(attributes).__name__}"
        raise FastlyDecodeError(msg)
    relationships = resource.get("relationships") or {}
    if not isinstance(relationships, dict):
        msg = (
            "Resource 'relationships' must be an object, "
            f"got {type(relationships).__name__}"
        )
        raise FastlyDecodeError(msg)

    flat: dict[str, Any] = dict(attributes)
    flat["id"] = resource.get("id")

    for name, relationship in relationships.items():
        data = relationship.get("data") if isinstance(relationship, dict) else None
        if isinstance(data, dict):
            flat[name] = {"id": data.get("id")}
        elif isinstance(data, list):
            if not all(isinstance(item, dict) for item in data):
                msg = f"Relationship '{name}' must hold resource identifier objects"
                raise FastlyDecodeError(msg)
            flat[name] = [{"id": item.get("id")} for item in data]
        else:
            flat[name] = None

    return flat


def _validate(flat: dict[str, Any], model: type[ModelT]) -> ModelT:
    try:
        return model.model_validate(flat)
    except ValidationError as e:
        msg = f"Invalid '{model.jsonapi_type}' resource: {e}"
        raise FastlyDecodeError(msg) from e


def unmarshal_payload(body: bytes | str, model: type[ModelT]) -> ModelT:
    """Decode a single-resource JSON:API document.

    Args:
        body: Raw response body.
        model: Model class to decode into.

    Returns:
        The decoded model.

    Raises:
        FastlyDecodeError: If the body is not a single-resource document of
            the model's type.
    """
    document = _load_document(body)
    data = document.get("data")
    if not isinstance(data, dict):
        msg = "JSON:API document has no single resource in 'data'"
        raise FastlyDecodeError(msg, response=document)
    return _validate(_flatten_resource(data, model), model)


def unmarshal_many_payload(body: bytes | str, model: type[ModelT]) -> list[ModelT]:
    """Decode a JSON:API document holding an array of resources.

    Args:
        body: Raw response body.
        model: Model class to decode each resource into.

    Returns:
        The decoded models, in document order.

    Raises:
        FastlyDecodeError: If 'data' is not an array or a resource is invalid.
    """
    document = _load_document(body)
    data = document.get("data")
    if not isinstance(data, list):
        msg = "JSON:API document has no resource array in 'data'"
        raise FastlyDecodeError(msg, response=document)
    return [_validate(_flatten_resource(item, model), model) for item in data]


def marshal_payload(
    resource_type: str,
    attributes: dict[str, Any] | None = None,
    relationships: dict[str, tuple[str, str]] | None = None,
    resource_id: str | None = None,
) -> dict[str, Any]:
    """Build a JSON:API request document.

    Args:
        resource_type: JSON:API type of the resource.
        attributes: Attribute values; ``None`` values are omitted.
        relationships: Mapping of relationship name to ``(type, id)``.
        resource_id: Primary identifier, omitted when empty.

    Returns:
        Document ready to be serialized as the request body.
    """
    data: dict[str, Any] = {"type": resource_type}
    if resource_id:
        data["id"] = resource_id

    attrs = {k: v for k, v in (attributes or {}).items() if v is not None}
    if attrs:
        data["attributes"] = attrs

    if relationships:
        data["relationships"] = {
            name: {"data": {"type": rel_type, "id": rel_id}}
            for name, (rel_type, rel_id) in relationships.items()
        }

    return {"data": data}


def parse_links(body: bytes | str) -> PaginationLinks:
    """Extract the pagination links of a response body.

    Missing or malformed links decode as empty links, never as an error.

    Args:
        body: Raw response body.

    Returns:
        PaginationLinks with whichever of first, last and next are present.
    """
    try:
        document = json.loads(body)
    except ValueError:
        return PaginationLinks()

    links = document.get("links") if isinstance(document, dict) else None
    if not isinstance(links, dict):
        return PaginationLinks()

    found: dict[str, str] = {}
    for name in ("first", "last", "next"):
        value = links.get(name)
        if isinstance(value, str) and value:
            found[name] = value
    return PaginationLinks(**found)


def page_number_from_link(link: str) -> int | None:
    """Read the ``page[number]`` query parameter of a pagination link.

    Args:
        link: Absolute or relative URL.

    Returns:
        The page number, or None if the link carries no numeric page number.
    """
    values = parse_qs(urlsplit(link).query).get(PAGE_NUMBER_PARAM)
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None
