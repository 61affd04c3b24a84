"""Model translation helpers.

Resource models use PascalCase property names (``DisplayName``) while the
QBusiness API uses camelCase (``displayName``). Structured properties are
converted recursively; opaque properties (free-form JSON documents such as a
data source ``Configuration``) are passed through untouched.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional


def to_camel(name: str) -> str:
    return name[:1].lower() + name[1:]


def to_pascal(name: str) -> str:
    return name[:1].upper() + name[1:]


def _convert(value: Any, key_func) -> Any:
    if isinstance(value, Mapping):
        return {key_func(k): _convert(v, key_func) for k, v in value.items()}
    if isinstance(value, list):
        return [_convert(item, key_func) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def to_service_shape(model: Mapping[str, Any], properties: Iterable[str],
                     opaque: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Build service request parameters from model properties.

    Args:
        model: Resource model
        properties: Model property names to include, if present
        opaque: Property names whose values are passed through unconverted

    Returns:
        Dictionary of request parameters, omitting absent properties
    """
    opaque = set(opaque)
    request = {}
    for name in properties:
        value = model.get(name)
        if value is None:
            continue
        request[to_camel(name)] = value if name in opaque else _convert(value, to_camel)
    return request


def from_service_shape(response: Mapping[str, Any], properties: Iterable[str],
                       opaque: Iterable[str] = ()) -> Dict[str, Any]:
    """Build model properties from a service response."""
    opaque = set(opaque)
    model = {}
    for name in properties:
        value = response.get(to_camel(name))
        if value is None:
            continue
        if name in opaque:
            model[name] = value.isoformat() if isinstance(value, datetime) else value
        else:
            model[name] = _convert(value, to_pascal)
    return model


def list_of_models(items: Optional[List[Mapping[str, Any]]], properties: Iterable[str],
                   extra: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """Translate a page of list results into models."""
    properties = list(properties)
    models = []
    for item in items or []:
        model = dict(extra or {})
        model.update(from_service_shape(item, properties))
        models.append(model)
    return models
