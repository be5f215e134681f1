"""JSON-ready dictionaries of extraction results, as printed by ``--json``."""

import typing
from dataclasses import fields, is_dataclass

# names the dataclass a dictionary was built from
TYPE_KEY = "_type"


def _to_json(value: typing.Any) -> typing.Any:
    if is_dataclass(value) and not isinstance(value, type):
        payload = {TYPE_KEY: type(value).__name__}
        for item in fields(value):
            payload[item.name] = _to_json(getattr(value, item.name))
        return payload
    if isinstance(value, dict):
        return {str(key): _to_json(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_json(item) for item in value]
    # str, int and None pass through
    return value


def serialize_extraction(value: typing.Any) -> dict:
    """
    Convert an extraction result into a dictionary ``json.dumps`` accepts.

    Dataclasses keep their field names and carry their class name under
    ``_type``. Anything that does not serialize to a dictionary is wrapped
    as ``{"value": ...}``.
    """
    payload = _to_json(value)
    return payload if isinstance(payload, dict) else {"value": payload}
