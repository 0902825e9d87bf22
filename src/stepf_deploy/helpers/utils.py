from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Tuple


def map_known_and_additional_fields(data_class, raw_data: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Map known fields from a dataclass and capture additional fields dynamically.

    :param data_class: The dataclass to map fields to.
    :param raw_data: The raw input data (e.g., settings loaded by Dynaconf).
    :return: A tuple containing two dictionaries:
             - Known fields mapped to their values.
             - Additional properties not explicitly defined in the dataclass.
    """
    known_fields = {field.name for field in data_class.__dataclass_fields__.values()}
    known_data = {k: v for k, v in raw_data.items() if k in known_fields}
    additional_properties = {k: v for k, v in raw_data.items() if k not in known_fields}

    return known_data, additional_properties


def serialize_to_dict(obj: Any) -> Dict[str, Any]:
    """
    Serialize a dataclass object to a dictionary, including additional properties.

    :param obj: The dataclass object to serialize.
    :return: A dictionary representation of the object.
    """
    result = {}

    for field in fields(obj):
        value = getattr(obj, field.name)

        # Skip None values and the catch-all bucket, merged below
        if value is None or field.name == "additionalProperties":
            continue

        if isinstance(value, Enum):
            result[field.name] = value.value
        elif is_dataclass(value):
            result[field.name] = serialize_to_dict(value)
        elif isinstance(value, BaseException):
            result[field.name] = str(value)
        else:
            result[field.name] = value

    if isinstance(getattr(obj, "additionalProperties", None), dict):
        result.update(obj.additionalProperties)

    return result
