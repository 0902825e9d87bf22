from typing import Any, Dict, Type, TypeVar

from stepf_deploy.helpers.utils import map_known_and_additional_fields, serialize_to_dict

T = TypeVar("T", bound="BaseModel")


class BaseModel:
    """
    Base class for dataclass models. Provides common methods like get_property, to_dict, and from_dict.
    Subclasses declare an ``additionalProperties`` field to keep unknown keys.
    """

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create a model object from a dictionary.

        :param data: Dictionary containing field values.
        :return: A model object.
        """
        known_data, additional_properties = map_known_and_additional_fields(cls, data)
        obj = cls(**known_data)
        if hasattr(obj, "additionalProperties"):
            obj.additionalProperties.update(additional_properties)
        return obj

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the model object to a dictionary.

        :return: A dictionary representation of the object.
        """
        return serialize_to_dict(self)

    def get_property(self, property_name: str) -> Any:
        """
        Get a property value from either class attributes or additionalProperties.

        :param property_name: The name of the property to retrieve.
        :return: The value of the property or None if not found.
        """
        value = getattr(self, property_name, None)
        if value is not None:
            return value
        return getattr(self, "additionalProperties", {}).get(property_name)
