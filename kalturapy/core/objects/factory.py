"""Object types registry using Factory Pattern."""
from typing import Callable, Dict, Optional, TYPE_CHECKING

from ..logging import get_logger

if TYPE_CHECKING:
    from .object_base import KalturaObjectBase

logger = get_logger('kalturapy.objects.factory')


class KalturaTypesFactory:
    """
    Registry mapping discriminator strings to object constructors.

    Populated once when the generated types are imported. Lookups never
    reflect over modules: a discriminator that was not registered is unknown.
    """

    _types: Dict[str, Callable[[], 'KalturaObjectBase']] = {}

    @classmethod
    def register(cls, object_type: str, constructor: Callable[[], 'KalturaObjectBase']) -> None:
        """Registers a zero-argument constructor for a discriminator."""
        if object_type in cls._types and cls._types[object_type] is not constructor:
            logger.debug(f"Replacing registered constructor for type '{object_type}'")
        cls._types[object_type] = constructor

    @classmethod
    def register_types(cls, types: Dict[str, Callable[[], 'KalturaObjectBase']]) -> None:
        """Registers several constructors at once."""
        for object_type, constructor in types.items():
            cls.register(object_type, constructor)

    @classmethod
    def unregister(cls, object_type: str) -> None:
        """Removes a discriminator from the registry."""
        cls._types.pop(object_type, None)

    @classmethod
    def is_registered(cls, object_type: str) -> bool:
        return object_type in cls._types

    @classmethod
    def create_object(cls, object_type: Optional[str]) -> Optional['KalturaObjectBase']:
        """
        Creates a new instance for a discriminator.

        Args:
            object_type: Discriminator string (e.g. 'KalturaMediaEntry')

        Returns:
            New instance, or None if the discriminator is not registered
        """
        if not object_type:
            return None
        constructor = cls._types.get(object_type)
        if constructor is None:
            return None
        return constructor()
