"""
Registry pattern helper.

``new_registry`` creates a dict and a decorator that fills it. The decoder
uses it to map image resource keys to their readers and color modes to their
pixel reconstructors.

Usage example::

    from psd_raster.registry import new_registry

    READERS, register = new_registry(attribute="key")

    @register(1005)
    class ResolutionInfo:
        pass

    reader = READERS[1005]
"""

from typing import Any, Callable, Optional, Tuple, TypeVar

T = TypeVar("T")


def new_registry(attribute: Optional[str] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name set on every registered object
        to the key it was registered under.
    :return: Tuple of (registry_dict, register_decorator)
    """
    registry: dict = {}

    def register(*keys: Any) -> Callable[[T], T]:
        def decorator(obj: T) -> T:
            for key in keys:
                registry[key] = obj
            if attribute:
                setattr(obj, attribute, keys[0])
            return obj

        return decorator

    return registry, register
