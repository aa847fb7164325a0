"""Type/property registry used for specialized and object construction.

The constructor never imports classes by name. It asks a TypeRegistry for a
zero-argument factory and for property assignment, so the host application
decides which types a document may instantiate.
"""

from __future__ import annotations

import threading
import typing
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import pydantic

from yamlbuild.error import PropertyError, RegistryError
from yamlbuild.log import get_logger

logger = get_logger(__name__)


class TypeRegistry(Protocol):
    """What the constructor needs from the host application."""

    def lookup_factory(self, type_name: str) -> Optional[Callable[[], Any]]:
        """Return a zero-argument factory for *type_name*, or None."""

    def set_property(self, instance: Any, property_name: str, value: Any) -> None:
        """Assign *value* to a property of *instance*, raising PropertyError."""


class SimpleTypeRegistry:
    """TypeRegistry for plain classes, dataclasses and pydantic models.

    A class's properties are its type-annotated attributes. Values are
    validated (and coerced where lossless) against the annotation with a
    pydantic TypeAdapter before being assigned.

    After ``registry.register('Point', Point)`` a document may contain
    ``!python/object:Point {x: 1, y: 2}``.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._adapters: Dict[Tuple[type, str], pydantic.TypeAdapter] = {}
        self._lock = threading.Lock()

    def register(self, type_name: str, cls: type, factory: Optional[Callable[[], Any]] = None) -> None:
        """Make *cls* constructible under *type_name*.

        *factory* defaults to calling *cls* with no arguments.
        """
        with self._lock:
            if type_name in self._factories:
                raise RegistryError("type %r is already registered" % type_name)
            self._factories[type_name] = factory if factory is not None else cls
        logger.debug("type_registered", type_name=type_name, cls=cls.__qualname__)

    def lookup_factory(self, type_name: str) -> Optional[Callable[[], Any]]:
        return self._factories.get(type_name)

    def _adapter(self, cls: type, property_name: str) -> pydantic.TypeAdapter:
        key = (cls, property_name)
        adapter = self._adapters.get(key)
        if adapter is None:
            try:
                hints = typing.get_type_hints(cls)
            except NameError as exc:
                raise PropertyError("can't resolve annotations of %s: %s" % (cls.__name__, exc)) from exc
            hint = hints.get(property_name)
            if (hint is None or property_name.startswith('_')
                    or typing.get_origin(hint) is typing.ClassVar):
                raise PropertyError("%s has no property %r" % (cls.__name__, property_name))
            adapter = pydantic.TypeAdapter(hint)
            with self._lock:
                self._adapters[key] = adapter
        return adapter

    def set_property(self, instance: Any, property_name: str, value: Any) -> None:
        adapter = self._adapter(type(instance), property_name)
        try:
            value = adapter.validate_python(value)
        except pydantic.ValidationError as exc:
            raise PropertyError(
                "incompatible value for %s.%s: %s"
                % (type(instance).__name__, property_name, exc.errors()[0]['msg'])) from exc
        try:
            setattr(instance, property_name, value)
        except (AttributeError, TypeError, ValueError) as exc:
            raise PropertyError(
                "can't set %s.%s: %s" % (type(instance).__name__, property_name, exc)) from exc
