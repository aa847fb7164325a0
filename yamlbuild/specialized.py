"""Construction of externally named types.

These prefix decoders receive the type name as the tag suffix and ask the
constructor's type registry for a factory, instead of importing classes by
name.
"""

from yamlbuild.error import PropertyAssignmentError, PropertyError, UnknownTypeError
from yamlbuild.log import get_logger

logger = get_logger(__name__)


def _instantiate(constructor, type_name, node, kind):
    type_registry = constructor.type_registry
    factory = None
    if type_registry is not None:
        factory = type_registry.lookup_factory(type_name)
    if factory is None:
        raise UnknownTypeError(
            "while constructing %s" % kind, node.start_mark,
            "unknown type %r" % type_name, node.start_mark, node=node)
    try:
        instance = factory()
    except Exception as exc:
        raise UnknownTypeError(
            "while constructing %s" % kind, node.start_mark,
            "can't instantiate type %r: %s" % (type_name, exc),
            node.start_mark, node=node) from exc
    logger.debug("type_instantiated", tag=node.tag, type_name=type_name)
    return instance


def construct_specialized_sequence(constructor, suffix, node):
    """Build the sequence type named by *suffix* and append the node's items."""
    result = _instantiate(constructor, suffix, node, "a sequence")
    if not callable(getattr(result, 'append', None)) or not hasattr(result, '__setitem__'):
        raise UnknownTypeError(
            "while constructing a sequence", node.start_mark,
            "type %r is not a mutable sequence" % suffix, node.start_mark, node=node)
    return constructor.construct_sequence(node, result)


def construct_specialized_mapping(constructor, suffix, node):
    """Build the mapping type named by *suffix* and insert the node's entries."""
    result = _instantiate(constructor, suffix, node, "a mapping")
    if not hasattr(result, '__setitem__') or not callable(getattr(result, 'get', None)):
        raise UnknownTypeError(
            "while constructing a mapping", node.start_mark,
            "type %r is not a mutable mapping" % suffix, node.start_mark, node=node)
    return constructor.construct_mapping(node, result)


def property_name(key, case='lower'):
    """Map a mapping key to a property name.

    Only the first character is changed: lowered for ``'lower'``, raised for
    ``'upper'``, kept for ``'preserve'``.
    """
    name = str(key)
    if not name:
        raise ValueError("empty property name")
    if case == 'lower':
        return name[0].lower() + name[1:]
    if case == 'upper':
        return name[0].upper() + name[1:]
    return name


def construct_object_instance(constructor, suffix, node):
    """Build the type named by *suffix* and set one property per mapping entry."""
    instance = _instantiate(constructor, suffix, node, "an object")
    type_registry = constructor.type_registry
    state = constructor.construct_mapping(node)
    for key, value in state.items():
        try:
            name = property_name(key, constructor.config.property_case)
        except ValueError as exc:
            raise PropertyAssignmentError(
                "while constructing an object", node.start_mark,
                "invalid property key %r" % (key,), node.start_mark,
                node=node, key=key) from exc

        def assign(real, name=name, key=key):
            try:
                type_registry.set_property(instance, name, real)
            except PropertyError as exc:
                raise PropertyAssignmentError(
                    "while constructing an object", node.start_mark,
                    "can't set property %r of %r: %s" % (name, suffix, exc),
                    node.start_mark, node=node, key=key) from exc

        constructor.when_resolved(value, assign)
    return instance
