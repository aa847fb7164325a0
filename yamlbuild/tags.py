"""Standard YAML tag decoders and the default tag table.

Every decoder takes the constructor as its first argument, so the table can
be shared by any number of BaseConstructor instances.
"""

import datetime
import threading

from yamlbuild.error import ScalarParseError, UnexpectedNodeKindError
from yamlbuild.log import get_logger
from yamlbuild.nodes import NULL_TAG, ScalarNode
from yamlbuild.registry import TagRegistry
from yamlbuild import scalars, specialized

logger = get_logger(__name__)

YAML_TAG_PREFIX = 'tag:yaml.org,2002:'

BOOL_TAG = YAML_TAG_PREFIX + 'bool'
INT_TAG = YAML_TAG_PREFIX + 'int'
FLOAT_TAG = YAML_TAG_PREFIX + 'float'
STR_TAG = YAML_TAG_PREFIX + 'str'
BINARY_TAG = YAML_TAG_PREFIX + 'binary'
TIMESTAMP_TAG = YAML_TAG_PREFIX + 'timestamp'
YMD_TAG = YAML_TAG_PREFIX + 'timestamp#ymd'
SEQ_TAG = YAML_TAG_PREFIX + 'seq'
MAP_TAG = YAML_TAG_PREFIX + 'map'
SET_TAG = YAML_TAG_PREFIX + 'set'
OMAP_TAG = YAML_TAG_PREFIX + 'omap'
PAIRS_TAG = YAML_TAG_PREFIX + 'pairs'
MERGE_TAG = YAML_TAG_PREFIX + 'merge'
VALUE_TAG = YAML_TAG_PREFIX + 'value'

SEQ_PREFIX = SEQ_TAG + ':'
MAP_PREFIX = MAP_TAG + ':'
OBJECT_PREFIXES = ('!python/object:', YAML_TAG_PREFIX + 'python/object:')


def _parse_error(node, kind, exc):
    return ScalarParseError(
        "while constructing %s" % kind, node.start_mark,
        str(exc), node.start_mark, node=node)


def construct_yaml_null(constructor, node):
    return None


def construct_yaml_bool(constructor, node):
    value = constructor.construct_scalar(node)
    try:
        return scalars.parse_bool(value)
    except ValueError:
        # Spellings outside the table stay strings
        return construct_yaml_str(constructor, node)


def construct_yaml_int(constructor, node):
    value = constructor.construct_scalar(node)
    try:
        return scalars.parse_int(value or '')
    except ValueError as exc:
        raise _parse_error(node, "an integer", exc) from exc


def construct_yaml_float(constructor, node):
    value = constructor.construct_scalar(node)
    try:
        return scalars.parse_float(value or '')
    except ValueError as exc:
        raise _parse_error(node, "a float", exc) from exc


def construct_yaml_str(constructor, node):
    value = constructor.construct_scalar(node)
    return value if value else None


def construct_yaml_binary(constructor, node):
    value = constructor.construct_scalar(node)
    try:
        return scalars.parse_binary(value or '')
    except ValueError as exc:
        raise _parse_error(node, "binary data", exc) from exc


def _require_scalar(node, kind):
    if not isinstance(node, ScalarNode):
        raise UnexpectedNodeKindError(
            "while constructing %s" % kind, node.start_mark,
            "expected a scalar node, but found %s" % node.id,
            node.start_mark, node=node)


def construct_yaml_timestamp(constructor, node):
    _require_scalar(node, "a timestamp")
    config = constructor.config
    local_offset = None
    if config.local_utc_offset_minutes is not None:
        local_offset = datetime.timedelta(minutes=config.local_utc_offset_minutes)
    try:
        value = scalars.parse_timestamp(node.value or '', config.timestamp_policy, local_offset)
    except (ValueError, OverflowError) as exc:
        raise _parse_error(node, "a timestamp", exc) from exc
    if value is None:
        return constructor.construct_private_type(node)
    return value


def construct_yaml_timestamp_ymd(constructor, node):
    _require_scalar(node, "a date")
    try:
        return scalars.parse_date(node.value or '')
    except ValueError as exc:
        raise _parse_error(node, "a date", exc) from exc


def construct_yaml_seq(constructor, node):
    return constructor.construct_sequence(node)


def construct_yaml_map(constructor, node):
    return constructor.construct_mapping(node)


def construct_yaml_set(constructor, node):
    return set(constructor.construct_mapping(node))


def construct_yaml_omap(constructor, node):
    return constructor.construct_pairs(node)


def construct_yaml_pairs(constructor, node):
    return constructor.construct_pairs(node)


def construct_undefined(constructor, node):
    return constructor.construct_private_type(node)


def register_default_tags(registry):
    """Install the standard YAML tags and specialized prefixes in *registry*."""
    registry.register_exact(NULL_TAG, construct_yaml_null)
    registry.register_exact(BOOL_TAG, construct_yaml_bool)
    registry.register_exact(OMAP_TAG, construct_yaml_omap)
    registry.register_exact(PAIRS_TAG, construct_yaml_pairs)
    registry.register_exact(SET_TAG, construct_yaml_set)
    registry.register_exact(INT_TAG, construct_yaml_int)
    registry.register_exact(FLOAT_TAG, construct_yaml_float)
    registry.register_exact(TIMESTAMP_TAG, construct_yaml_timestamp)
    registry.register_exact(YMD_TAG, construct_yaml_timestamp_ymd)
    registry.register_exact(STR_TAG, construct_yaml_str)
    registry.register_exact(BINARY_TAG, construct_yaml_binary)
    registry.register_exact(SEQ_TAG, construct_yaml_seq)
    registry.register_exact(MAP_TAG, construct_yaml_map)
    registry.register_exact('', construct_undefined)
    registry.register_prefix(SEQ_PREFIX, specialized.construct_specialized_sequence)
    registry.register_prefix(MAP_PREFIX, specialized.construct_specialized_mapping)
    for prefix in OBJECT_PREFIXES:
        registry.register_prefix(prefix, specialized.construct_object_instance)
    return registry


def create_registry(name=None):
    """Return a new, unfrozen registry holding the default tags."""
    return register_default_tags(TagRegistry(name))


_default_registry = None
_default_lock = threading.Lock()


def default_registry():
    """Return the shared, frozen registry of default tags."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = create_registry('default').freeze()
                logger.debug("default_registry_created")
    return _default_registry
