"""Graph builder turning a node tree into Python objects.

Dispatches every node through a TagRegistry and closes cycles with a
placeholder-and-fixup protocol: a node that is still being constructed is
handed to its own descendants as a placeholder link, and the container slot
holding that link is patched once the node's value is known.
"""

import types

from yamlbuild.config import ConstructorConfig
from yamlbuild.error import (
    ConstructorError,
    DuplicateMergeKeyError,
    DuplicateValueKeyError,
    InternalConsistencyError,
    InvalidMergeSourceError,
    NestingDepthError,
    UnexpectedNodeKindError,
    UnrecognizedTagError,
)
from yamlbuild.log import get_logger
from yamlbuild.nodes import (
    ScalarNode,
    SequenceNode,
    MappingNode,
    null_node,
)
from yamlbuild.tags import MERGE_TAG, VALUE_TAG, default_registry
from yamlbuild.values import PrivateType, Symbol

logger = get_logger(__name__)


class _Link:
    """Placeholder for a node whose construction is in progress."""

    __slots__ = ('node',)

    def __init__(self, node):
        self.node = node

    def __repr__(self):
        return '<link to %r>' % (self.node,)


class BaseConstructor:
    """Builds Python objects from node trees.

    Args:
        registry: TagRegistry used for dispatch; defaults to the shared,
            frozen default_registry().
        type_registry: Type/property registry used by specialized and object
            construction (see yamlbuild.typeregistry).
        config: ConstructorConfig; defaults to ConstructorConfig().

    A constructor holds per-document state while construct_document runs, so
    one instance must not decode two documents at the same time.
    """

    VALUE_KEY = '='

    def __init__(self, registry=None, type_registry=None, config=None):
        self.registry = registry if registry is not None else default_registry()
        self.type_registry = type_registry
        self.config = config if config is not None else ConstructorConfig()
        self._pending = {}
        self._constructed = {}
        self._depth = 0

    @property
    def pending_fixups(self):
        """Read-only view of the nodes currently under construction."""
        return types.MappingProxyType(self._pending)

    def construct_document(self, node):
        """Construct a Python object from a root node."""
        self._pending = {}
        self._constructed = {}
        self._depth = 0
        logger.debug("construct_document_started", tag=getattr(node, 'tag', None))
        try:
            data = self.construct_object(node)
            if self._pending:
                raise InternalConsistencyError(
                    "unresolved placeholders after construction: %r" % list(self._pending))
            logger.debug("construct_document_finished", nodes=len(self._constructed))
            return data
        finally:
            self._pending = {}
            self._constructed = {}
            self._depth = 0

    def construct_documents(self, nodes):
        """Construct each root node of *nodes* as a separate document."""
        for node in nodes:
            yield self.construct_document(node)

    def construct_object(self, node):
        """Construct a Python object from a node, dispatching by tag.

        Returns a placeholder link if *node* is an ancestor still under
        construction; containers storing such a link must register a fixup
        for it (see add_fixup and when_resolved).
        """
        if node is None:
            node = null_node()
        if node in self._pending:
            return _Link(node)
        if node in self._constructed:
            return self._constructed[node]
        self._check_depth(node, self._depth)
        self._pending[node] = []
        self._depth += 1
        try:
            data = self._dispatch(node)
        finally:
            self._depth -= 1
        fixups = self._pending.pop(node)
        self._constructed[node] = data
        for fixup in fixups:
            fixup(node, data)
        return data

    def _check_depth(self, node, depth):
        if depth >= self.config.max_depth:
            raise NestingDepthError(
                None, None,
                "exceeded the maximum nesting depth of %d" % self.config.max_depth,
                node.start_mark, node=node)

    def _dispatch(self, node):
        tag = node.tag if node.tag is not None else ''
        registry = self.registry
        constructor = registry.resolve_exact(tag)
        if constructor is not None:
            return constructor(self, node)
        found = registry.resolve_prefix(tag)
        if found is not None:
            prefix, multi_constructor = found
            return multi_constructor(self, tag[len(prefix):], node)
        multi_constructor = registry.get_prefix('')
        if multi_constructor is not None:
            return multi_constructor(self, tag, node)
        constructor = registry.resolve_exact('')
        if constructor is not None:
            return constructor(self, node)
        return self.construct_primitive(node)

    def construct_primitive(self, node):
        """Construct a node with no registered decoder from its kind alone."""
        if isinstance(node, ScalarNode):
            value = node.value
            if (self.config.symbols and value and len(value) > 1
                    and value[0] == ':' and not node.style):
                return Symbol(value[1:])
            return value
        elif isinstance(node, SequenceNode):
            return self.construct_sequence(node)
        elif isinstance(node, MappingNode):
            return self.construct_mapping(node)
        raise UnrecognizedTagError(
            None, None,
            "could not determine a constructor for the tag %r" % node.tag,
            node.start_mark, node=node)

    def construct_scalar(self, node):
        """Return the text of a scalar node.

        A mapping node holding a value-tagged entry stands in for the scalar
        of that entry. Chains of such mappings count against max_depth.
        """
        depth = self._depth
        while isinstance(node, MappingNode):
            value_node = self._value_key_node(node)
            if value_node is None:
                break
            self._check_depth(value_node, depth)
            depth += 1
            node = value_node
        if isinstance(node, ScalarNode):
            return node.value
        raise UnexpectedNodeKindError(
            None, None,
            "expected a scalar or mapping node, but found %s" % node.id,
            node.start_mark, node=node)

    def _value_key_node(self, node):
        for key_node, value_node in node.value:
            if key_node.tag == VALUE_TAG:
                return value_node
        return None

    def construct_private_type(self, node):
        """Wrap the payload of a node with an unknown tag in PrivateType."""
        if isinstance(node, ScalarNode):
            value = node.value
        elif isinstance(node, SequenceNode):
            value = self.construct_sequence(node)
        elif isinstance(node, MappingNode):
            value = self.construct_mapping(node)
        else:
            raise UnexpectedNodeKindError(
                None, None,
                "unexpected node kind %s" % node.id,
                node.start_mark, node=node)
        logger.debug("private_type_constructed", tag=node.tag, kind=node.id)
        return PrivateType(node.tag, value)

    def construct_sequence(self, node, data=None):
        """Construct a list (or append into *data*) from a sequence node."""
        if not isinstance(node, SequenceNode):
            raise UnexpectedNodeKindError(
                None, None,
                "expected a sequence node, but found %s" % node.id,
                node.start_mark, node=node)
        if data is None:
            data = []
        for child in node.value:
            item = self.construct_object(child)
            if isinstance(item, _Link):
                self._fix_slot(item, data, len(data))
            data.append(item)
        return data

    def construct_mapping(self, node, mapping=None):
        """Construct a dict (or fill *mapping*) from a mapping node.

        Applies merge keys: merged-in mappings are layered first, in priority
        order, and the node's own entries last, so own entries win.
        """
        if not isinstance(node, MappingNode):
            raise UnexpectedNodeKindError(
                None, None,
                "expected a mapping node, but found %s" % node.id,
                node.start_mark, node=node)
        entries = []
        merge = None
        has_value_key = False
        for key_node, value_node in node.value:
            if key_node.tag == MERGE_TAG:
                if merge is not None:
                    raise DuplicateMergeKeyError(
                        "while constructing a mapping", node.start_mark,
                        "found duplicate merge key", key_node.start_mark, node=node)
                merge = self._construct_merge_sources(node, value_node)
            elif key_node.tag == VALUE_TAG:
                if has_value_key:
                    raise DuplicateValueKeyError(
                        "while constructing a mapping", node.start_mark,
                        "found duplicate value key", key_node.start_mark, node=node)
                has_value_key = True
                entries.append((self.VALUE_KEY, self.construct_object(value_node)))
            else:
                key = self.construct_object(key_node)
                if isinstance(key, _Link):
                    raise ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        "found unconstructable recursive key", key_node.start_mark,
                        node=node)
                try:
                    hash(key)
                except TypeError as exc:
                    raise ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        "found unhashable key", key_node.start_mark, node=node) from exc
                entries.append((key, self.construct_object(value_node)))
        if mapping is None:
            mapping = {}
        for source in merge or ():
            self._layer(mapping, source.items())
        self._layer(mapping, entries)
        return mapping

    def _construct_merge_sources(self, node, value_node):
        if isinstance(value_node, MappingNode):
            return [self._construct_merge_source(node, value_node)]
        if isinstance(value_node, SequenceNode):
            merge = []
            for subnode in value_node.value:
                if not isinstance(subnode, MappingNode):
                    raise InvalidMergeSourceError(
                        "while constructing a mapping", node.start_mark,
                        "expected a mapping for merging, but found %s" % subnode.id,
                        subnode.start_mark, node=node)
                # Earlier entries take priority, so they are layered last
                merge.insert(0, self._construct_merge_source(node, subnode))
            return merge
        raise InvalidMergeSourceError(
            "while constructing a mapping", node.start_mark,
            "expected a mapping or list of mappings for merging, but found %s" % value_node.id,
            value_node.start_mark, node=node)

    def _construct_merge_source(self, node, source):
        # Merge sources are pending while built, like nodes in construct_object
        if source in self._pending:
            raise InvalidMergeSourceError(
                "while constructing a mapping", node.start_mark,
                "found recursive merge", source.start_mark, node=node)
        self._check_depth(source, self._depth)
        self._pending[source] = []
        self._depth += 1
        try:
            data = self.construct_mapping(source)
        finally:
            self._depth -= 1
        for fixup in self._pending.pop(source):
            fixup(source, data)
        return data

    def _layer(self, mapping, items):
        for key, value in items:
            mapping[key] = value
            if isinstance(value, _Link):
                self._fix_slot(value, mapping, key)

    def construct_pairs(self, node):
        """Construct a list of (key, value) pairs.

        Accepts a mapping node, or a sequence of single-pair mapping nodes as
        used by ``!!omap`` and ``!!pairs``.
        """
        if isinstance(node, MappingNode):
            entries = node.value
        elif isinstance(node, SequenceNode):
            entries = []
            for subnode in node.value:
                if not isinstance(subnode, MappingNode) or len(subnode.value) != 1:
                    raise UnexpectedNodeKindError(
                        "while constructing pairs", node.start_mark,
                        "expected a mapping of length 1, but found %s" % subnode.id,
                        subnode.start_mark, node=node)
                entries.append(subnode.value[0])
        else:
            raise UnexpectedNodeKindError(
                None, None,
                "expected a mapping or sequence node, but found %s" % node.id,
                node.start_mark, node=node)
        pairs = []
        for key_node, value_node in entries:
            key = self.construct_object(key_node)
            if isinstance(key, _Link):
                raise ConstructorError(
                    "while constructing pairs", node.start_mark,
                    "found unconstructable recursive key", key_node.start_mark,
                    node=node)
            value = self.construct_object(value_node)
            if isinstance(value, _Link):
                self._fix_pair(value, pairs, len(pairs), key)
            pairs.append((key, value))
        return pairs

    def add_fixup(self, node, fixup):
        """Queue ``fixup(node, value)`` to run once *node* is constructed."""
        try:
            self._pending[node].append(fixup)
        except KeyError:
            raise InternalConsistencyError(
                "fixup registered for %r, which is not under construction" % (node,)) from None

    def when_resolved(self, value, callback):
        """Call ``callback(value)`` now, or when a placeholder *value* resolves."""
        if isinstance(value, _Link):
            self.add_fixup(value.node, lambda node, real: callback(real))
        else:
            callback(value)

    def _fix_slot(self, link, container, slot):
        def fixup(node, real):
            if container[slot] is link:
                container[slot] = real
        self.add_fixup(link.node, fixup)

    def _fix_pair(self, link, pairs, index, key):
        def fixup(node, real):
            if pairs[index][1] is link:
                pairs[index] = (key, real)
        self.add_fixup(link.node, fixup)


def construct_document(node, registry=None, type_registry=None, config=None):
    """Construct a Python object from *node* with a fresh BaseConstructor."""
    constructor = BaseConstructor(registry, type_registry, config)
    return constructor.construct_document(node)


def construct_documents(nodes, registry=None, type_registry=None, config=None):
    """Construct every root node in *nodes*, yielding one object per node."""
    constructor = BaseConstructor(registry, type_registry, config)
    return constructor.construct_documents(nodes)
