"""Node classes consumed by the constructor.

Nodes are produced by an external parser. They compare and hash by
identity: a node object that appears twice in a tree is an alias, and that
is how the constructor detects self-references.
"""

NULL_TAG = 'tag:yaml.org,2002:null'


class Node:
    """Base class for YAML nodes."""
    id = 'node'

    def __init__(self, tag=None, value=None, start_mark=None, end_mark=None):
        self.tag = tag
        self.value = value
        self.start_mark = start_mark
        self.end_mark = end_mark

    def __repr__(self):
        value = self.value
        if isinstance(value, list):
            value = '<%d items>' % len(value)
        return '%s(tag=%r, value=%r)' % (self.__class__.__name__, self.tag, value)


class ScalarNode(Node):
    """Scalar node (strings, numbers, etc.)."""
    id = 'scalar'

    def __init__(self, tag, value, start_mark=None, end_mark=None, style=None):
        super().__init__(tag, value, start_mark, end_mark)
        self.style = style


class CollectionNode(Node):
    """Base class for collection nodes."""

    def __init__(self, tag, value, start_mark=None, end_mark=None, flow_style=None):
        super().__init__(tag, value if value is not None else [], start_mark, end_mark)
        self.flow_style = flow_style


class SequenceNode(CollectionNode):
    """Sequence node; value is a list of child nodes."""
    id = 'sequence'


class MappingNode(CollectionNode):
    """Mapping node; value is a list of (key_node, value_node) pairs."""
    id = 'mapping'


def null_node():
    """Return a fresh canonical null scalar node."""
    return ScalarNode(NULL_TAG, None)
