"""Error classes raised while building objects from a node tree.

Every decode problem is a ConstructorError subclass, so callers can catch the
whole family at once and still tell the cases apart by type.
"""


class Mark:
    """Represents a position in a YAML stream.

    Attributes:
        name: The name of the stream (e.g., filename or '<string>')
        index: Character index in the stream
        line: Line number (0-indexed)
        column: Column number (0-indexed)
    """

    def __init__(self, name, index, line, column):
        self.name = name
        self.index = index
        self.line = line
        self.column = column

    def __str__(self):
        return "  in \"%s\", line %d, column %d" % (self.name, self.line + 1, self.column + 1)


class YAMLError(Exception):
    """Base exception for yamlbuild errors."""
    pass


class MarkedYAMLError(YAMLError):
    """Error with optional position marks and node context.

    Attributes:
        context: Description of the construction context
        context_mark: Mark pointing to the context
        problem: Description of the problem
        problem_mark: Mark pointing to the problem
        note: Additional note about the error
        tag: Tag of the offending node, if known
        node: The offending node, if known
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None,
                 *, tag=None, node=None):
        super().__init__(problem if problem is not None else context)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark
        self.note = note
        self.node = node
        if tag is None and node is not None:
            tag = node.tag
        self.tag = tag

    def __str__(self):
        lines = []
        if self.context is not None:
            lines.append(self.context)
        if self.context_mark is not None \
                and (self.problem is None or self.problem_mark is None
                     or self.context_mark.name != self.problem_mark.name
                     or self.context_mark.line != self.problem_mark.line
                     or self.context_mark.column != self.problem_mark.column):
            lines.append(str(self.context_mark))
        if self.problem is not None:
            lines.append(self.problem)
        if self.problem_mark is not None:
            lines.append(str(self.problem_mark))
        if self.note is not None:
            lines.append(self.note)
        return '\n'.join(lines)


class ConstructorError(MarkedYAMLError):
    """YAML constructor error."""
    pass


class UnexpectedNodeKindError(ConstructorError):
    """A decoder needed a scalar, sequence or mapping and got something else."""
    pass


class DuplicateMergeKeyError(ConstructorError):
    pass


class DuplicateValueKeyError(ConstructorError):
    pass


class InvalidMergeSourceError(ConstructorError):
    """Merge value is not a mapping or a sequence of mappings."""
    pass


class ScalarParseError(ConstructorError):
    """Scalar text does not match the grammar its tag requires."""
    pass


class UnknownTypeError(ConstructorError):
    """A type name could not be resolved or instantiated via the type registry."""
    pass


class PropertyAssignmentError(ConstructorError):
    """Object construction hit an unknown property or an incompatible value."""

    def __init__(self, *args, key=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.key = key


class UnrecognizedTagError(ConstructorError):
    """No decoder applies and the node kind has no primitive construction."""
    pass


class NestingDepthError(ConstructorError):
    pass


class RegistryError(YAMLError):
    """Invalid tag registration (duplicate entry or frozen registry)."""
    pass


class PropertyError(YAMLError):
    """Raised by type registries when a property cannot be set."""
    pass


class InternalConsistencyError(YAMLError, AssertionError):
    """The fixup bookkeeping was left inconsistent.

    This indicates a defect in a decoder or in the constructor itself, never
    a problem with the input document.
    """
    pass
