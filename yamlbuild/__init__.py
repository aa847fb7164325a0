"""
yamlbuild - tag-driven construction of Python objects from YAML node trees

Takes the node tree produced by a YAML parser (scalar, sequence and mapping
nodes carrying type tags) and builds native Python values from it.

Key features:
- Extensible dispatch on exact tags and tag prefixes via TagRegistry
- Aliases and self-referential structures resolved into real object cycles
- YAML 1.1 scalars: sexagesimal and prefixed integers, .inf/.nan floats,
  timestamps with zone handling, base64 binary, yes/no/on/off booleans
- Merge keys (<<) and value keys (=)
- Specialized containers and objects built through a pluggable TypeRegistry

Example:
    >>> from yamlbuild import MappingNode, ScalarNode, construct_document
    >>> root = MappingNode('tag:yaml.org,2002:map', [
    ...     (ScalarNode('tag:yaml.org,2002:str', 'port'),
    ...      ScalarNode('tag:yaml.org,2002:int', '0x1F90')),
    ... ])
    >>> construct_document(root)
    {'port': 8080}
"""

from yamlbuild.config import ConstructorConfig
from yamlbuild.constructor import (
    BaseConstructor,
    construct_document,
    construct_documents,
)
from yamlbuild.error import (
    Mark,
    YAMLError,
    MarkedYAMLError,
    ConstructorError,
    UnexpectedNodeKindError,
    DuplicateMergeKeyError,
    DuplicateValueKeyError,
    InvalidMergeSourceError,
    ScalarParseError,
    UnknownTypeError,
    PropertyAssignmentError,
    UnrecognizedTagError,
    NestingDepthError,
    RegistryError,
    PropertyError,
    InternalConsistencyError,
)
from yamlbuild.nodes import (
    Node,
    ScalarNode,
    CollectionNode,
    SequenceNode,
    MappingNode,
    null_node,
)
from yamlbuild.registry import TagRegistry
from yamlbuild.tags import create_registry, default_registry, register_default_tags
from yamlbuild.typeregistry import SimpleTypeRegistry, TypeRegistry
from yamlbuild.values import PrivateType, Symbol


__version__ = "0.1.0"

__all__ = [
    "BaseConstructor",
    "construct_document",
    "construct_documents",
    "ConstructorConfig",
    "TagRegistry",
    "create_registry",
    "default_registry",
    "register_default_tags",
    "TypeRegistry",
    "SimpleTypeRegistry",
    "Node",
    "ScalarNode",
    "CollectionNode",
    "SequenceNode",
    "MappingNode",
    "null_node",
    "PrivateType",
    "Symbol",
    "Mark",
    "YAMLError",
    "MarkedYAMLError",
    "ConstructorError",
    "UnexpectedNodeKindError",
    "DuplicateMergeKeyError",
    "DuplicateValueKeyError",
    "InvalidMergeSourceError",
    "ScalarParseError",
    "UnknownTypeError",
    "PropertyAssignmentError",
    "UnrecognizedTagError",
    "NestingDepthError",
    "RegistryError",
    "PropertyError",
    "InternalConsistencyError",
]
