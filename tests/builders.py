"""Shorthand node builders for tests."""

from yamlbuild import MappingNode, ScalarNode, SequenceNode

Y = 'tag:yaml.org,2002:'


def scalar(value, tag='str', style=None):
    return ScalarNode(_tag(tag), value, style=style)


def seq(*children, tag='seq'):
    return SequenceNode(_tag(tag), list(children))


def mapping(*pairs, tag='map'):
    return MappingNode(_tag(tag), list(pairs))


def merge_key():
    return ScalarNode(Y + 'merge', '<<')


def value_key():
    return ScalarNode(Y + 'value', '=')


def _tag(tag):
    # Short names are standard YAML tags
    if tag is None or ':' in tag or tag.startswith('!') or tag == '':
        return tag
    return Y + tag
