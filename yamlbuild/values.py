"""Decoded value types that have no built-in Python equivalent."""

import threading


class Symbol:
    """Interned atom decoded from a plain ``:name`` scalar.

    ``Symbol('a') is Symbol('a')`` always holds, and a symbol never compares
    equal to a string with the same name.
    """

    __slots__ = ('name', '__weakref__')

    _table = {}
    _lock = threading.Lock()

    def __new__(cls, name):
        symbol = cls._table.get(name)
        if symbol is not None:
            return symbol
        with cls._lock:
            symbol = cls._table.get(name)
            if symbol is None:
                symbol = object.__new__(cls)
                symbol.name = name
                cls._table[name] = symbol
        return symbol

    def __reduce__(self):
        return (Symbol, (self.name,))

    def __str__(self):
        return self.name

    def __repr__(self):
        return 'Symbol(%r)' % self.name


class PrivateType:
    """Value of a node whose tag has no decoder.

    Attributes:
        tag: The node's original tag
        value: The unresolved payload: scalar text, list or dict
    """

    __slots__ = ('tag', 'value')

    def __init__(self, tag, value):
        self.tag = tag
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, PrivateType):
            return NotImplemented
        return self.tag == other.tag and self.value == other.value

    __hash__ = None

    def __repr__(self):
        return 'PrivateType(%r, %r)' % (self.tag, self.value)
