"""Tag registry mapping tags and tag prefixes to decoders.

A registry is filled once, before any document is constructed, and is only
read afterwards. Registration takes a lock; lookups never do.

Exact decoders are called as ``decoder(constructor, node)``; prefix decoders
as ``decoder(constructor, suffix, node)`` where *suffix* is the part of the
tag after the matched prefix. The empty string, as a tag or a prefix, is the
universal fallback.
"""

import threading
import types

from yamlbuild.error import RegistryError
from yamlbuild.log import get_logger

logger = get_logger(__name__)


class TagRegistry:
    """Exact-tag and tag-prefix decoder table."""

    def __init__(self, name=None):
        self.name = name
        self._exact = {}
        self._prefixes = {}
        self._lock = threading.Lock()
        self._frozen = False

    def __repr__(self):
        return '<TagRegistry %s: %d tags, %d prefixes%s>' % (
            self.name or hex(id(self)), len(self._exact), len(self._prefixes),
            ', frozen' if self._frozen else '')

    @property
    def frozen(self):
        return self._frozen

    @property
    def exact_tags(self):
        return types.MappingProxyType(self._exact)

    @property
    def prefixes(self):
        return types.MappingProxyType(self._prefixes)

    def _register(self, table, kind, key, decoder):
        if not callable(decoder):
            raise TypeError("decoder for %s %r is not callable" % (kind, key))
        with self._lock:
            if self._frozen:
                raise RegistryError("cannot register %s %r: registry is frozen" % (kind, key))
            if key in table:
                raise RegistryError("%s %r is already registered" % (kind, key))
            table[key] = decoder
        logger.debug("tag_registered", registry=self.name, kind=kind, key=key)

    def register_exact(self, tag, decoder):
        """Install *decoder* for nodes whose tag equals *tag*."""
        self._register(self._exact, 'tag', tag, decoder)

    def register_prefix(self, prefix, decoder):
        """Install *decoder* for nodes whose tag starts with *prefix*."""
        self._register(self._prefixes, 'prefix', prefix, decoder)

    def resolve_exact(self, tag):
        return self._exact.get(tag)

    def get_prefix(self, prefix):
        return self._prefixes.get(prefix)

    def resolve_prefix(self, tag):
        """Return ``(prefix, decoder)`` for the first prefix *tag* starts with.

        The universal ``''`` prefix is skipped here. When several registered
        prefixes match, which one wins is unspecified; avoid registering
        overlapping prefixes.
        """
        if tag is None:
            return None
        for prefix, decoder in self._prefixes.items():
            if prefix and tag.startswith(prefix):
                return prefix, decoder
        return None

    def freeze(self):
        """End the registration phase; later registration raises RegistryError."""
        with self._lock:
            self._frozen = True
        logger.debug("registry_frozen", registry=self.name,
                     tags=len(self._exact), prefixes=len(self._prefixes))
        return self

    def copy(self, name=None):
        """Return an unfrozen registry holding the same entries."""
        registry = TagRegistry(name)
        with self._lock:
            registry._exact.update(self._exact)
            registry._prefixes.update(self._prefixes)
        return registry
