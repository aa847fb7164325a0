import sys
import os

import pytest

_tests_dir = os.path.dirname(os.path.abspath(__file__))
_src_dir = os.path.abspath(os.path.join(_tests_dir, '..'))

# Run against the source tree when the package is not installed
sys.path.insert(0, _src_dir)

from yamlbuild import BaseConstructor, ConstructorConfig, TagRegistry, create_registry  # noqa: E402


@pytest.fixture
def registry():
    """A fresh, unfrozen registry with the default tags."""
    return create_registry('test')


@pytest.fixture
def empty_registry():
    """A registry with no decoders at all."""
    return TagRegistry('empty')


@pytest.fixture
def constructor():
    """Constructor on the default registry with a fixed UTC+01:00 local offset."""
    return BaseConstructor(config=ConstructorConfig(local_utc_offset_minutes=60))
