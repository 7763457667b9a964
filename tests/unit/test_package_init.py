"""Tests for package __init__.py module."""

import pytest

pytestmark = [pytest.mark.unit]


class TestPackageInit:
    """Tests for bfset/__init__.py."""

    def test_version(self):
        import bfset

        assert bfset.__version__ == "0.1.0"

    def test_exports_resolve(self):
        import bfset

        for name in bfset.__all__:
            assert hasattr(bfset, name), name

    def test_reexports_are_the_same_objects(self):
        import bfset
        from bfset.core import BitFieldSet
        from bfset.utils import IndexOutOfRangeError

        assert bfset.BitFieldSet is BitFieldSet
        assert bfset.IndexOutOfRangeError is IndexOutOfRangeError

    def test_exception_hierarchy(self):
        import bfset

        assert issubclass(bfset.SizeTooSmallError, bfset.ValidationError)
        assert issubclass(bfset.OutOfBoundsError, bfset.ValidationError)
        assert issubclass(bfset.ValidationError, bfset.BFSetError)
        assert issubclass(bfset.IndexOutOfRangeError, IndexError)
        assert issubclass(bfset.CapacityMismatchError, ValueError)
