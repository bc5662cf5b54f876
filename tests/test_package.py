"""Tests for the top-level cadence namespace."""

import cadence


class TestPublicSurface:
    """Tests for re-exports."""

    def test_all_names_resolve(self):
        """Test every name in __all__ is importable from cadence."""
        for name in cadence.__all__:
            assert hasattr(cadence, name), name

    def test_version(self):
        """Test the package exposes a version string."""
        assert isinstance(cadence.__version__, str)

    def test_wrappers_exported(self):
        """Test the public wrappers resolve to their implementations."""
        from cadence.execution.retry import retry
        from cadence.functional.memoize import memoize

        assert cadence.retry is retry
        assert cadence.memoize is memoize

    def test_get_logger_from_namespace(self):
        """Test the re-exported get_logger builds a logger by name."""
        logger = cadence.get_logger("x")
        logger.debug("imported_and_usable")
