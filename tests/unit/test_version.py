"""Test basic package setup and version."""
import kubectl_ai


def test_version_exists() -> None:
    """Test that version is defined."""
    assert hasattr(kubectl_ai, "__version__")
    assert kubectl_ai.__version__ is not None


def test_version_format() -> None:
    """Test that version follows expected format."""
    version = kubectl_ai.__version__
    assert isinstance(version, str)
    assert len(version.split(".")) >= 2
