"""
Pytest configuration and shared fixtures.
"""
import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the application directory to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
app_root = os.path.join(project_root, "Youwee")
if app_root not in sys.path:
    sys.path.insert(0, app_root)


@pytest.fixture(scope="session")
def qapp():
    """Single offscreen QApplication shared by all Qt tests."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def make_link():
    """Build distinct valid deep links."""
    def _make(index=0, target="https://example.com/watch"):
        return f"youwee://download?v=1&url={target}?id={index}"
    return _make
