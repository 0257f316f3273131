"""
Global test fixtures for AirDropPro tests
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator, List, Tuple

from airdroppro.common.notifications import NotificationSink
from fixtures.mock_clipboard import MockClipboard


class RecordingSink(NotificationSink):
    """Notification sink that remembers everything it was asked to show"""

    def __init__(self):
        self.shown: List[Tuple[str, str, bool]] = []

    def show(self, summary: str, body: str, success: bool) -> None:
        self.shown.append((summary, body, success))

    @property
    def successes(self) -> List[str]:
        return [body for _, body, ok in self.shown if ok]

    @property
    def failures(self) -> List[str]:
        return [body for _, body, ok in self.shown if not ok]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files"""
    path = Path(tempfile.mkdtemp(prefix="airdroppro_test_"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_file(temp_dir: Path) -> Path:
    """Create a sample text file for testing"""
    file_path = temp_dir / "sample.txt"
    file_path.write_text("Hello, World! This is a test file.")
    return file_path


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Minimal valid PNG image for testing"""
    # 1x1 transparent PNG
    return bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
        0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,
        0x08, 0x06, 0x00, 0x00, 0x00, 0x1F, 0x15, 0xC4,
        0x89, 0x00, 0x00, 0x00, 0x0A, 0x49, 0x44, 0x41,  # IDAT chunk
        0x54, 0x78, 0x9C, 0x63, 0x00, 0x01, 0x00, 0x00,
        0x05, 0x00, 0x01, 0x0D, 0x0A, 0x2D, 0xB4, 0x00,
        0x00, 0x00, 0x00, 0x49, 0x45, 0x4E, 0x44, 0xAE,  # IEND chunk
        0x42, 0x60, 0x82
    ])


@pytest.fixture
def sample_text() -> str:
    """Sample text for clipboard testing"""
    return "Hello, this is a clipboard exchange test message!"


@pytest.fixture
def mock_clipboard() -> MockClipboard:
    """Empty in-memory clipboard backend"""
    return MockClipboard()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
