import pytest
import sys
from io import BytesIO
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import album_builder
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from album_builder.builder.output.surface import Surface  # noqa: E402
from album_builder.core.models import ImageAsset  # noqa: E402


def encode_image(size=(40, 30), color="red", fmt="PNG", mode="RGB", orientation=None) -> bytes:
    """Encode a solid-colour image to bytes, optionally tagged with an EXIF orientation."""
    img = Image.new(mode, size, color=color)
    buf = BytesIO()
    if orientation is None:
        img.save(buf, format=fmt)
    else:
        exif = Image.Exif()
        exif[0x0112] = orientation
        img.save(buf, format=fmt, exif=exif)
    return buf.getvalue()


class RecordingSurface(Surface):
    """Fake surface that records draw calls instead of rasterising."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.calls = []
        self.closed = False
        self.fail_encode = False

    @property
    def size(self):
        return self.width, self.height

    def fill(self, color):
        self.calls.append(("fill", color))

    def draw_image(self, image, rect):
        self.calls.append(("image", image.size, rect))

    def draw_text(self, text, position, *, size, color, align):
        self.calls.append(("text", text, position, size, color, align))

    def encode(self):
        if self.fail_encode:
            raise OSError("disk full")
        return repr(self.calls).encode()

    def close(self):
        self.closed = True


# Common test fixtures
@pytest.fixture
def make_asset():
    """Factory for in-memory image assets."""
    def _create(name="img.png", size=(40, 30), color="red", fmt="PNG", orientation=None):
        return ImageAsset(filename=name, data=encode_image(size, color, fmt, orientation=orientation))
    return _create


@pytest.fixture
def recording_surfaces():
    """Surface factory that keeps every RecordingSurface it creates."""
    created = []

    def _factory(width, height):
        surface = RecordingSurface(width, height)
        created.append(surface)
        return surface

    _factory.created = created
    return _factory


@pytest.fixture
def sample_image_dir(tmp_path: Path):
    """Directory with three small PNGs and one text file."""
    folder = tmp_path / "photos"
    folder.mkdir()
    for i, color in enumerate(["red", "green", "blue"], start=1):
        Image.new("RGB", (40, 30), color=color).save(folder / f"{i:02d}.png")
    (folder / "notes.txt").write_text("not an image")
    return folder
