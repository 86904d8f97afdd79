"""Top-level package for the Album Builder.

Provides subpackages:
- album_builder.common – template catalog
- album_builder.core – immutable data models (options, assets)
- album_builder.builder – tile layout, pagination, page composition and export
- album_builder.cli – command-line trigger
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    try:
        return pkg_version("album-builder")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
