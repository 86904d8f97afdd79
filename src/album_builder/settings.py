"""
Settings persistence for the album builder.

Stores the selected template and the layout options as JSON. Any malformed
data falls back to defaults and records a load error; a bad settings file
must never stop the user from generating an album.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from album_builder.common.templates import DEFAULT_TEMPLATE_KEY, TEMPLATES
from album_builder.core.models import LayoutOptions

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_NAME = "album_settings.json"


@dataclass(frozen=True)
class AlbumSettings:
    template: str = DEFAULT_TEMPLATE_KEY
    options: LayoutOptions = field(default_factory=LayoutOptions)

    def to_dict(self) -> Dict[str, Any]:
        return {"template": self.template, "options": self.options.to_dict()}


class SettingsStore:
    """Lightweight JSON-backed store for album preferences."""

    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.data: Dict[str, Any] = {}
        self.load_error: Optional[str] = None

        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                self.load_error = f"Settings file is corrupted: {e}"
            except OSError as e:
                self.load_error = f"Failed to read settings: {e}"
            else:
                if isinstance(loaded, dict):
                    self.data = loaded
                else:
                    self.load_error = "Settings file does not contain a JSON object"

        if self.load_error:
            logger.warning(f"{self.load_error}; using defaults")

        if "version" not in self.data:
            self.data["version"] = self.CURRENT_VERSION

    def load(self) -> AlbumSettings:
        """
        Read settings, clamping options and falling back field by field.

        An unknown template or an unparseable option block falls back to
        the default for that part only.
        """
        template = str(self.data.get("template") or DEFAULT_TEMPLATE_KEY).lower()
        if template not in TEMPLATES:
            logger.warning(f"Unknown template {template!r} in settings, using {DEFAULT_TEMPLATE_KEY}")
            template = DEFAULT_TEMPLATE_KEY

        raw_options = self.data.get("options")
        options = LayoutOptions()
        if isinstance(raw_options, dict):
            try:
                options = LayoutOptions.from_raw(raw_options)
            except ValueError as e:
                logger.warning(f"Invalid options in settings ({e}), using defaults")

        return AlbumSettings(template=template, options=options)

    def save(self, settings: AlbumSettings) -> None:
        """Write settings to disk, creating the parent directory."""
        self.data.update(settings.to_dict())
        self.data["version"] = self.CURRENT_VERSION
        self._save()

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
        logger.debug(f"Saved settings to {self.path}")
