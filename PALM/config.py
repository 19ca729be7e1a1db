"""Calibration seed values with simple JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class Config:
    # Image size
    SIZE_X_MICRONS: float = 248.1
    SIZE_Y_MICRONS: float = 185.7
    SIZE_X_PIXELS: float = 1388.0
    SIZE_Y_PIXELS: float = 1038.0

    # Stage
    STAGE_POSITION_X: float = 68220.0
    STAGE_POSITION_Y: float = 36565.0
    ZERO_STAGE_POSITION_X: float = 118.0
    ZERO_STAGE_POSITION_Y: float = -30.0

    # Metadata detection
    METADATA_MARKER: str = "PALMRobo"

    # Form
    DIALOG_TITLE: str = "Zeiss PALM Roi IO"
    FIELD_DECIMALS: int = 3

    @staticmethod
    def default_path() -> Path:
        return Path.home() / ".palm_config.json"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        cfg = cls()
        cfg_path = path or cls.default_path()
        if not cfg_path.exists():
            return cfg

        try:
            data = json.loads(cfg_path.read_text())
        except Exception:
            logger.exception("Failed to read config file: %s", cfg_path)
            return cfg

        for f in fields(cfg):
            if f.name not in data:
                continue
            raw = data[f.name]
            try:
                if f.type in (int, "int"):
                    val = int(raw)
                elif f.type in (float, "float"):
                    val = float(raw)
                else:
                    val = str(raw)
                setattr(cfg, f.name, val)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid config value for %s", f.name)

        cfg.normalize()
        return cfg

    def save(self, path: Optional[Path] = None) -> None:
        cfg_path = path or self.default_path()
        cfg_path.write_text(json.dumps(asdict(self), indent=2, sort_keys=True))

    def normalize(self) -> None:
        if self.FIELD_DECIMALS < 0:
            self.FIELD_DECIMALS = 0
        if not self.METADATA_MARKER.strip():
            self.METADATA_MARKER = "PALMRobo"
        # Detection runs on space-stripped text.
        self.METADATA_MARKER = self.METADATA_MARKER.replace(" ", "")
