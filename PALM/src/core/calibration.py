"""Calibration of PALM images, read from the image description or asked from the user."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from PALM.config import Config
from PALM.src.core import fields
from PALM.src.core.types import Point
from PALM.src.drivers.field_source import FieldSource

logger = logging.getLogger(__name__)

# (attribute, form label, config seed)
RAW_FIELDS = (
    ("size_x_microns", "SizeX_(microns)", "SIZE_X_MICRONS"),
    ("size_y_microns", "SizeY_(microns)", "SIZE_Y_MICRONS"),
    ("size_x_pixels", "SizeX_(pixels)", "SIZE_X_PIXELS"),
    ("size_y_pixels", "SizeY_(pixels)", "SIZE_Y_PIXELS"),
    ("stage_position_x", "StagePosition_X-coordinate", "STAGE_POSITION_X"),
    ("stage_position_y", "StagePosition_Y-coordinate", "STAGE_POSITION_Y"),
)
ZERO_FIELDS = (
    ("zero_stage_position_x", "Zero_StagePosition_X-coordinate", "ZERO_STAGE_POSITION_X"),
    ("zero_stage_position_y", "Zero_StagePosition_Y-coordinate", "ZERO_STAGE_POSITION_Y"),
)

METADATA_LABELS = {
    "size_x_microns": fields.SIZE_X_MICRONS_LABEL,
    "size_y_microns": fields.SIZE_Y_MICRONS_LABEL,
    "size_x_pixels": fields.SIZE_X_PIXELS_LABEL,
    "size_y_pixels": fields.SIZE_Y_PIXELS_LABEL,
    "stage_position_x": fields.STAGE_POSITION_X_LABEL,
    "stage_position_y": fields.STAGE_POSITION_Y_LABEL,
}


def microns_per_pixel(microns: float, pixels: float) -> float:
    """IEEE division: a zero pixel count gives +/-inf, 0/0 and NaN inputs give NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(microns), np.float64(pixels)))


class ImageInfos:
    """
    Calibration of one PALM acquisition.

    The six raw measurements come from the image description when it carries
    PALM metadata, otherwise from the field source. The zero stage position is
    never part of the metadata and is always asked for.
    """

    def __init__(self, config: Config, source: FieldSource):
        self.config = config
        self.source = source

        for attr, _, key in RAW_FIELDS + ZERO_FIELDS:
            setattr(self, attr, float(getattr(config, key)))

        self.position: Optional[Point] = None
        self.image_dimensions: Optional[Point] = None
        self.calibration: Optional[Point] = None
        self.zero_position: Optional[Point] = None

    @property
    def is_valid(self) -> bool:
        return self.calibration is not None

    def has_metadata(self, infos: Optional[str]) -> bool:
        if not infos:
            return False
        return self.config.METADATA_MARKER in infos.replace(" ", "")

    def read(self, infos: Optional[str] = None) -> bool:
        """
        Read the calibration for an image description (None when there is no image).
        Returns False if the user cancelled the form; derived points are then unset.
        """
        from_image = self.has_metadata(infos)
        if from_image:
            logger.info("PALM metadata found in image description")
            self.read_parameters_from_image(infos)
        else:
            logger.info("No PALM metadata, asking for all calibration values")

        if not self.request_parameters(retrieve_all=not from_image):
            self.reset_derived()
            return False
        return True

    def read_parameters_from_image(self, infos: str) -> None:
        for attr, label in METADATA_LABELS.items():
            setattr(self, attr, fields.read_number(infos, label))
        self.convert_parameters()

    def request_parameters(self, retrieve_all: bool) -> bool:
        wanted = (RAW_FIELDS + ZERO_FIELDS) if retrieve_all else ZERO_FIELDS
        form = [(label, getattr(self, attr)) for attr, label, _ in wanted]

        values = self.source.request(form, self.config.DIALOG_TITLE, self.config.FIELD_DECIMALS)
        if values is None:
            logger.info("Calibration form cancelled")
            return False
        if len(values) != len(form):
            raise ValueError(f"Field source returned {len(values)} values for {len(form)} fields")

        for (attr, _, _), value in zip(wanted, values):
            setattr(self, attr, float(value))
        self.convert_parameters()
        return True

    def convert_parameters(self) -> None:
        self.position = Point(self.stage_position_x, self.stage_position_y)
        self.image_dimensions = Point(self.size_x_pixels, self.size_y_pixels)
        self.calibration = Point(
            microns_per_pixel(self.size_x_microns, self.size_x_pixels),
            microns_per_pixel(self.size_y_microns, self.size_y_pixels),
        )
        self.zero_position = Point(self.zero_stage_position_x, self.zero_stage_position_y)

    def reset_derived(self) -> None:
        self.position = None
        self.image_dimensions = None
        self.calibration = None
        self.zero_position = None

    def raw_fields(self) -> dict:
        return {attr: getattr(self, attr) for attr, _, _ in RAW_FIELDS + ZERO_FIELDS}

    def as_dict(self) -> dict:
        data = self.raw_fields()
        for name in ("position", "image_dimensions", "calibration", "zero_position"):
            point = getattr(self, name)
            data[name] = None if point is None else tuple(point)
        return data

    def remember_as_defaults(self, config: Config) -> None:
        """Seed the next session with the values of this one."""
        for attr, _, key in RAW_FIELDS + ZERO_FIELDS:
            setattr(config, key, getattr(self, attr))
