"""Tag based field lookup in PALM image descriptions."""

from __future__ import annotations

import logging
import math
from typing import Optional

logger = logging.getLogger(__name__)

MICRON_SIGN = "µ"
# What the micron sign becomes when the description is decoded with the wrong charset.
GARBLED_MICRON_SIGN = "\ufffd"

SIZE_X_MICRONS_LABEL = f'SizeX Type="{MICRON_SIGN}m"'
SIZE_Y_MICRONS_LABEL = f'SizeY Type="{MICRON_SIGN}m"'
SIZE_X_PIXELS_LABEL = 'SizeX Type="Pixel"'
SIZE_Y_PIXELS_LABEL = 'SizeY Type="Pixel"'
STAGE_POSITION_X_LABEL = 'StagePosition Type="X-coordinate"'
STAGE_POSITION_Y_LABEL = 'StagePosition Type="Y-coordinate"'


def closing_name(field_label: str) -> str:
    """Tag name of a label: everything before its first space."""
    space = field_label.find(" ")
    return field_label if space == -1 else field_label[:space]


def extract_field(text: Optional[str], field_label: str) -> str:
    """
    Return the text between <field_label> and the matching closing tag.

    The closing tag is searched only after the opening tag, so a closing tag
    standing before the opening one never matches. Returns "" when either
    tag is missing.
    """
    if not text:
        return ""

    start_tag = f"<{field_label}>"
    start = text.find(start_tag)
    if start == -1:
        return ""

    value_start = start + len(start_tag)
    stop = text.find(f"</{closing_name(field_label)}>", value_start)
    if stop == -1:
        return ""
    return text[value_start:stop]


def garbled_label(field_label: str) -> str:
    return field_label.replace(MICRON_SIGN, GARBLED_MICRON_SIGN)


def extract_field_tolerant(text: Optional[str], field_label: str) -> str:
    """extract_field, retried with the garbled micron sign if the first attempt finds nothing."""
    value = extract_field(text, field_label)
    if value == "" and MICRON_SIGN in field_label:
        value = extract_field(text, garbled_label(field_label))
        if value != "":
            logger.debug("Field %r found with garbled micron sign", field_label)
    return value


def parse_number(value: str, field_label: str = "") -> float:
    """
    Convert an extracted value to float. Missing or malformed values give NaN.

    Accepts Python float literals with surrounding whitespace, including
    "inf", "nan" and "infinity" in any case. Digit separators and type
    suffixes such as "1.0d" are malformed.
    """
    if value == "":
        logger.debug("Field %r not found", field_label)
        return math.nan
    try:
        # Digit separators ("1_000") are not number literals here.
        if "_" in value:
            raise ValueError(value)
        return float(value)
    except ValueError:
        logger.warning("Field %r has non numeric value %r", field_label, value)
        return math.nan


def read_number(text: Optional[str], field_label: str) -> float:
    return parse_number(extract_field_tolerant(text, field_label), field_label)
