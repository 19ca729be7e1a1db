import sys
import argparse
import logging
from pathlib import Path

from PALM.config import Config
from PALM.src.core.calibration import ImageInfos
from PALM.src.drivers.field_source import ConsoleFieldSource, ScriptedFieldSource, FieldSource


def read_infos(path_arg):
    if path_arg is None:
        return None
    if path_arg == "-":
        return sys.stdin.read()
    return Path(path_arg).read_text(encoding="utf-8", errors="replace")


def make_source(args) -> FieldSource:
    if args.sim:
        return ScriptedFieldSource()
    if args.console:
        return ConsoleFieldSource()

    from PALM.src.ui.dialogs import QtFieldSource
    return QtFieldSource()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Read the calibration of a Zeiss PALM image")
    parser.add_argument("infos", nargs="?", help="Text file holding the image description ('-' for stdin)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--console", action="store_true", help="Ask for missing values on the console")
    group.add_argument("--sim", action="store_true", help="Accept the default values without asking")
    parser.add_argument("--config", type=Path, help="Config file with the default values")
    parser.add_argument("--save-defaults", action="store_true", help="Use the values read as next defaults")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = Config.load(args.config)

    app = None
    if not (args.sim or args.console):
        from PyQt5 import QtWidgets
        app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)

    infos = ImageInfos(config, make_source(args))

    if not infos.read(read_infos(args.infos)):
        print("Cancelled.")
        return 1

    print(f"Position:         {infos.position.x:.3f}, {infos.position.y:.3f}")
    print(f"Image dimensions: {infos.image_dimensions.x:.3f}, {infos.image_dimensions.y:.3f}")
    print(f"Calibration:      {infos.calibration.x:.6f}, {infos.calibration.y:.6f} microns/pixel")
    print(f"Zero position:    {infos.zero_position.x:.3f}, {infos.zero_position.y:.3f}")

    if args.save_defaults:
        infos.remember_as_defaults(config)
        config.save(args.config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
