#!/usr/bin/env python3
"""
Compress band interview recordings to small H.264 MP4 files.

Given paths, every video file they contain is compressed into the configured
output folder and a summary is printed. Without paths an interactive menu is
shown to set the output folder and compress single files or folders.
"""
import argparse
import os
import sys
from pathlib import Path
from typing import Callable, Optional

import bandcompress as bandcompress_module
from bandcompress.pipeline import RunCounters, run_batch
from bandcompress.utils import COLLISION_RENAME, COLLISION_SKIP, WORKERS, LogLevel, logger
from bandcompress.utils.config import CompressorConfig, ensure_directory, load_config, save_config
from bandcompress.utils.constants import LOG_FILE
from bandcompress.utils.errors import ConfigError, ToolMissingError
from bandcompress.utils.system_util import Toolchain

MENU = """
Output folder: {output}

  1) Set output folder
  2) Compress one file
  3) Compress one folder (including subfolders)
  q) Quit
"""


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bandcompressor",
        description="Compress interview videos to H.264/AAC MP4 (CRF 22, max 1080p) and tag them "
                    "with band and date taken from the file name.",
        epilog="Example: bandcompressor ./Interviews 'Alpha 29092025.mov' --output-dir ./compressed",
    )
    parser.add_argument("paths", nargs="*", help="Files or folders to compress; none starts the menu")
    parser.add_argument("--output-dir", help="Output folder for this run (default: saved setting)")
    parser.add_argument("--save", action="store_true", help="Remember --output-dir/--on-collision as defaults")
    parser.add_argument(
        "--on-collision",
        choices=[COLLISION_RENAME, COLLISION_SKIP],
        help="When the output exists: write 'name (compressed).mp4' (rename) or leave it (skip)",
    )
    parser.add_argument("--workers", type=_positive_int, default=WORKERS,
                        help="Concurrent ffmpeg processes (default: 1, one file at a time)")
    parser.add_argument("--config", help="Settings file (default: $BANDCOMPRESS_CONFIG or per-user config)")
    parser.add_argument("--log-file", help="Also write the log to this file (or $BANDCOMPRESS_LOG_FILE)")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {bandcompress_module.__version__}")
    return parser


def _clean_path(text: str) -> Path:
    """Strip whitespace and the quotes a file manager adds when a path is pasted or dropped."""
    return Path(text.strip().strip('"').strip("'")).expanduser()


def print_summary(counters: RunCounters) -> None:
    logger.safe_print(
        f"\n🎉 Done. FOUND={counters.found} OK={counters.succeeded} "
        f"SKIP={counters.skipped} FAIL={counters.failed}"
    )


def interactive_menu(config: CompressorConfig, tools: Toolchain, config_path: Optional[Path],
                     workers: int = WORKERS, input_fn: Callable[[str], str] = input) -> None:
    """Loop over the menu until the user quits (q, EOF or Ctrl-C)."""
    while True:
        logger.safe_print(MENU.format(output=config.output_directory))
        try:
            choice = input_fn("Choice: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            logger.safe_print()
            return

        if choice in ("q", "quit", "exit"):
            return

        if choice == "1":
            try:
                config.output_directory = ensure_directory(_clean_path(input_fn("New output folder: ")))
                save_config(config, config_path)
            except ConfigError as e:
                logger.safe_print(f"❌ {e}")
                continue
            except (EOFError, KeyboardInterrupt):
                return
            logger.safe_print(f"✅ Output folder set to {config.output_directory}")
        elif choice in ("2", "3"):
            prompt = "File to compress: " if choice == "2" else "Folder to compress: "
            try:
                target = _clean_path(input_fn(prompt))
            except (EOFError, KeyboardInterrupt):
                return
            if choice == "2" and not target.is_file():
                logger.safe_print(f"❌ Not a file: {target}")
                continue
            if choice == "3" and not target.is_dir():
                logger.safe_print(f"❌ Not a folder: {target}")
                continue
            print_summary(run_batch([target], config, tools, workers=workers))
        else:
            logger.safe_print(f"Unknown choice: {choice!r}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_file = args.log_file or LOG_FILE
    if log_file:
        logger.set_log_file(Path(log_file).expanduser().resolve())

    bandcompress_module.DEBUG = args.debug
    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    try:
        tools = Toolchain.discover()
    except ToolMissingError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e), binary=e.binary)
        return 2

    config_path = Path(args.config).expanduser() if args.config else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e))
        return 2

    if args.output_dir:
        try:
            config.output_directory = ensure_directory(Path(args.output_dir))
        except ConfigError as e:
            logger.log("startup.error", LogLevel.ERROR, msg=str(e))
            return 2
    if args.on_collision:
        config.on_collision = args.on_collision
    if args.save:
        try:
            save_config(config, config_path)
        except ConfigError as e:
            logger.log("config.save_failed", LogLevel.WARN, error=str(e))

    logger.log("startup", LogLevel.DEBUG,
               pid=os.getpid(),
               ffmpeg=tools.ffmpeg,
               ffprobe=tools.ffprobe,
               output=config.output_directory)

    if not args.paths:
        interactive_menu(config, tools, config_path, workers=args.workers)
        return 0

    counters = run_batch(args.paths, config, tools, workers=args.workers)
    print_summary(counters)
    return 1 if counters.failed else 0


if __name__ == "__main__":
    sys.exit(main())
