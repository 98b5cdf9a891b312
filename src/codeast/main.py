import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from .ast import NodeCountVisitor, PrettyPrintVisitor, Root, hash_tree
from .constants import ConverterConstants, WatchConstants
from .converters import ASTConverter
from .exceptions import ConversionError
from .paths import ProjectPaths
from .watcher import ASTWatcher


logger = logging.getLogger(__name__)

USAGE = """\
Usage: codeast <path-to-serialized-ast> [OPTIONS]

Modes:
  --mode=json       - Output the converted tree as JSON (default)
  --mode=tree       - Output an indented tree
  --mode=info       - Show a summary: imports, node counts, fingerprint
  --mode=watch      - Watch a directory (default: ./files) and convert changed .binary files

Conversion Options:
  --max-statement-depth=N|none    - Statement nesting bound (default: {statements})
  --max-declaration-depth=N|none  - Declaration nesting bound (default: {declarations})

Logging Options:
  --log-file=PATH   - Log to file (default: stderr only)
  --log-level=LEVEL - Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
""".format(
    statements=ConverterConstants.MAX_STATEMENT_DEPTH,
    declarations=ConverterConstants.MAX_DECLARATION_DEPTH,
)


def setup_logging(log_file: Path = None, level: str = "INFO"):
    """
    Configure logging to both file and console.

    Console output goes to stderr so JSON written to stdout stays parseable.

    Args:
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return root_logger


def summarize(root: Root) -> Dict[str, Any]:
    """Summary of a converted tree, as printed by --mode=info."""
    return {
        "imports": list(root.imports),
        "namespaces": [namespace.name for namespace in root.namespaces],
        "nodes": NodeCountVisitor().count(root),
        "fingerprint": hash_tree(root),
    }


def run_watch(directory: Path, converter: ASTConverter) -> None:
    """Watch directory until interrupted."""
    watcher = ASTWatcher(directory, converter)
    watcher.start()

    try:
        while watcher.running:
            time.sleep(WatchConstants.POLL_INTERVAL_SECONDS)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        watcher.stop()


def _parse_depth(value: str) -> Optional[int]:
    if value.lower() == "none":
        return None
    depth = int(value)
    if depth < 0:
        raise ValueError(f"Depth must be >= 0 or none, got {depth}")
    return depth


def _parse_level(value: str) -> str:
    if not isinstance(logging.getLevelName(value.upper()), int):
        raise ValueError(f"Unknown log level: {value}")
    return value


def main(argv: List[str] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    path = None
    mode = "json"
    log_file = None
    log_level = "INFO"
    converter_options = {}

    try:
        for arg in args:
            if not arg.startswith("--"):
                path = Path(arg)
            elif arg.startswith("--mode="):
                mode = arg.split("=", 1)[1]
            elif arg.startswith("--log-file="):
                log_file = Path(arg.split("=", 1)[1])
            elif arg.startswith("--log-level="):
                log_level = _parse_level(arg.split("=", 1)[1])
            elif arg.startswith("--max-statement-depth="):
                converter_options["max_statement_depth"] = _parse_depth(arg.split("=", 1)[1])
            elif arg.startswith("--max-declaration-depth="):
                converter_options["max_declaration_depth"] = _parse_depth(arg.split("=", 1)[1])
            else:
                raise ValueError(f"Unknown option: {arg}")
    except ValueError as e:
        print(e, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if mode not in ("json", "tree", "info", "watch") or (path is None and mode != "watch"):
        print(USAGE, file=sys.stderr)
        return 1

    setup_logging(log_file=log_file, level=log_level)
    converter = ASTConverter(**converter_options)

    if mode == "watch":
        try:
            run_watch(path or ProjectPaths().changed_files, converter)
        except FileNotFoundError as e:
            logger.error(f"Cannot watch: {e}")
            return 1
        return 0

    try:
        root = converter.convert(path.read_bytes())
    except FileNotFoundError:
        logger.error(f"File not found: {path}")
        return 1
    except ConversionError as e:
        logger.error(f"Conversion failed for {path}: {e}")
        return 1

    if mode == "tree":
        print(PrettyPrintVisitor().print(root))
    elif mode == "info":
        print(json.dumps(summarize(root), indent=2))
    else:
        print(root.to_json())

    return 0


if __name__ == "__main__":
    sys.exit(main())
