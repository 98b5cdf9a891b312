"""
Directory watching for serialized ASTs.

Intermediate serialized ASTs land in the changed-files folder (see
ProjectPaths.changed_files). ChangedASTHandler converts each one as it is
written and reports it only when its content fingerprint changed.
ASTWatcher runs the handler on a watchdog observer.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .ast import NodeCountVisitor, Root, hash_tree
from .constants import WatchConstants
from .converters import ASTConverter
from .exceptions import ConversionError
from .project import SourceCodeFileType

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Path, Root], None]


class ChangedASTHandler(FileSystemEventHandler):
    """
    Converts serialized AST files and tracks their fingerprints.

    A file is picked up when SourceCodeFileType classifies it as one of
    file_types. Events for the same file within debounce_seconds of the last
    one are ignored. on_change receives the path and the new tree whenever
    a file's fingerprint differs from the last one seen for that path.
    """

    def __init__(
        self,
        converter: ASTConverter,
        on_change: Optional[ChangeCallback] = None,
        file_types: Iterable[SourceCodeFileType] = WatchConstants.FILE_TYPES,
        debounce_seconds: float = WatchConstants.DEBOUNCE_SECONDS,
    ):
        self.converter = converter
        self.on_change = on_change
        self.file_types = frozenset(file_types)
        self.debounce_seconds = debounce_seconds
        self.fingerprints: Dict[Path, str] = {}
        self._last_seen: Dict[Path, float] = {}

    def accepts(self, path: Path) -> bool:
        return SourceCodeFileType.of(path) in self.file_types

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._on_event(Path(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._on_event(Path(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.forget(Path(event.src_path))
            self._on_event(Path(event.dest_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.forget(Path(event.src_path))

    def forget(self, path: Path) -> None:
        """Drop everything remembered about path."""
        self.fingerprints.pop(path, None)
        self._last_seen.pop(path, None)

    def _on_event(self, path: Path) -> None:
        if not self.accepts(path) or self._debounced(path):
            return

        # Runs on the observer thread; a failing callback must not end it
        try:
            self.process(path)
        except Exception as e:
            logger.error(f"[File Watch] Error processing {path.name}: {e}")

    def _debounced(self, path: Path) -> bool:
        now = time.monotonic()
        last_time = self._last_seen.get(path)

        # Entries outside the window no longer matter
        self._last_seen = {
            seen_path: seen_at for seen_path, seen_at in self._last_seen.items()
            if now - seen_at < self.debounce_seconds
        }
        if last_time is not None and now - last_time < self.debounce_seconds:
            return True

        self._last_seen[path] = now
        return False

    def process(self, path: Path) -> Optional[Root]:
        """
        Convert one file and report it if its content changed.

        Returns:
            The converted tree, or None when the file cannot be read or converted
        """
        try:
            root = self.converter.convert(path.read_bytes())
        except (OSError, ConversionError) as e:
            logger.error(f"[File Watch] Cannot convert {path.name}: {e}")
            return None

        fingerprint = hash_tree(root)
        if self.fingerprints.get(path) == fingerprint:
            logger.info(f"[File Watch] No changes detected in {path.name} (hash identical)")
            return root

        self.fingerprints[path] = fingerprint
        counts = NodeCountVisitor().count(root)
        logger.info(f"[File Watch] {path.name}: {fingerprint[:8]}... {counts}")

        if self.on_change:
            self.on_change(path, root)
        return root


class ASTWatcher:
    """
    Converts serialized ASTs in a directory as they appear or change.

    Usage:
        with ASTWatcher(ProjectPaths().changed_files, ASTConverter()) as watcher:
            ...  # watcher.handler.fingerprints fills up as files change
    """

    def __init__(self, directory: Path, converter: ASTConverter, **handler_options):
        self.directory = Path(directory)
        self.handler = ChangedASTHandler(converter, **handler_options)
        self._observer: Optional[Observer] = None

    def existing_files(self) -> Iterator[Path]:
        """Files already in the directory that the handler would pick up."""
        return (
            path for path in sorted(self.directory.rglob("*"))
            if path.is_file() and self.handler.accepts(path)
        )

    def scan(self) -> Dict[Path, Optional[Root]]:
        """Convert every file already present, without debouncing."""
        return {path: self.handler.process(path) for path in self.existing_files()}

    def start(self, scan: bool = True) -> None:
        """
        Start observing the directory.

        Args:
            scan: Convert the files already present before observing

        Raises:
            FileNotFoundError: If the directory does not exist
            RuntimeError: If the watcher is already running
        """
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Not a directory: {self.directory}")
        if self.running:
            raise RuntimeError("ASTWatcher is already running")

        if scan:
            converted = self.scan()
            logger.info(f"Converted {len(converted)} existing files in {self.directory}")

        self._observer = Observer()
        self._observer.schedule(self.handler, str(self.directory), recursive=True)
        self._observer.start()
        logger.info(f"Watching for serialized ASTs in: {self.directory}")

    def stop(self) -> None:
        if not self.running:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        logger.info("AST watcher stopped")

    @property
    def running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def __enter__(self) -> 'ASTWatcher':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
