"""Rebuild a zipapp-packaged script when its sources change, then re-run it.

A script shipped as ``tool.pyz`` and built from ``src/__main__.py`` calls
``rebuild(sys.argv, "src/__main__.py")`` at start-up. ``main_path`` is the
entry file on disk, never the running ``__file__`` (inside the archive
that is ``tool.pyz/__main__.py``, which cannot be rebuilt from). If any
source is newer than the archive, the archive is rebuilt from
``main_path``'s directory and the fresh copy is executed with the same
arguments; the stale process then exits. An archive kept inside the
source directory is left out of its own rebuild.

The flag registry does not depend on this module.
"""

import logging
import subprocess
import sys
import zipapp
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


class LogLevel(Enum):
    """Message levels for the rebuild helper. NO_LOGS drops the message."""
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    NO_LOGS = None


def log_message(level: LogLevel, message: str) -> None:
    if level is LogLevel.NO_LOGS:
        return
    log.log(level.value, message)


def needs_rebuild(output_path: PathLike, source_paths: Iterable[PathLike]) -> bool:
    """Check whether the output is missing or older than any source."""
    try:
        output_time = Path(output_path).stat().st_mtime
    except OSError:
        return True

    for source_path in source_paths:
        try:
            source_time = Path(source_path).stat().st_mtime
        except OSError:
            return True
        if output_time < source_time:
            return True
    return False


def rebuild(argv: Sequence[str], main_path: PathLike, extra_sources: Sequence[PathLike] = ()) -> None:
    """Rebuild a compressed archive from main_path's directory if it is stale.

    The first entry in ``argv`` must be the path to the archive.
    """
    rebuild_archive(argv, main_path, extra_sources, compressed=True)


def rebuild_archive(
    argv: Sequence[str],
    main_path: PathLike,
    extra_sources: Sequence[PathLike] = (),
    interpreter: Optional[str] = None,
    entry_point: Optional[str] = None,
    compressed: bool = False,
) -> None:
    """Rebuild with explicit zipapp options.

    Args:
        argv: Process arguments; argv[0] is the archive path
        main_path: Entry file on disk; its directory is archived
        extra_sources: More files whose changes trigger a rebuild
        interpreter: Shebang interpreter written into the archive
        entry_point: ``module:function`` to run instead of ``__main__.py``
        compressed: Deflate the archive members

    Raises:
        ValueError: If main_path's directory does not exist on disk

    Returns when the archive is fresh; otherwise never returns.
    """
    if not argv:
        return
    self_path, rest = Path(argv[0]), list(argv[1:])

    source_dir = Path(main_path).parent
    if not source_dir.is_dir():
        raise ValueError(
            f"main_path {str(main_path)!r} is not in a source directory on disk"
        )

    source_paths = [Path(main_path), *(Path(path) for path in extra_sources)]
    if not needs_rebuild(self_path, source_paths):
        return

    archive = self_path.resolve()

    def skip_archive(path: Path) -> bool:
        return (source_dir / path).resolve() != archive

    try:
        zipapp.create_archive(
            source_dir,
            self_path,
            interpreter=interpreter,
            main=entry_point,
            filter=skip_archive,
            compressed=compressed,
        )
    except (zipapp.ZipAppError, OSError) as exc:
        log_message(LogLevel.ERROR, f"Build failed: {exc}")
        sys.exit(1)

    log_message(LogLevel.INFO, "Build successful")
    subprocess.run([sys.executable, str(self_path), *rest])
    sys.exit(0)
