import os
import time

from disk_search.indexer.file_index import FileIndex
from disk_search.utils.logger import get_logger

logger = get_logger("Indexer")


def build_index(root_path, skip_name=None):
    """
    Walk root_path recursively and return a FileIndex of every entry under it.

    Directories named skip_name, and symlinks to directories with that name,
    are left out together with everything below them. Entries are visited in
    name order, depth-first, so when two entries share a name the one visited
    last keeps its path. Unreadable directories and undecodable names are
    logged and skipped.
    """
    start_time = time.perf_counter()
    root = os.path.abspath(root_path)
    index = FileIndex()
    stats = {"errors": 0}

    if skip_name and os.path.basename(root) == skip_name:
        logger.info(f"Root {root} matches skipped directory name, index is empty")
        return index

    _walk(root, skip_name, index, stats)

    duration = time.perf_counter() - start_time
    logger.info(
        f"Indexed {len(index)} entries under {root} in {duration:.2f}s "
        f"({stats['errors']} skipped on errors)"
    )
    return index


def _walk(root, skip_name, index, stats):
    # One iterator per open directory, innermost last; entries come out in
    # name order, depth-first.
    stack = [iter(_read_entries(root, stats))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if not _is_valid_name(entry.name):
            stats["errors"] += 1
            logger.warning(f"Skipping entry with undecodable name in {os.path.dirname(entry.path)}: {entry.name!r}")
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Could not stat {entry.path}: {e}")
            is_dir = False

        if entry.name == skip_name and (is_dir or _is_dir_link(entry)):
            continue

        index.add(entry.name, entry.path)

        if is_dir:
            stack.append(iter(_read_entries(entry.path, stats)))


def _read_entries(path, stats):
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        stats["errors"] += 1
        logger.warning(f"Error reading directory {path}: {e}")
        return []


def _is_dir_link(entry):
    try:
        return entry.is_symlink() and entry.is_dir()
    except OSError:
        return False


def _is_valid_name(name):
    # Undecodable bytes surface as lone surrogates, which UTF-8 rejects.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
