import time

from disk_search.utils.logger import get_logger

logger = get_logger("Search")

MATCH_SCORE = 1000
DEFAULT_MINIMUM_SCORE = 20


def file_stem(name):
    """Name without its final extension; 'archive.tar.gz' -> 'archive.tar'.

    A name with nothing before its last dot ('.bashrc') is its own stem.
    """
    before, dot, _ = name.rpartition(".")
    if not dot or not before:
        return name
    return before


def score_filename(filename, query):
    """Case-insensitive containment: MATCH_SCORE if query occurs in filename, else 0."""
    if query.lower() in filename.lower():
        return MATCH_SCORE
    return 0


def search(query, index, minimum_score=DEFAULT_MINIMUM_SCORE):
    """
    Return (name, path) pairs from index whose stem scores at least minimum_score.

    Names are returned in their original case, in the index's iteration order.
    An empty query matches every entry.
    """
    start_time = time.perf_counter()

    results = []
    for filename, file_path in index.items():
        score = score_filename(file_stem(filename), query)
        if score >= minimum_score:
            results.append((filename, file_path))

    duration = time.perf_counter() - start_time
    logger.debug(f"Search for {query!r} matched {len(results)} of {len(index)} in {duration:.4f}s")
    return results
