"""
Target list loading.
"""

from pathlib import Path
from typing import List, Union

from website_checker.utils.errors import TargetListError
from website_checker.utils.logging import get_logger


logger = get_logger(__name__)


def parse_urls(text: str) -> List[str]:
    """
    Split target list text into URLs.

    Each line is stripped; blank lines are skipped. Order and duplicates are kept.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_urls(path: Union[str, Path]) -> List[str]:
    """
    Read the target list file.

    Args:
        path: Plain-text file with one URL per line

    Returns:
        URLs in file order

    Raises:
        TargetListError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise TargetListError(
            f"Failed to read target list {path}: {e}",
            {"path": str(path)}
        ) from e

    urls = parse_urls(text)
    logger.info(f"Loaded {len(urls)} targets from {path}")
    return urls
