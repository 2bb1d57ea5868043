"""
File I/O utilities
"""

import logging
import os
from typing import Dict, List

logger = logging.getLogger(__name__)


def save_artifacts(artifacts: Dict[str, str], output_dir: str = ".") -> List[str]:
    """
    Write generated artifacts to disk.

    Args:
        artifacts: {file_name: text} as returned by render_all
        output_dir: Directory to write into (created if missing)

    Returns:
        Paths of the written files, in artifact order
    """
    os.makedirs(output_dir, exist_ok=True)

    paths = []
    for file_name, text in artifacts.items():
        path = os.path.join(output_dir, file_name)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        logger.info("Wrote %s", path)
        paths.append(path)

    return paths
