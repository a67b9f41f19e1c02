"""
AssetLoader: the only place that reads generator input data from disk.

Everything downstream takes parsed values as arguments.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .models import Sections
from .skulls import texture_payload
from .table_parser import parse_outfit_table

logger = logging.getLogger(__name__)


class AssetLoader:
    """
    Loads the outfit table and the skull texture list.

    Both files are read once; callers keep the parsed results.
    """

    def __init__(
        self,
        table_path: Optional[Path] = None,
        skulls_path: Optional[Path] = None,
    ):
        """
        Initialize the loader.

        Args:
            table_path: Path to the outfit table text file
            skulls_path: Path to a file of skin texture hashes, one per line
        """
        self.table_text: str = ""
        self.sections: Sections = {}
        self.skull_payloads: List[str] = []

        if table_path:
            self.load_table(table_path)
        if skulls_path:
            self.load_skulls(skulls_path)

    def load_table(self, table_path: Path) -> Sections:
        """Read and parse the outfit table."""
        with open(table_path, "r", encoding="utf-8-sig") as f:
            self.table_text = f.read()

        self.sections = parse_outfit_table(self.table_text)
        logger.info(
            f"Loaded outfit table {table_path}: "
            f"{sum(len(e) for e in self.sections.values())} entries "
            f"in {len(self.sections)} sections"
        )
        return self.sections

    def load_skulls(self, skulls_path: Path) -> List[str]:
        """Read texture hashes and encode each into a textures payload."""
        with open(skulls_path, "r", encoding="utf-8-sig") as f:
            hashes = [line.strip() for line in f.read().splitlines()]

        self.skull_payloads = [texture_payload(h) for h in hashes if h]
        logger.info(f"Loaded {len(self.skull_payloads)} skull textures from {skulls_path}")
        return self.skull_payloads
