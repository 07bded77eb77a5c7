"""
Input path collection.

Turns a user-supplied path into the ordered list of candidate documents:
a single .docx/.epub file, the supported files directly inside a
directory, or every supported file below it when scanning recursively.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from docimages.errors import InputAccessError, UnsupportedInputError
from docimages.extract.base import ContainerKind

logger = logging.getLogger(__name__)


def is_supported_document(path: str | Path) -> bool:
    """Check if a path has a .docx or .epub extension."""
    return ContainerKind.from_path(path) is not None


class DirectorySource:
    """
    Supported documents inside a directory.

    Usage:
        for path in DirectorySource("./books", recursive=True).walk():
            print(path)
    """

    def __init__(self, root: str | Path, *, recursive: bool = False) -> None:
        """
        Initialize directory source.

        Args:
            root: Path to root directory
            recursive: Descend into subdirectories
        """
        self.root = Path(root)
        self.recursive = recursive
        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root}")

    def walk(self) -> list[Path]:
        """
        List supported documents, sorted for a stable order.

        Raises:
            InputAccessError: If the root directory cannot be read
        """
        if self.recursive:
            return self._walk_tree()

        try:
            children = sorted(self.root.iterdir())
        except OSError as e:
            raise InputAccessError(f"Could not read directory {self.root}: {e}") from e
        return [p for p in children if p.is_file() and is_supported_document(p)]

    def _walk_tree(self) -> list[Path]:
        root_error: list[OSError] = []

        def on_error(error: OSError) -> None:
            if Path(error.filename or "") == self.root:
                root_error.append(error)
            else:
                logger.warning("Could not access path: %s", error)

        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            # Sort in-place so os.walk descends in a stable order
            dirnames.sort()
            for filename in sorted(filenames):
                full_path = Path(dirpath) / filename
                if is_supported_document(full_path) and full_path.is_file():
                    found.append(full_path)

        if root_error:
            raise InputAccessError(
                f"Could not read directory {self.root}: {root_error[0]}"
            ) from root_error[0]
        return found


def collect_documents(path: str | Path, *, recursive: bool = False) -> list[Path]:
    """
    Collect candidate documents for one input path.

    Args:
        path: File or directory given by the user
        recursive: Include documents in subdirectories

    Returns:
        Document paths in processing order

    Raises:
        InputAccessError: If the path does not exist or cannot be read
        UnsupportedInputError: If a file is not .docx or .epub
    """
    target = Path(path)

    if not target.exists():
        raise InputAccessError(f"Input path does not exist: {target}")

    if target.is_dir():
        return DirectorySource(target, recursive=recursive).walk()

    if not is_supported_document(target):
        raise UnsupportedInputError(
            f"Unsupported file type: {target}. Supported types: .docx, .epub"
        )
    return [target]
