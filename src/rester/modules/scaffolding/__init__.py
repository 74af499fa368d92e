"""Scaffolding Package - generate request definition modules.

Creates a group package with a leaf request definition and, optionally,
a shared base class for the group. Existing files are never
overwritten.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .templates import (
    base_class_name,
    get_base_template,
    get_standalone_template,
    get_template,
    to_module_name,
)


logger = logging.getLogger("rester.scaffolding")


@dataclass
class ScaffoldResult:
    """Files touched by a scaffolding run."""

    folder: Path
    folder_created: bool = False
    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def _write_if_absent(
    folder: Path,
    class_name: str,
    group: str,
    template: Callable[[str, str], str],
    result: ScaffoldResult,
) -> None:
    file_path = folder / f"{to_module_name(class_name)}.py"
    if file_path.exists():
        logger.info(f"Skipping existing file: {file_path}")
        result.skipped.append(file_path)
        return

    file_path.write_text(template(class_name, group), encoding="utf-8")
    logger.info(f"Class {class_name} created successfully.")
    result.created.append(file_path)


def scaffold_api(
    root: str | Path,
    group: str,
    api_name: str,
    base_class: bool = True,
) -> ScaffoldResult:
    """Generate request definition modules for a group.

    Args:
        root: Directory holding the group packages.
        group: Group name, e.g. "Billing". The package is its snake case.
        api_name: Class name of the request definition.
        base_class: Also generate a "<Group>Base" class supplying the
            base URL. Without it, the leaf supplies a final endpoint.

    Returns:
        ScaffoldResult listing created and skipped files.

    Raises:
        ValueError: If group or api_name is empty.
    """
    if not group or not api_name:
        raise ValueError("Both group and api_name are required")

    folder = Path(root) / to_module_name(group)
    result = ScaffoldResult(folder=folder)

    if not folder.exists():
        folder.mkdir(parents=True)
        result.folder_created = True
        logger.info(f"Created directory: {folder}")
    else:
        logger.info(f"Directory already exists: {folder}")

    init_file = folder / "__init__.py"
    if not init_file.exists():
        init_file.write_text("", encoding="utf-8")

    if not base_class:
        _write_if_absent(folder, api_name, group, get_standalone_template, result)
        return result

    _write_if_absent(folder, api_name, group, get_template, result)
    _write_if_absent(folder, base_class_name(group), group, get_base_template, result)
    return result


__all__ = ["ScaffoldResult", "scaffold_api"]
