from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Mapping, Optional

from .errors import BuildError
from .render import write_text

SKIP_STATIC_SUFFIXES = {".html"}
SKIP_STATIC_NAMES = {".DS_Store"}


def clean_output_dir(output_dir: Path, project_root: Path) -> None:
    """Delete everything inside ``output_dir`` but keep the directory itself."""
    if not output_dir.exists():
        return
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved:
        raise BuildError("Refusing to clean project root.")
    if not output_resolved.is_relative_to(root_resolved):
        raise BuildError("Refusing to clean output directory outside project root.")

    dirs = []
    stack = [output_dir]
    while stack:
        current = stack.pop()
        for item in current.iterdir():
            if item.is_dir() and not item.is_symlink():
                dirs.append(item)
                stack.append(item)
            else:
                item.unlink()
    # children are always discovered after their parent
    for directory in reversed(dirs):
        directory.rmdir()


def write_pages(output_dir: Path, pages: Mapping[str, str]) -> None:
    for filename, text in pages.items():
        write_text(output_dir / filename, text)


def should_copy_static(path: Path) -> bool:
    return path.suffix not in SKIP_STATIC_SUFFIXES and path.name not in SKIP_STATIC_NAMES


def copy_static(
    static_dir: Path,
    output_dir: Path,
    on_copy: Optional[Callable[[Path, Path], None]] = None,
) -> None:
    """Copy ``static_dir`` into ``output_dir`` depth first, skipping html pages,
    ``.DS_Store`` files and symlinks."""
    stack = [(static_dir, output_dir)]
    while stack:
        src_dir, dst_dir = stack.pop()
        for item in sorted(src_dir.iterdir(), key=lambda p: p.name, reverse=True):
            dest = dst_dir / item.name
            if item.is_symlink():
                continue
            if item.is_dir():
                dest.mkdir(parents=True, exist_ok=True)
                stack.append((item, dest))
            elif item.is_file() and should_copy_static(item):
                if on_copy is not None:
                    on_copy(item, dest)
                shutil.copy2(item, dest)
