import os
import shutil
from pathlib import Path


def ensure_dir(path: Path, mode: int | None = None) -> None:
    """Create a directory (and parents) if it doesn't exist.

    When *mode* is given it is applied explicitly, since ``mkdir`` is subject
    to the process umask and does nothing for an existing directory.
    """
    path.mkdir(parents=True, exist_ok=True)
    if mode is not None:
        os.chmod(path, mode)


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree at *path* if present."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def copy_with_mode(src: Path, dst: Path, mode: int) -> Path:
    """Copy *src* to *dst* (content only) and set *mode* on the copy.

    The destination is replaced if it exists so that a stale copy with looser
    permissions never survives. The new file is created with *mode* already
    set, so its content is never readable under a wider mode.
    """
    if dst.exists() or dst.is_symlink():
        dst.unlink()
    fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    with os.fdopen(fd, "wb") as out, open(src, "rb") as inp:
        # os.open's mode is filtered by the umask; set it exactly.
        os.fchmod(out.fileno(), mode)
        shutil.copyfileobj(inp, out)
    return dst
