"""
Atomic file writer - ensures no partial writes or corrupted files.
Implements temp-write → fsync → rename pattern for durability.
"""

import os
import stat
import tempfile
import time
from pathlib import Path
from typing import Any, Dict


class AtomicWriteError(Exception):
    """Raised when atomic write operations fail."""
    pass


def _target_mode(output_path: Path) -> int:
    """Permission bits for the final file: keep the existing mode, else 0666 minus umask."""
    if output_path.exists():
        return stat.S_IMODE(output_path.stat().st_mode)

    # os.umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_bytes_atomic(content: bytes, output_path: Path) -> Dict[str, Any]:
    """
    Write content atomically to prevent partial files.

    Uses temp-write → fsync → rename pattern for atomicity. The temp file
    lives in the target directory so the rename never crosses devices.

    Args:
        content: Encoded document to write
        output_path: Final path for the document

    Returns:
        Dictionary with write results

    Raises:
        AtomicWriteError: If the document could not be written
    """
    start_time = time.time()
    output_path = Path(output_path)
    temp_path = None

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
        temp_path = Path(temp_path_str)

        with os.fdopen(temp_fd, 'wb') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())  # Force write to disk

        # mkstemp creates the file 0600
        os.chmod(temp_path, _target_mode(output_path))

        # os.replace overwrites an existing target on every platform
        os.replace(temp_path, output_path)
        temp_path = None

    except OSError as e:
        raise AtomicWriteError(f"Failed to write {output_path}: {e}") from e

    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()

    return {
        'status': 'completed',
        'output_path': str(output_path),
        'bytes_written': len(content),
        'duration_seconds': time.time() - start_time
    }
