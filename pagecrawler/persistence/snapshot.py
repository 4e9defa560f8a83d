"""JSON snapshot storage for session event logs.

A snapshot is the exported event log: a JSON array of ``{source: payload}``
objects. Writes go to a temporary sibling file that replaces the target only
once fully written, so a reader never sees a partial snapshot.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import aiofiles

logger = logging.getLogger(__name__)


async def write_snapshot(path: Union[str, Path], records: List[Dict[str, Any]]) -> Path:
    """Write exported records to a JSON file atomically.

    Args:
        path: Destination file
        records: Exported event records

    Returns:
        Resolved destination path

    Raises:
        OSError: If the file cannot be written
        TypeError: If a record is not JSON serializable
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    # Serialize before touching the filesystem
    content = json.dumps(records, default=str)

    tmp_path = target.with_name(f".{target.name}.tmp")
    try:
        async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
            await f.write(content)
        os.replace(tmp_path, target)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise

    logger.debug(f"Snapshot written: {target} ({len(records)} records)")
    return target


async def read_snapshot(path: Union[str, Path]) -> List[Any]:
    """Read a JSON snapshot.

    Args:
        path: Snapshot file

    Returns:
        Decoded list of records

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the content is not a JSON array
    """
    async with aiofiles.open(Path(path), 'r', encoding='utf-8') as f:
        content = await f.read()

    data = json.loads(content)
    if not isinstance(data, list):
        raise ValueError(f"Snapshot is not a list of records: {path}")
    return data
