"""YAML file helpers."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger("gardenctl.utils.files")


def write_yaml_file(path: Union[str, Path], data: Dict[str, Any], mode: int = 0o600) -> None:
    """Atomically write a YAML file with the given data.

    The document is written to a temporary file in the same directory and
    renamed over ``path``, so readers see either the old or the new file.

    Args:
        path: Path to the YAML file
        data: Data to write as YAML
        mode: File permissions (default: 0o600)

    Raises:
        OSError: If the file cannot be written or renamed
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.stem}_", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
        logger.debug(f"Atomic write complete: {path}")
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def read_yaml_file(path: Union[str, Path]) -> Any:
    """Read a YAML file and return its parsed contents.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
