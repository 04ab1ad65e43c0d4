"""Export and import of progress data files."""
import json
import logging
from pathlib import Path

import yaml

from interview_tracker.models import ProgressState
from interview_tracker.snapshot import SnapshotError, dumps, parse_snapshot

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "interview-prep-data.json"


def export_data(state: ProgressState, file_path: str | Path = DEFAULT_EXPORT_NAME) -> dict:
    """Write the whole state as an indented JSON document."""
    path = Path(file_path)
    if path.is_dir():
        path = path / DEFAULT_EXPORT_NAME
    content = dumps(state, indent=2)
    path.write_text(content, encoding="utf-8")
    return {"filename": str(path), "length": len(content)}


def read_snapshot_file(file_path: str | Path) -> dict:
    """Parse an exported document; raises SnapshotError if unusable."""
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Cannot read {path.name}: {e}") from e
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SnapshotError(f"Invalid YAML: {e}") from e
        return parse_snapshot(data)
    return parse_snapshot(text)


def import_data(store, file_path: str | Path) -> dict:
    """Merge a previously exported file into the store's current state."""
    try:
        data = read_snapshot_file(file_path)
    except SnapshotError as e:
        logger.warning("Import of %s failed: %s", file_path, e)
        return {"ok": False, "message": f"Error importing data: {e}", "warnings": []}
    warnings = store.import_snapshot(data)
    return {"ok": True, "message": "Data imported successfully", "warnings": warnings}
