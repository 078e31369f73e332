from pathlib import Path
import json
import os
import uuid


def write_json(path: Path, data) -> None:
  """Write JSON to a temp file, then atomically move it into place."""
  path.parent.mkdir(parents=True, exist_ok=True)
  tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")

  try:
    with tmp.open("w", encoding="utf-8") as f:
      json.dump(data, f, ensure_ascii=False, indent=2)
      f.flush()
      os.fsync(f.fileno())
    os.replace(tmp, path)
  except BaseException:
    tmp.unlink(missing_ok=True)
    raise


def read_json(path: Path):
  with path.open("r", encoding="utf-8") as f:
    return json.load(f)
