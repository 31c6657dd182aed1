"""Catalog file persistence and export.

The catalog is a JSON array of project records:

```json
[
  {
    "name": "api",
    "path": "/home/me/api",
    "command": "python main.py",
    "link": "http://localhost:8000/docs",
    "category": "Web"
  }
]
```

`link` and `category` may be absent; absent, null and empty are treated alike.

Exports can also be written as YAML, grouped by category:

```yaml
catalog:
  version: "1.0"
  generated_at: "2026-01-17T10:30:00Z"
  count: 3
categories:
  Web:
    - name: api
      path: /home/me/api
      command: python main.py
```
"""

import json
import logging
from datetime import datetime, timezone
from itertools import groupby
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from project_launcher.models import Record


logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = "1.0"

EXPORT_FORMATS = ("yaml", "json")


class CatalogWriteError(OSError):
    """Raised when the catalog file cannot be written."""


class CatalogStore:
    """Loads and stores the ordered record list at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> list[Record]:
        """Load the catalog.

        A missing, unreadable or malformed file yields an empty catalog.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No catalog at %s", self.path)
            return []
        except OSError as e:
            logger.warning("Cannot read catalog %s: %s", self.path, e)
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Catalog %s is not valid JSON: %s", self.path, e)
            return []

        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Catalog %s does not hold a list", self.path)
            return []

        try:
            return [Record.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning("Catalog %s has invalid entries: %s", self.path, e)
            return []

    def save(self, records: Iterable[Record]) -> None:
        """Write the catalog as indented JSON.

        Raises:
            CatalogWriteError: If the file or its directory cannot be written.
        """
        payload = [record.model_dump() for record in records]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise CatalogWriteError(f"cannot write {self.path}: {e.strerror or e}") from e
        logger.debug("Saved %d records to %s", len(payload), self.path)


def generate_export(records: list[Record]) -> dict:
    """Build the grouped export document for a catalog.

    Records are grouped under their display category, in display order.
    """
    from project_launcher.display import sort_records

    ordered = sort_records(records)
    categories: dict[str, list[dict]] = {}
    for category, group in groupby(ordered, key=lambda r: r.display_category):
        entries = categories.setdefault(category, [])
        for record in group:
            entry = {
                "name": record.name,
                "path": record.path,
                "command": record.command,
            }
            if record.link:
                entry["link"] = record.link
            entries.append(entry)

    return {
        "catalog": {
            "version": EXPORT_FORMAT_VERSION,
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "count": len(records),
        },
        "categories": categories,
    }


def export_catalog(
    records: list[Record],
    fmt: str = "yaml",
    output_path: Optional[Path] = None,
) -> str:
    """Export a catalog to YAML or JSON.

    Args:
        records: Catalog records in storage order
        fmt: "yaml" for the grouped document, "json" for the plain record array
        output_path: Optional path to write file to

    Returns:
        The exported text
    """
    if fmt == "yaml":
        content = yaml.dump(
            generate_export(records),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=100,
        )
    elif fmt == "json":
        content = json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False)
    else:
        raise ValueError(f"unknown export format: {fmt}")

    if output_path:
        output_path.write_text(content, encoding="utf-8")

    return content
