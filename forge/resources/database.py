"""
Game Database.

Handles loading and validation of static game data (level curves,
weapon definitions).
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema


class Database:
    """
    Central storage for static game data.

    Layout under ``data_path``::

        schemas/curve.schema.json
        schemas/weapon.schema.json
        database/curves/*.json
        database/weapons/*.json

    Each data file holds one record or a list of records keyed by ``id``.
    Records failing schema validation are logged and skipped.
    """

    CATEGORIES = {
        "curves": "curve.schema.json",
        "weapons": "weapon.schema.json",
    }

    def __init__(self, data_path: Path | str, validate: bool = True):
        self._data_path = Path(data_path)
        self._validate = validate
        self._schemas: dict[str, Any] = {}

        # Data stores
        self.curves: dict[str, Any] = {}
        self.weapons: dict[str, Any] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        self.curves = self._load_category("curves", self.CATEGORIES["curves"])
        self.weapons = self._load_category("weapons", self.CATEGORIES["weapons"])

        self.logger.info(
            "Loaded %d level curves, %d weapons.",
            len(self.curves),
            len(self.weapons),
        )

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning("Schema directory not found: %s", schema_dir)
            return

        for schema_file in schema_dir.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error("Failed to load schema %s: %s", schema_file, e)

    def _load_category(self, folder: str, schema_name: str) -> dict[str, Any]:
        """Load all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, Any] = {}

        if not category_dir.exists():
            self.logger.warning("Data directory not found: %s", category_dir)
            return data_store

        schema = self._schemas.get(schema_name)
        if schema is None and self._validate:
            self.logger.warning("No schema found for %s (%s)", folder, schema_name)
            return data_store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error("Failed to load %s: %s", file_path, e)
                continue

            records = data if isinstance(data, list) else [data]
            for record in records:
                if self._validate:
                    try:
                        jsonschema.validate(instance=record, schema=schema)
                    except jsonschema.ValidationError as e:
                        self.logger.error("Validation error in %s: %s", file_path, e.message)
                        continue
                if isinstance(record, dict) and 'id' in record:
                    if record['id'] in data_store:
                        self.logger.warning(
                            "Duplicate %s id '%s' in %s overrides earlier record",
                            folder, record['id'], file_path,
                        )
                    data_store[record['id']] = record

        return data_store

    def get_curve(self, curve_id: str) -> dict[str, Any] | None:
        return self.curves.get(curve_id)

    def get_weapon(self, weapon_id: str) -> dict[str, Any] | None:
        return self.weapons.get(weapon_id)
