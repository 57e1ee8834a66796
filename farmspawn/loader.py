"""
Settings loading for JSON-defined farms.

SettingsLoader converts a JSON settings file into a SpawnSettings model and,
when the file carries them, a TileGrid of maps for offline runs and tests.
Only the fields the engine reads are understood; everything else in the file
is ignored.

Settings file structure:
```json
{
  "name": "Hilltop quarry",
  "description": "...",
  "ore_spawn_enabled": true,
  "quarry_tile_index": [556, 558, ...],
  "forage": {"areas": [...], "percent_extra_spawns_per_foraging_level": 10},
  "large_objects": {"areas": [{"map_name": "Farm", "object_types": ["Stump"], ...}]},
  "ore": {"areas": [{"map_name": "Farm", "terrain_types": ["Quarry"], ...}]},
  "maps": [{"name": "Farm", "width": 20, "height": 10, "rows": [...], "legend": {...}}]
}
```

Usage:
    loader = SettingsLoader()
    settings, grid = loader.load("hilltop")
    engine = SpawnEngine(settings, SpawnContext.from_config(grid, roster), placement=grid)

Errors here are raised, not logged: loading happens before a pass starts,
so a bad file should stop the caller instead of silently spawning nothing.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import Config
from .environment import GameMap, GameMapState, TileGrid
from .schemas import SpawnSettings

_SECTIONS = ("forage", "large_objects", "ore")


class SettingsLoader:
    """Load and validate spawn settings from JSON files.

    Directory structure:
    - Default: FARMSPAWN_SETTINGS_DIR (``{PROJECT_ROOT}/examples/settings``)
    - Override via constructor: SettingsLoader(Path("/custom/settings"))
    - Settings files: {name}.json (e.g., "hilltop.json")

    Validation:
    - Top level must be a JSON object
    - Each of forage/large_objects/ore, when present, must be an object with
      an ``areas`` list (if any)
    - Field types are enforced by the pydantic models (ValidationError)
    """

    def __init__(self, settings_dir: Optional[Path] = None):
        self.settings_dir = settings_dir or Config.SETTINGS_DIR

    def load(self, name: str) -> Tuple[SpawnSettings, TileGrid]:
        """Load settings by name.

        Args:
            name: File name without the .json extension

        Returns:
            Tuple of (SpawnSettings, TileGrid with any maps defined in the file)

        Raises:
            FileNotFoundError: If the file doesn't exist in settings_dir
            ValueError: If the JSON structure is not usable
            pydantic.ValidationError: If a field has the wrong type
            json.JSONDecodeError: If the file is not valid JSON
        """
        path = self.settings_dir / f"{name}.json"

        if not path.exists():
            raise FileNotFoundError(f"Settings '{name}' not found at {path}")

        return self.load_path(path)

    def load_path(self, path: Path) -> Tuple[SpawnSettings, TileGrid]:
        """Load settings from an explicit file path."""
        data = json.loads(Path(path).read_text())
        self._validate(data)

        maps = self._parse_maps(data.get("maps", []))
        settings_data = {key: value for key, value in data.items() if key in SpawnSettings.model_fields}
        settings = SpawnSettings.model_validate(settings_data)
        return settings, TileGrid(maps)

    def _validate(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise ValueError("Settings file must contain a JSON object")

        for section in _SECTIONS:
            if section not in data:
                continue
            block = data[section]
            if not isinstance(block, dict):
                raise ValueError(f"Settings section '{section}' must be an object")
            if "areas" in block and not isinstance(block["areas"], list):
                raise ValueError(f"Settings section '{section}.areas' must be a list")
            for area in block.get("areas", []):
                if not isinstance(area, dict) or "map_name" not in area:
                    raise ValueError(f"Every area in '{section}' needs a 'map_name'")

        if "maps" in data and not isinstance(data["maps"], list):
            raise ValueError("'maps' must be a list of map definitions")

    def _parse_maps(self, maps_data: List[Dict[str, Any]]) -> List[GameMap]:
        maps: List[GameMap] = []
        for map_data in maps_data:
            state = GameMapState.model_validate(map_data)
            maps.append(GameMap.from_state(state))
        return maps

    def list_settings(self) -> List[str]:
        """List all available settings files (without .json extension)."""
        if not self.settings_dir.exists():
            return []
        return sorted(
            f.stem for f in self.settings_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_settings_info(self, name: str) -> Dict[str, Any]:
        """Summarize a settings file without building models."""
        data = json.loads((self.settings_dir / f"{name}.json").read_text())
        return {
            "name": data.get("name", name),
            "description": data.get("description", "No description"),
            "num_areas": sum(len(data.get(section, {}).get("areas", [])) for section in _SECTIONS),
            "num_maps": len(data.get("maps", [])),
        }


def load_settings(name: str) -> Tuple[SpawnSettings, TileGrid]:
    """Convenience function to load settings from the default directory.

    Args:
        name: Name of the settings file to load

    Returns:
        Tuple of (SpawnSettings, TileGrid)
    """
    loader = SettingsLoader()
    return loader.load(name)
