"""Pydantic schemas for map snapshots.

These models mirror the dataclasses in ``grid.py`` but stay serializable, so
test maps and example maps can live in JSON next to the spawn settings.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class MapTileState(BaseModel):
    """Serializable description of one tile."""

    x: int
    y: int
    index: int = Field(-1, description="Back-layer spritesheet index (-1 = none)")
    properties: Dict[str, str] = Field(
        default_factory=dict,
        description="Back-layer tile properties, e.g. {'Type': 'Grass', 'Diggable': 'T'}",
    )
    open: bool = Field(True, description="Clear of obstructions and placeable")


class GameMapState(BaseModel):
    """Serializable map: dimensions plus either a sparse tile list or ASCII rows."""

    name: str
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    default_index: int = Field(-1, description="Index used for tiles not listed")
    default_properties: Dict[str, str] = Field(default_factory=dict)
    tiles: List[MapTileState] = Field(default_factory=list)
    rows: Optional[List[str]] = Field(
        None, description="Optional ASCII layout; characters are looked up in legend",
    )
    legend: Dict[str, MapTileState] = Field(
        default_factory=dict,
        description="Character → tile template used with rows (x/y ignored)",
    )
