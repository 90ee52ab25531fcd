"""Load Tiled maps into layers of resolved tiles and objects."""

from __future__ import annotations

import copy
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from quadkit.geometry import Rect
from quadkit.tiled_format import (
    Map,
    NonUniqueLayerName,
    TextureNotFound,
    TiledError,
    Tileset,
    parse_map,
    parse_tileset,
)

_U32_MAX = 2**32 - 1

Named = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _saturating_u32(value: float) -> int:
    """Convert like a float-to-u32 cast: truncate, clamp, NaN becomes 0."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _divide(a: float, b: float) -> float:
    if b:
        return a / b
    if a == 0:
        return math.nan
    return math.copysign(math.inf, a)


def _lookup(named: Named, name: str) -> tuple[bool, Any]:
    pairs = named.items() if isinstance(named, Mapping) else named
    for key, value in pairs:
        if key == name:
            return True, value
    return False, None


@dataclass
class MapObject:
    """An object from an object layer, in world and tile coordinates."""

    gid: int | None
    world_x: float
    world_y: float
    world_w: float
    world_h: float
    tile_x: int
    tile_y: int
    tile_w: int
    tile_h: int
    name: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class MapTile:
    """A placed tile: its id within the tileset, the tileset name and its type."""

    id: int
    tileset: str
    attrs: str


@dataclass
class MapLayer:
    objects: list[MapObject]
    width: int
    height: int
    data: list[MapTile | None]


@dataclass
class TileSet:
    texture: Any
    tilewidth: int
    tileheight: int
    columns: int
    spacing: int
    margin: int

    def sprite_rect(self, ix: int) -> Rect:
        """Source rectangle of tile ``ix``, shrunk slightly to avoid bleeding."""
        sw = float(self.tilewidth)
        sh = float(self.tileheight)
        sx = (ix % self.columns) * (sw + self.spacing) + self.margin
        sy = (ix // self.columns) * (sh + self.spacing) + self.margin
        return Rect(sx + 1.1, sy + 1.1, sw - 2.2, sh - 2.2)


@dataclass
class TiledMap:
    layers: dict[str, MapLayer]
    tilesets: dict[str, TileSet]
    raw_tiled_map: Map

    def _layer(self, layer: str) -> MapLayer:
        try:
            return self.layers[layer]
        except KeyError:
            raise KeyError(f"No such layer: {layer}") from None

    def contains_layer(self, layer: str) -> bool:
        return layer in self.layers

    def tiles(
        self, layer: str, rect: Rect | None = None
    ) -> Iterator[tuple[int, int, MapTile | None]]:
        """Iterate ``(x, y, tile)`` over ``rect`` (the whole map by default), row by row.

        The final cell of the rectangle is not produced.
        """
        found = self._layer(layer)
        if rect is None:
            rect = Rect(0.0, 0.0, float(self.raw_tiled_map.width), float(self.raw_tiled_map.height))
        return _iter_tiles(found, rect)

    def get_tile(self, layer: str, x: int, y: int) -> MapTile | None:
        found = self._layer(layer)
        if x >= found.width or y >= found.height:
            return None
        return found.data[y * found.width + x]


def _iter_tiles(layer: MapLayer, rect: Rect) -> Iterator[tuple[int, int, MapTile | None]]:
    x0 = _saturating_u32(rect.x)
    y0 = _saturating_u32(rect.y)
    x_end = x0 + _saturating_u32(rect.w)
    y_end = y0 + _saturating_u32(rect.h)

    x, y = x0, y0
    while True:
        if x + 1 >= x_end:
            next_x, next_y = x0, y + 1
        else:
            next_x, next_y = x + 1, y
        if next_y >= y_end:
            return
        yield x, y, layer.data[y * layer.width + x]
        x, y = next_x, next_y


def _resolve_tileset(tileset: Tileset, external_tilesets: Named) -> Tileset:
    if not tileset.source:
        return copy.deepcopy(tileset)
    found, data = _lookup(external_tilesets, tileset.source)
    if not found:
        raise TiledError(f"external tileset not found: {tileset.source}")
    resolved = parse_tileset(data)
    resolved.firstgid = tileset.firstgid
    return resolved


def _resolve_tile(gid: int, tilesets: list[Tileset]) -> MapTile | None:
    for tileset in tilesets:
        if tileset.firstgid <= gid < tileset.firstgid + tileset.tilecount:
            local_id = gid - tileset.firstgid
            attrs = next(
                (tile.type for tile in tileset.tiles if tile.id == local_id), None
            )
            return MapTile(id=local_id, tileset=tileset.name, attrs=attrs or "")
    return None


def load_map(
    data: str,
    textures: Named,
    external_tilesets: Named = (),
) -> TiledMap:
    """Load a Tiled JSON map.

    ``textures`` maps image names used in the JSON to texture objects;
    ``external_tilesets`` maps tileset ``source`` names to their JSON text.
    """
    raw = parse_map(data)

    tilesets: dict[str, TileSet] = {}
    map_tilesets: list[Tileset] = []
    for entry in raw.tilesets:
        tileset = _resolve_tileset(entry, external_tilesets)
        found, texture = _lookup(textures, tileset.image)
        if not found:
            raise TextureNotFound(tileset.image)
        tilesets[tileset.name] = TileSet(
            texture=texture,
            tilewidth=tileset.tilewidth,
            tileheight=tileset.tileheight,
            columns=tileset.columns,
            spacing=tileset.spacing,
            margin=tileset.margin,
        )
        map_tilesets.append(tileset)

    tile_width = float(raw.tilewidth)
    tile_height = float(raw.tileheight)

    layers: dict[str, MapLayer] = {}
    for layer in raw.layers:
        if layer.name in layers:
            raise NonUniqueLayerName(layer.name)

        objects = [
            MapObject(
                gid=obj.gid,
                world_x=obj.x,
                world_y=obj.y,
                world_w=obj.width,
                world_h=obj.height,
                tile_x=_saturating_u32(_divide(obj.x, tile_width)),
                tile_y=_saturating_u32(_divide(obj.y, tile_height)),
                tile_w=_saturating_u32(_divide(obj.width, tile_width)),
                tile_h=_saturating_u32(_divide(obj.height, tile_height)),
                name=obj.name,
                properties={prop.name: prop.value for prop in obj.properties},
            )
            for obj in layer.objects
        ]

        layers[layer.name] = MapLayer(
            objects=objects,
            width=layer.width,
            height=layer.height,
            data=[_resolve_tile(gid, map_tilesets) for gid in layer.data],
        )

    return TiledMap(layers=layers, tilesets=tilesets, raw_tiled_map=raw)