"""Data model and strict JSON reader for Tiled map files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

Converter = Callable[[Any, str], Any]


class TiledError(Exception):
    """Base class for errors while loading a Tiled map."""


class JsonError(TiledError):
    """The JSON text is malformed or does not match the expected schema."""

    def __init__(self, msg: str, line: int = 0, col: int = 0) -> None:
        self.msg = msg
        self.line = line
        self.col = col
        super().__init__(f'JsonError {{ msg: "{msg}", line: {line}, col: {col} }}')


class NonUniqueLayerName(TiledError):
    def __init__(self, layer: str) -> None:
        self.layer = layer
        super().__init__(
            "Layer name should be unique to load tiled level, "
            f"non-unique layer name: {layer}"
        )


class TextureNotFound(TiledError):
    def __init__(self, texture: str) -> None:
        self.texture = texture
        super().__init__(f'TextureNotFound {{ texture: "{texture}" }}')


@dataclass
class Grid:
    width: int
    height: int


@dataclass
class Property:
    name: str = ""
    value: str = ""
    type: str = ""


@dataclass
class Frame:
    duration: int
    tileid: int


@dataclass
class Tile:
    animation: list[Frame] = field(default_factory=list)
    id: int = 0
    image: str | None = None
    imagewidth: int = 0
    imageheight: int = 0
    objectgroup: dict[str, Any] | None = None
    properties: list[Property] = field(default_factory=list)
    terrain: list[int] = field(default_factory=list)
    type: str | None = None


@dataclass
class Tileoffset:
    x: int
    y: int


@dataclass
class Terrain:
    name: str
    tile: int


@dataclass
class Tileset:
    columns: int = 0
    firstgid: int = 0
    grid: Grid | None = None
    image: str = ""
    imagewidth: int = 0
    imageheight: int = 0
    margin: int = 0
    name: str = ""
    properties: list[Property] = field(default_factory=list)
    spacing: int = 0
    terrains: list[Terrain] | None = None
    tilecount: int = 0
    tileheight: int = 0
    tileoffset: Tileoffset | None = None
    tiles: list[Tile] = field(default_factory=list)
    tilewidth: int = 0
    transparentcolor: str | None = None
    source: str = ""


@dataclass
class Chunk:
    data: list[int] = field(default_factory=list)
    height: int = 0
    width: int = 0
    x: int = 0
    y: int = 0


@dataclass
class PolyPoint:
    x: float
    y: float


@dataclass
class Object:
    id: int = 0
    name: str = ""
    type: str = ""
    gid: int | None = None
    ellipse: bool | None = None
    polygon: list[PolyPoint] | None = None
    properties: list[Property] = field(default_factory=list)
    rotation: float = 0.0
    visible: bool = False
    height: float = 0.0
    width: float = 0.0
    x: float = 0.0
    y: float = 0.0


@dataclass
class Layer:
    chunks: list[Chunk] | None = None
    name: str = ""
    opacity: float = 0.0
    properties: dict[str, str] | None = None
    visible: bool = False
    width: int = 0
    height: int = 0
    type: str = ""
    data: list[int] = field(default_factory=list)
    draworder: str | None = None
    objects: list[Object] = field(default_factory=list)
    offsetx: int | None = None
    offsety: int | None = None
    x: float | None = None
    y: float | None = None


@dataclass
class Map:
    backgroundcolor: str = ""
    height: int = 0
    properties: list[Property] = field(default_factory=list)
    orientation: str = ""
    renderorder: str = ""
    tileheight: int = 0
    tilewidth: int = 0
    layers: list[Layer] = field(default_factory=list)
    tilesets: list[Tileset] = field(default_factory=list)
    version: str = ""
    width: int = 0
    type: str = ""


def _mismatch(path: str, expected: str) -> JsonError:
    return JsonError(f"{path or 'document'}: expected {expected}")


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise _mismatch(path, "a string")
    return value


def _boolean(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise _mismatch(path, "a boolean")
    return value


def _float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(path, "a number")
    return float(value)


def _integer(low: int, high: int) -> Converter:
    def convert(value: Any, path: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(path, "an integer")
        if not low <= value <= high:
            raise JsonError(f"{path}: {value} is out of range")
        return value

    return convert


_I32 = _integer(-(2**31), 2**31 - 1)
_U32 = _integer(0, 2**32 - 1)
_USIZE = _integer(0, 2**64 - 1)


class _Optional:
    """Converter that also accepts null and may be absent."""

    def __init__(self, inner: Converter) -> None:
        self.inner = inner

    def __call__(self, value: Any, path: str) -> Any:
        return None if value is None else self.inner(value, path)


def _list_of(inner: Converter) -> Converter:
    def convert(value: Any, path: str) -> list[Any]:
        if not isinstance(value, list):
            raise _mismatch(path, "an array")
        return [inner(item, f"{path}[{index}]") for index, item in enumerate(value)]

    return convert


def _string_map(value: Any, path: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise _mismatch(path, "an object")
    return {key: _string(item, f"{path}.{key}") for key, item in value.items()}


def _any_object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _mismatch(path, "an object")
    return dict(value)


def _record(cls: type, spec: dict[str, Converter], *, lenient: bool) -> Converter:
    """Converter for a JSON object; ``lenient`` lets any field be absent."""

    def convert(value: Any, path: str) -> Any:
        if not isinstance(value, dict):
            raise _mismatch(path, "an object")
        kwargs: dict[str, Any] = {}
        for name, conv in spec.items():
            where = f"{path}.{name}" if path else name
            if name in value:
                kwargs[name] = conv(value[name], where)
            elif isinstance(conv, _Optional):
                kwargs[name] = None
            elif not lenient:
                raise JsonError(f"{where}: key not found")
        return cls(**kwargs)

    return convert


_GRID = _record(Grid, {"width": _I32, "height": _I32}, lenient=False)
_STRICT_PROPERTY = _record(
    Property, {"name": _string, "value": _string, "type": _string}, lenient=False
)
_LENIENT_PROPERTY = _record(
    Property, {"name": _string, "type": _string, "value": _string}, lenient=True
)
_FRAME = _record(Frame, {"duration": _I32, "tileid": _I32}, lenient=False)
_TILE = _record(
    Tile,
    {
        "animation": _list_of(_FRAME),
        "id": _USIZE,
        "image": _Optional(_string),
        "imagewidth": _I32,
        "imageheight": _I32,
        "objectgroup": _Optional(_any_object),
        "properties": _list_of(_STRICT_PROPERTY),
        "terrain": _list_of(_I32),
        "type": _Optional(_string),
    },
    lenient=True,
)
_TILEOFFSET = _record(Tileoffset, {"x": _I32, "y": _I32}, lenient=False)
_TERRAIN = _record(Terrain, {"name": _string, "tile": _I32}, lenient=False)
_TILESET = _record(
    Tileset,
    {
        "columns": _I32,
        "firstgid": _U32,
        "grid": _Optional(_GRID),
        "image": _string,
        "imagewidth": _I32,
        "imageheight": _I32,
        "margin": _I32,
        "name": _string,
        "properties": _list_of(_STRICT_PROPERTY),
        "spacing": _I32,
        "terrains": _Optional(_list_of(_TERRAIN)),
        "tilecount": _U32,
        "tileheight": _I32,
        "tileoffset": _Optional(_TILEOFFSET),
        "tiles": _list_of(_TILE),
        "tilewidth": _I32,
        "transparentcolor": _Optional(_string),
        "source": _string,
    },
    lenient=True,
)
_CHUNK = _record(
    Chunk,
    {"data": _list_of(_U32), "height": _USIZE, "width": _USIZE, "x": _I32, "y": _I32},
    lenient=True,
)
_POLY_POINT = _record(PolyPoint, {"x": _float, "y": _float}, lenient=False)
_OBJECT = _record(
    Object,
    {
        "id": _U32,
        "name": _string,
        "type": _string,
        "gid": _Optional(_U32),
        "ellipse": _Optional(_boolean),
        "polygon": _Optional(_list_of(_POLY_POINT)),
        "properties": _list_of(_LENIENT_PROPERTY),
        "rotation": _float,
        "visible": _boolean,
        "height": _float,
        "width": _float,
        "x": _float,
        "y": _float,
    },
    lenient=True,
)
_LAYER = _record(
    Layer,
    {
        "chunks": _Optional(_list_of(_CHUNK)),
        "name": _string,
        "opacity": _float,
        "properties": _Optional(_string_map),
        "visible": _boolean,
        "width": _U32,
        "height": _U32,
        "type": _string,
        "data": _list_of(_U32),
        "draworder": _Optional(_string),
        "objects": _list_of(_OBJECT),
        "offsetx": _Optional(_I32),
        "offsety": _Optional(_I32),
        "x": _Optional(_float),
        "y": _Optional(_float),
    },
    lenient=True,
)
_MAP = _record(
    Map,
    {
        "backgroundcolor": _string,
        "height": _U32,
        "properties": _list_of(_STRICT_PROPERTY),
        "orientation": _string,
        "renderorder": _string,
        "tileheight": _U32,
        "tilewidth": _U32,
        "layers": _list_of(_LAYER),
        "tilesets": _list_of(_TILESET),
        "version": _string,
        "width": _U32,
        "type": _string,
    },
    lenient=True,
)


def _load(data: str) -> Any:
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise JsonError(exc.msg, exc.lineno, exc.colno) from exc


def parse_map(data: str) -> Map:
    """Read a Tiled JSON map; raises JsonError on bad JSON or schema mismatch."""
    return _MAP(_load(data), "")


def parse_tileset(data: str) -> Tileset:
    """Read a standalone Tiled JSON tileset."""
    return _TILESET(_load(data), "")