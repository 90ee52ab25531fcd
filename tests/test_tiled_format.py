import json

import pytest

from quadkit.tiled_format import (
    Frame,
    JsonError,
    Map,
    NonUniqueLayerName,
    PolyPoint,
    Property,
    TextureNotFound,
    TiledError,
    parse_map,
    parse_tileset,
)


def test_empty_map_uses_defaults():
    assert parse_map("{}") == Map()


def test_layer_defaults_are_zero_values():
    result = parse_map(json.dumps({"layers": [{"name": "ground"}]}))
    layer = result.layers[0]
    assert layer.name == "ground"
    assert layer.visible is False
    assert layer.data == []
    assert layer.chunks is None and layer.offsetx is None


def test_full_map_round_trip_values():
    document = {
        "width": 4,
        "height": 3,
        "tilewidth": 16,
        "tileheight": 16,
        "type": "map",
        "properties": [{"name": "music", "value": "theme", "type": "string"}],
        "layers": [
            {
                "name": "tiles",
                "type": "tilelayer",
                "width": 4,
                "height": 3,
                "data": [1, 2, 0, 3],
                "properties": {"solid": "true"},
                "visible": True,
            },
            {
                "name": "objects",
                "type": "objectgroup",
                "objects": [
                    {
                        "id": 7,
                        "name": "spawn",
                        "gid": 5,
                        "x": 32,
                        "y": 48.5,
                        "polygon": [{"x": 0, "y": 1.5}],
                        "properties": [{"name": "kind"}],
                    }
                ],
            },
        ],
        "tilesets": [{"name": "main", "image": "tiles.png", "firstgid": 1, "tilecount": 8}],
    }
    result = parse_map(json.dumps(document))
    assert (result.width, result.height, result.type) == (4, 3, "map")
    assert result.properties == [Property("music", "theme", "string")]
    tiles, objects = result.layers
    assert tiles.data == [1, 2, 0, 3]
    assert tiles.properties == {"solid": "true"}
    assert tiles.visible is True
    obj = objects.objects[0]
    assert obj.gid == 5 and obj.name == "spawn"
    assert obj.x == 32.0 and obj.y == 48.5
    assert obj.polygon == [PolyPoint(0.0, 1.5)]
    assert obj.properties == [Property(name="kind")]
    assert result.tilesets[0].image == "tiles.png"
    assert result.tilesets[0].tiles == []


def test_parse_tileset_with_tiles():
    document = {
        "name": "main",
        "columns": 4,
        "tilecount": 16,
        "tiles": [
            {"id": 3, "type": "wall", "animation": [{"duration": 100, "tileid": 2}]}
        ],
        "grid": {"width": 16, "height": 16},
    }
    tileset = parse_tileset(json.dumps(document))
    assert tileset.columns == 4
    assert tileset.tiles[0].type == "wall"
    assert tileset.tiles[0].animation == [Frame(duration=100, tileid=2)]
    assert tileset.grid is not None and tileset.grid.width == 16
    assert tileset.source == ""


def test_missing_required_key_in_strict_record():
    document = {"tiles": [{"animation": [{"duration": 100}]}]}
    with pytest.raises(JsonError):
        parse_tileset(json.dumps(document))


def test_map_properties_require_all_keys():
    with pytest.raises(JsonError):
        parse_map(json.dumps({"properties": [{"name": "a", "value": "b"}]}))


def test_wrong_type_is_rejected():
    with pytest.raises(JsonError):
        parse_map(json.dumps({"width": "10"}))
    with pytest.raises(JsonError):
        parse_map(json.dumps({"layers": [{"visible": 1}]}))


def test_negative_unsigned_is_rejected():
    with pytest.raises(JsonError):
        parse_map(json.dumps({"layers": [{"data": [1, -1]}]}))


def test_null_accepted_only_for_optional():
    result = parse_map(json.dumps({"layers": [{"draworder": None}]}))
    assert result.layers[0].draworder is None
    with pytest.raises(JsonError):
        parse_map(json.dumps({"layers": [{"name": None}]}))


def test_malformed_json_reports_position():
    with pytest.raises(JsonError) as info:
        parse_map('{\n  "width": }')
    assert info.value.line == 2
    assert isinstance(info.value, TiledError)


def test_error_messages():
    assert str(NonUniqueLayerName("ground")).endswith("non-unique layer name: ground")
    assert "tiles.png" in str(TextureNotFound("tiles.png"))
    assert TextureNotFound("tiles.png").texture == "tiles.png"