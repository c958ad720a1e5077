"""
MapUtils against an in-memory host map.

Covers the batch property setters, layer and source registration,
visibility helpers, removal with missing-id tolerance, the load hook and
inline Jam Session compilation.
"""

from unittest.mock import MagicMock, call

import pytest

from config import StyleUtilsConfig
from exceptions import ContractViolationError, ExpressionSyntaxError
from map_utils import LayerHandle, MapUtils, init
from tests.factories.map_factories import (
    FakeMapHost,
    make_feature_collection,
    make_layer_id,
    make_source_id,
)

TILE_TEMPLATE = "http://tiles.example.com/tiles/{z}/{x}/{y}.pbf"


class TestInit:
    def test_returns_map_utils(self, host):
        assert isinstance(init(host), MapUtils)

    def test_host_not_modified(self, host):
        before = set(vars(host))
        init(host)
        assert set(vars(host)) == before

    def test_explicit_config(self, host):
        config = StyleUtilsConfig(raster_tile_size=256)
        assert init(host, config).config is config


class TestSetProperty:
    def test_paint_property(self, U, host):
        U.set_property("mylayer", "line-color", "red")
        host.set_paint_property.assert_called_once_with("mylayer", "line-color", "red")
        host.set_layout_property.assert_not_called()

    def test_layout_property(self, U, host):
        U.set_property("mylayer", "text-size", 12)
        host.set_layout_property.assert_called_once_with("mylayer", "text-size", 12)
        host.set_paint_property.assert_not_called()

    def test_camel_case_name(self, U, host):
        U.set_property("mylayer", "textSize", 12)
        host.set_layout_property.assert_called_once_with("mylayer", "text-size", 12)

    def test_multiple_properties(self, U, host):
        U.set_property("mylayer", {"textSize": 12, "textColor": "blue"})
        host.set_layout_property.assert_called_once_with("mylayer", "text-size", 12)
        host.set_paint_property.assert_called_once_with("mylayer", "text-color", "blue")

    def test_multiple_layers(self, U, host):
        U.set_property(["layer1", "layer2"], {"textSize": 12, "textColor": "blue"})
        assert host.set_layout_property.call_args_list == [
            call("layer1", "text-size", 12),
            call("layer2", "text-size", 12),
        ]
        assert host.set_paint_property.call_args_list == [
            call("layer1", "text-color", "blue"),
            call("layer2", "text-color", "blue"),
        ]

    def test_one_call_per_layer_and_property(self, U, host):
        layers = [make_layer_id() for _ in range(3)]
        U.set_property(layers, {"lineWidth": 2, "lineCap": "round"})
        assert host.set_paint_property.call_count == 3
        assert host.set_layout_property.call_count == 3

    def test_empty_layer_list(self, U, host):
        U.set_property([], "lineWidth", 2)
        host.set_paint_property.assert_not_called()

    def test_expression_value_passed_through(self, U, host):
        expression = ["get", "width"]
        U.set_property("roads", "lineWidth", expression)
        host.set_paint_property.assert_called_once_with("roads", "line-width", expression)

    def test_unknown_property_goes_to_layout(self, U, host):
        U.set_property("mylayer", "fooBar", 1)
        host.set_layout_property.assert_called_once_with("mylayer", "foo-bar", 1)

    def test_bad_layer_ids_rejected(self, U):
        with pytest.raises(ContractViolationError):
            U.set_property(42, "lineWidth", 2)


class TestStreamlinedSetters:
    def test_paint_setter(self, U, host):
        U.set_line_width("mylayer", 3)
        host.set_paint_property.assert_called_once_with("mylayer", "line-width", 3)

    def test_layout_setter(self, U, host):
        U.set_text_size(["a", "b"], 14)
        assert host.set_layout_property.call_args_list == [
            call("a", "text-size", 14),
            call("b", "text-size", 14),
        ]

    def test_multi_word_setter(self, U, host):
        U.set_fill_extrusion_height("buildings", 20)
        host.set_paint_property.assert_called_once_with("buildings", "fill-extrusion-height", 20)

    def test_unknown_setter_raises_attribute_error(self, U):
        with pytest.raises(AttributeError):
            U.set_not_a_property("x", 1)

    def test_other_missing_attribute(self, U):
        assert not hasattr(U, "frobnicate")


class TestVisibility:
    def test_show(self, U, host):
        U.show("mylayer")
        host.set_layout_property.assert_called_once_with("mylayer", "visibility", "visible")

    def test_hide(self, U, host):
        U.hide(["a", "b"])
        assert host.set_layout_property.call_args_list == [
            call("a", "visibility", "none"),
            call("b", "visibility", "none"),
        ]

    @pytest.mark.parametrize("state,expected", [(True, "visible"), (False, "none"), (1, "visible"), (0, "none")])
    def test_toggle(self, U, host, state, expected):
        U.toggle("mylayer", state)
        host.set_layout_property.assert_called_once_with("mylayer", "visibility", expected)


class TestSetFilter:
    def test_filter_on_each_layer(self, U, host):
        expression = U("kind == 'park'")
        U.set_filter(["a", "b"], expression)
        assert host.set_filter.call_args_list == [call("a", expression), call("b", expression)]


class TestAddLayer:
    def test_add_with_source_name(self, U, host):
        U.add("mylayer", "mysource", "line", {"lineColor": "red", "lineCap": "round"})
        host.add_layer.assert_called_once_with({
            "id": "mylayer",
            "type": "line",
            "source": "mysource",
            "paint": {"line-color": "red"},
            "layout": {"line-cap": "round"},
        })

    def test_add_line(self, U, host):
        U.add_line("mylayer", "mysource", {"lineWidth": 3, "minzoom": 4})
        host.add_layer.assert_called_once_with({
            "id": "mylayer",
            "type": "line",
            "source": "mysource",
            "paint": {"line-width": 3},
            "minzoom": 4,
        })

    def test_add_without_properties(self, U, host):
        U.add_fill("mylayer", "mysource")
        host.add_layer.assert_called_once_with({"id": "mylayer", "type": "fill", "source": "mysource"})

    def test_geojson_url_source(self, U, host):
        U.add_line("mylayer", "myfile.geojson")
        layer = host.add_layer.call_args.args[0]
        assert layer["source"] == {"type": "geojson", "data": "myfile.geojson"}

    def test_inline_geojson_source(self, U, host, geojson):
        U.add_circle("mylayer", geojson, {"circleRadius": 5})
        layer = host.add_layer.call_args.args[0]
        assert layer["source"] == {"type": "geojson", "data": geojson}
        assert layer["paint"] == {"circle-radius": 5}

    def test_mapbox_url_source(self, U, host):
        U.add_line("mylayer", "mapbox://foo.blah", {"sourceLayer": "roads"})
        layer = host.add_layer.call_args.args[0]
        assert layer["source"] == {"type": "vector", "url": "mapbox://foo.blah"}
        assert layer["source-layer"] == "roads"

    def test_tile_template_source(self, U, host):
        U.add_fill("mylayer", TILE_TEMPLATE)
        layer = host.add_layer.call_args.args[0]
        assert layer["source"] == {"type": "vector", "tiles": [TILE_TEMPLATE]}

    @pytest.mark.parametrize("method,layer_type", [
        ("add_line", "line"),
        ("add_fill", "fill"),
        ("add_circle", "circle"),
        ("add_symbol", "symbol"),
        ("add_fill_extrusion", "fill-extrusion"),
        ("add_heatmap", "heatmap"),
        ("add_raster", "raster"),
        ("add_hillshade", "hillshade"),
    ])
    def test_typed_adders(self, U, host, method, layer_type):
        getattr(U, method)("mylayer", "mysource")
        assert host.add_layer.call_args.args[0]["type"] == layer_type

    def test_background(self, U, host):
        U.add_background("bg", {"backgroundColor": "#eee"})
        host.add_layer.assert_called_once_with({
            "id": "bg",
            "type": "background",
            "paint": {"background-color": "#eee"},
        })

    def test_jam_expression_in_properties(self, U, host):
        U.add_line("mylayer", "mysource", {"lineWidth": U("get('width') + 3")})
        layer = host.add_layer.call_args.args[0]
        assert layer["paint"] == {"line-width": ["+", ["get", "width"], 3]}

    def test_bad_source_rejected(self, U, host):
        with pytest.raises(ContractViolationError):
            U.add_line("mylayer", 42)
        host.add_layer.assert_not_called()

    def test_layer_lands_in_host(self, U, host):
        U.add_line("mylayer", "mysource")
        assert [layer["id"] for layer in host.layers] == ["mylayer"]


class TestLayerStyle:
    def test_not_registered(self, U, host):
        layer = U.layer_style("mylayer", "mysource", "line", {"lineWidth": 2})
        assert layer == {"id": "mylayer", "type": "line", "source": "mysource", "paint": {"line-width": 2}}
        host.add_layer.assert_not_called()

    def test_properties(self, U):
        assert U.properties({"textSize": 12, "textColor": "red"}) == {
            "layout": {"text-size": 12},
            "paint": {"text-color": "red"},
        }


class TestAddSource:
    def test_add_geojson(self, U, host):
        data = make_feature_collection()
        U.add_geojson("mysource", data)
        host.add_source.assert_called_once_with("mysource", {"type": "geojson", "data": data})

    def test_add_geojson_default_data(self, U, host):
        U.add_geojson("mysource")
        host.add_source.assert_called_once_with(
            "mysource", {"type": "geojson", "data": {"type": "FeatureCollection", "features": []}}
        )

    def test_add_geojson_options(self, U, host):
        U.add_geojson("mysource", "points.geojson", cluster=True)
        host.add_source.assert_called_once_with(
            "mysource", {"type": "geojson", "data": "points.geojson", "cluster": True}
        )

    def test_add_vector_mapbox_url(self, U, host):
        U.add_vector("mysource", "mapbox://foo.blah")
        host.add_source.assert_called_once_with("mysource", {"type": "vector", "url": "mapbox://foo.blah"})

    def test_add_vector_tile_template(self, U, host):
        U.add_vector("mysource", TILE_TEMPLATE)
        host.add_source.assert_called_once_with("mysource", {"type": "vector", "tiles": [TILE_TEMPLATE]})

    def test_add_vector_mapping(self, U, host):
        U.add_vector("mysource", {"url": "mapbox://foo.blah", "maxzoom": 14})
        host.add_source.assert_called_once_with(
            "mysource", {"type": "vector", "url": "mapbox://foo.blah", "maxzoom": 14}
        )

    def test_add_raster_source(self, U, host):
        U.add_raster_source("sat", "mapbox://mapbox.satellite")
        host.add_source.assert_called_once_with(
            "sat", {"type": "raster", "url": "mapbox://mapbox.satellite", "tileSize": 512}
        )

    def test_add_raster_dem_source(self, U, host):
        U.add_raster_dem_source("dem", "mapbox://mapbox.terrain-rgb", tileSize=256)
        host.add_source.assert_called_once_with(
            "dem", {"type": "raster-dem", "url": "mapbox://mapbox.terrain-rgb", "tileSize": 256}
        )

    def test_add_source_vector_mapping(self, U, host):
        U.add_source("mysource", {"type": "vector", "url": "mapbox://foo.blah"})
        host.add_source.assert_called_once_with("mysource", {"type": "vector", "url": "mapbox://foo.blah"})

    def test_add_source_bare_geojson(self, U, host):
        data = make_feature_collection()
        U.add_source("mysource", data)
        host.add_source.assert_called_once_with("mysource", {"type": "geojson", "data": data})

    def test_add_source_geojson_url(self, U, host):
        U.add_source("mysource", "myfile.geojson")
        host.add_source.assert_called_once_with("mysource", {"type": "geojson", "data": "myfile.geojson"})

    def test_add_source_tilejson_url(self, U, host):
        U.add_source("mysource", "https://example.com/tiles.json")
        host.add_source.assert_called_once_with(
            "mysource", {"type": "vector", "url": "https://example.com/tiles.json"}
        )

    def test_add_source_raster_mapping(self, U, host):
        U.add_source("sat", {"type": "raster", "tiles": [TILE_TEMPLATE]})
        host.add_source.assert_called_once_with(
            "sat", {"type": "raster", "tiles": [TILE_TEMPLATE], "tileSize": 512}
        )

    def test_add_source_other_type_passed_through(self, U, host):
        spec = {"type": "image", "url": "radar.gif", "coordinates": []}
        U.add_source("radar", spec)
        host.add_source.assert_called_once_with("radar", spec)

    def test_add_source_bad_spec(self, U):
        with pytest.raises(ContractViolationError):
            U.add_source("mysource", 42)

    def test_returns_handle(self, U):
        handle = U.add_geojson("mysource")
        assert isinstance(handle, LayerHandle)
        assert handle.source_id == "mysource"


class TestChaining:
    def test_vector_then_two_lines(self, U, host):
        (
            U.add_vector("mysource", "mapbox://foo.blah")
            .add_line("line1", {"sourceLayer": "roads", "lineWidth": 4})
            .add_line("line2", {"sourceLayer": "roads", "lineColor": "white"})
        )
        assert host.add_layer.call_count == 2
        first, second = (c.args[0] for c in host.add_layer.call_args_list)
        assert first == {
            "id": "line1",
            "type": "line",
            "source": "mysource",
            "source-layer": "roads",
            "paint": {"line-width": 4},
        }
        assert second["id"] == "line2"
        assert second["source"] == "mysource"

    def test_bound_source_not_reinferred(self, U, host):
        U.add_geojson("points.geojson").add_circle("dots")
        assert host.add_layer.call_args.args[0]["source"] == "points.geojson"

    def test_generic_add(self, U, host):
        U.add_geojson("mysource").add("heat", "heatmap", {"heatmapRadius": 20})
        layer = host.add_layer.call_args.args[0]
        assert layer["type"] == "heatmap"
        assert layer["paint"] == {"heatmap-radius": 20}


class TestUpdate:
    def test_update(self, U, host):
        data = make_feature_collection()
        U.update("mysource", data)
        host.get_source.assert_called_once_with("mysource")
        host.source_handles["mysource"].set_data.assert_called_once_with(data)

    def test_update_default_data(self, U, host):
        U.update("mysource")
        assert host.source_handles["mysource"].data == {"type": "FeatureCollection", "features": []}

    def test_set_data_alias(self, U, host):
        data = make_feature_collection(1)
        U.set_data("mysource", data)
        assert host.source_handles["mysource"].data is data


class TestOnLoad:
    def test_already_loaded(self, U):
        callback = MagicMock()
        U.on_load(callback)
        callback.assert_called_once_with()

    def test_waits_for_load(self):
        host = FakeMapHost(is_loaded=False)
        callback = MagicMock()
        init(host).on_load(callback)
        callback.assert_not_called()
        host.fire("load")
        callback.assert_called_once_with()

    def test_runs_only_once(self):
        host = FakeMapHost(is_loaded=False)
        callback = MagicMock()
        init(host).on_load(callback)
        host.fire("load")
        host.fire("load")
        callback.assert_called_once_with()


class TestRemoveLayer:
    def test_removes_existing(self, U, host):
        U.add_line("mylayer", "mysource")
        U.remove_layer("mylayer")
        host.remove_layer.assert_called_once_with("mylayer")
        assert host.layers == []

    def test_missing_layer_error_swallowed(self, U, host):
        U.remove_layer("mylayer")
        host.remove_layer.assert_called_once_with("mylayer")
        assert host.unhandled_errors == []

    def test_direct_host_call_reports_error(self, host):
        host.remove_layer("mylayer")
        assert len(host.unhandled_errors) == 1

    def test_batch(self, U, host):
        U.add_line("a", "mysource")
        U.remove_layer(["a", "b"])
        assert host.remove_layer.call_args_list == [call("a"), call("b")]
        assert host.layers == []
        assert host.unhandled_errors == []

    def test_listener_removed_afterwards(self, U, host):
        U.remove_layer("mylayer")
        host.remove_layer("other")
        assert len(host.unhandled_errors) == 1

    def test_custom_pattern(self, host):
        U = init(host, StyleUtilsConfig(missing_layer_pattern="cannot be removed"))
        U.remove_layer("mylayer")
        assert host.unhandled_errors == []


class TestRemoveSource:
    def test_removes_existing(self, U, host):
        source_id = make_source_id()
        U.add_geojson(source_id)
        U.remove_source(source_id)
        host.remove_source.assert_called_once_with(source_id)
        assert source_id not in host.sources

    def test_missing_source_error_swallowed(self, U, host):
        U.remove_source(["x", "y"])
        assert host.remove_source.call_count == 2
        assert host.unhandled_errors == []


class TestJamSession:
    def test_call_compiles(self, U):
        assert U("2 + 2") == ["+", 2, 2]

    def test_syntax_error(self, U):
        with pytest.raises(ExpressionSyntaxError):
            U("2 +")
