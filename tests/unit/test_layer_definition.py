import pytest

from src.domain.models import FieldDefinition, LabelClass, LayerDefinition


def test_default_bus_layer_schema() -> None:
    layer = LayerDefinition()

    assert [f.name for f in layer.fields] == [
        "ObjectID",
        "name",
        "timestamp",
        "route",
        "route_start",
    ]
    assert layer.object_id_field == "ObjectID"
    assert layer.attribute_fields == ("name", "timestamp", "route", "route_start")
    assert layer.symbol.style == "circle"
    assert layer.symbol.size_px == 15


def test_popup_renders_attributes() -> None:
    title, content = LayerDefinition().popup.render(
        {
            "name": "2104",
            "timestamp": "10:00:00 GMT-0500 (CDT)",
            "route": "11",
            "route_start": "09:30:00",
        }
    )

    assert title == "2104"
    assert content == "Updated: 10:00:00 GMT-0500 (CDT)<br />Route: 11 (Started 09:30:00)"


def test_popup_blanks_missing_attributes() -> None:
    title, content = LayerDefinition().popup.render({"name": None})
    assert title == ""
    assert content == "Updated: <br />Route:  (Started )"


def test_label_expression_reads_feature_field() -> None:
    label = LayerDefinition().labels[0]
    assert label.label_for({"name": "2104"}) == "2104"
    assert label.label_for({}) is None


def test_unsupported_label_expression_is_rejected() -> None:
    with pytest.raises(ValueError):
        LabelClass(expression="Upper($feature.name)").label_for({"name": "x"})


def test_layer_requires_single_object_id_field() -> None:
    with pytest.raises(ValueError):
        LayerDefinition(fields=(FieldDefinition(name="name", alias="Name"),))
