import json

import pytest

from moondream_client.schemas.results import (
    BoundingBox,
    CaptionLength,
    CaptionResult,
    DetectResult,
    Point,
    PointsResult,
    QueryResult,
)


def test_points_response_deserialization():
    raw = """{
        "request_id": "abc",
        "points": [{"x": 0.1, "y": 0.2}],
        "count": 1
    }"""

    resp = PointsResult.from_dict(json.loads(raw))

    assert resp.request_id == "abc"
    assert resp.points == [Point(x=0.1, y=0.2)]
    assert resp.count == 1


def test_detect_response_deserialization():
    raw = """{
        "request_id": "req1",
        "objects": [{"x_min": 0.1, "y_min": 0.2, "x_max": 0.3, "y_max": 0.4}]
    }"""

    resp = DetectResult.from_dict(json.loads(raw))

    assert resp.request_id == "req1"
    assert resp.objects == [BoundingBox(x_min=0.1, y_min=0.2, x_max=0.3, y_max=0.4)]


def test_caption_response_deserialization():
    resp = CaptionResult.from_dict({"request_id": "req2", "caption": "a cat on a mat"})

    assert resp == CaptionResult(request_id="req2", caption="a cat on a mat")


def test_query_response_deserialization():
    resp = QueryResult.from_dict({"request_id": "req3", "answer": "It is a cat"})

    assert resp == QueryResult(request_id="req3", answer="It is a cat")


def test_missing_optional_fields_become_none():
    assert PointsResult.from_dict({"points": [{"x": 1, "y": 0}]}) == PointsResult(
        request_id=None, points=[Point(1.0, 0.0)], count=None
    )
    assert QueryResult.from_dict({"answer": ""}).request_id is None


def test_out_of_range_coordinates_pass_through():
    resp = DetectResult.from_dict({"objects": [{"x_min": -0.5, "y_min": 0, "x_max": 1.5, "y_max": 2}]})

    assert resp.objects[0] == BoundingBox(-0.5, 0.0, 1.5, 2.0)


def test_unknown_fields_are_ignored():
    resp = CaptionResult.from_dict({"caption": "x", "finish_reason": "stop", "metrics": {}})

    assert resp.caption == "x"


@pytest.mark.parametrize(
    "cls,data",
    [
        (PointsResult, {"request_id": "a"}),
        (PointsResult, {"points": [{"x": 0.1}]}),
        (PointsResult, {"points": [], "count": "one"}),
        (PointsResult, {"points": [{"x": True, "y": 0.1}]}),
        (PointsResult, {"points": [{"x": 10**400, "y": 0.1}]}),
        (PointsResult, {"points": [], "count": -3}),
        (DetectResult, {"objects": [{"x_min": 0, "y_min": 0, "x_max": -10**400, "y_max": 1}]}),
        (DetectResult, {"objects": [{"x_min": 0.1, "y_min": 0.2, "x_max": 0.3}]}),
        (CaptionResult, {"caption": 3}),
        (QueryResult, {"answer": "a", "request_id": 7}),
        (QueryResult, None),
    ],
)
def test_invalid_shapes_raise(cls, data):
    with pytest.raises((KeyError, TypeError, ValueError)):
        cls.from_dict(data)


def test_caption_length_values():
    assert CaptionLength.SHORT.value == "short"
    assert CaptionLength.NORMAL.value == "normal"
    assert CaptionLength("short") is CaptionLength.SHORT
    with pytest.raises(ValueError):
        CaptionLength("long")


def test_point_to_pixels():
    assert Point(0.5, 0.25).to_pixels(200, 100) == (100, 25)


def test_box_to_xyxy():
    assert BoundingBox(0.1, 0.2, 0.3, 0.4).to_xyxy(100, 50) == (10, 10, 30, 20)


def test_zero_count_is_accepted():
    assert PointsResult.from_dict({"points": [], "count": 0}).count == 0
