from __future__ import annotations

import struct

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_SHAPE_COMPONENT_CONTAINER,
    HWPTAG_SHAPE_COMPONENT_CURVE,
    HWPTAG_SHAPE_COMPONENT_ELLIPSE,
    HWPTAG_SHAPE_COMPONENT_OLE,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_SHAPE_COMPONENT_POLYGON,
    HWPTAG_SHAPE_COMPONENT_TEXTART,
    HWPTAG_SHAPE_COMPONENT_UNKNOWN,
)
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, dispatch
from hwpcore.core.processor.hwp5_helper.hwp5_shape_component import (
    SHAPE_COMPONENT_DECODERS,
    ShapeContainer,
    ShapeTextArt,
    ShapeUnknown,
    decode_shape_component,
)

IDENTITY = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)


def _component_body(matrix_count: int = 1) -> bytes:
    data = struct.pack("<iiHH", 0, 0, 0, 1)
    data += struct.pack("<5I", 1000, 500, 2000, 1000, 0x1)
    data += struct.pack("<hii", 90, 1000, 500)
    data += struct.pack("<H", matrix_count)
    data += struct.pack("<6d", *IDENTITY)
    for _ in range(matrix_count):
        data += struct.pack("<6d", 2.0, 0.0, 0.0, 0.0, 2.0, 0.0) + struct.pack("<6d", *IDENTITY)
    return data


def test_top_level_component_has_two_ctrl_ids() -> None:
    data = b"cip$" + b"cip$" + _component_body() + b"\xee" * 3

    component = decode_shape_component(data, DecodeContext())

    assert component.ctrl_id == "$pic"
    assert component.ctrl_id2 == "$pic"
    assert (component.width, component.height) == (2000, 1000)
    assert component.flip_horizontal
    assert component.rotation == 90
    assert component.translation == IDENTITY
    assert component.matrices[0][0][0] == 2.0
    assert component.extra == b"\xee" * 3


def test_nested_component_has_one_ctrl_id() -> None:
    data = b"cer$" + _component_body(matrix_count=0)

    component = decode_shape_component(data, DecodeContext(nested=True))

    assert component.ctrl_id == "$rec"
    assert component.ctrl_id2 is None
    assert component.matrices == []


def test_picture_refers_to_bindata() -> None:
    data = struct.pack("<IiI", 0, 0, 0) + struct.pack("<12i", *range(12)) + struct.pack("<4h", 0, 0, 0, 0)
    data += struct.pack("<bbBHBI", -10, 20, 0, 3, 0, 1234) + b"effects"

    picture = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_PICTURE, data)

    assert picture.bindata_id == 3
    assert picture.brightness == -10
    assert picture.crop == (8, 9, 10, 11)
    assert picture.instance_id == 1234
    assert picture.effect_data == b"effects"


def test_ole_object() -> None:
    data = struct.pack("<HiiHIiI", 0x101, 300, 200, 2, 0, 0, 0)

    ole = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_OLE, data)

    assert ole.bindata_id == 2
    assert ole.has_moniker
    assert ole.drawing_aspect == 1


def test_ellipse_without_last_coordinate() -> None:
    data = struct.pack("<I", 0x2) + struct.pack("<10i", *range(10)) + struct.pack("<i", 7)
    data += struct.pack("<2i", 11, 12) + struct.pack("<i", 13)

    ellipse = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_ELLIPSE, data)

    assert len(data) == 60
    assert ellipse.is_arc
    assert ellipse.center == (0, 1)
    assert ellipse.interval == 7
    assert ellipse.end2 == (13, 0)


def test_polygon_reads_separate_coordinate_arrays() -> None:
    data = struct.pack("<h", 3) + struct.pack("<3i", 0, 10, 20) + struct.pack("<3i", 5, 15, 25)

    polygon = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_POLYGON, data)

    assert polygon.points == [(0, 5), (10, 15), (20, 25)]


def test_curve_segment_types() -> None:
    data = struct.pack("<h", 3) + struct.pack("<6i", 0, 0, 10, 10, 20, 0) + bytes([0, 1])

    curve = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_CURVE, data)

    assert curve.points == [(0, 0), (10, 10), (20, 0)]
    assert curve.segment_types == [0, 1]


def test_container_children_ids() -> None:
    data = struct.pack("<H", 2) + b"cer$" + b"lle$"

    container = dispatch(SHAPE_COMPONENT_DECODERS, HWPTAG_SHAPE_COMPONENT_CONTAINER, data)

    assert container == ShapeContainer(["$rec", "$ell"], b"")


@pytest.mark.parametrize(
    ("tag_id", "expected"),
    [
        (HWPTAG_SHAPE_COMPONENT_TEXTART, ShapeTextArt(b"\x01\x02")),
        (HWPTAG_SHAPE_COMPONENT_UNKNOWN, ShapeUnknown(HWPTAG_SHAPE_COMPONENT_UNKNOWN, b"\x01\x02")),
    ],
)
def test_raw_shapes_keep_bytes(tag_id: int, expected) -> None:
    assert dispatch(SHAPE_COMPONENT_DECODERS, tag_id, b"\x01\x02") == expected
