# hwpcore/core/processor/hwp5_helper/hwp5_shape_component.py
"""
HWP 5.0 Shape Component Decoder

Drawing objects ('gso ' controls) are stored as:

    CTRL_HEADER 'gso '
      SHAPE_COMPONENT            common geometry + transform matrices
        SHAPE_COMPONENT_<TYPE>   type-specific data (picture, line, ...)

Group objects nest further SHAPE_COMPONENT records under the container's
component. A top-level component stores its control id twice; a nested one
stores it once (DecodeContext.nested).

Pictures and OLE objects refer to BinData items by 1-based bindata_id.
Everything past the decoded fields (line/fill info, effects) is kept as
raw bytes.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_SHAPE_COMPONENT,
    HWPTAG_SHAPE_COMPONENT_LINE,
    HWPTAG_SHAPE_COMPONENT_RECTANGLE,
    HWPTAG_SHAPE_COMPONENT_ELLIPSE,
    HWPTAG_SHAPE_COMPONENT_ARC,
    HWPTAG_SHAPE_COMPONENT_POLYGON,
    HWPTAG_SHAPE_COMPONENT_CURVE,
    HWPTAG_SHAPE_COMPONENT_OLE,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_SHAPE_COMPONENT_CONTAINER,
    HWPTAG_SHAPE_COMPONENT_TEXTART,
    HWPTAG_SHAPE_COMPONENT_UNKNOWN,
)
from hwpcore.core.processor.hwp5_helper.hwp5_binary import ByteReader, decode_ctrl_id
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, RecordDecoder

logger = logging.getLogger("hwpcore.HWP5")

Point = Tuple[int, int]
# a, b, c, d, e, f of a 3x2 affine matrix
Matrix = Tuple[float, float, float, float, float, float]


# ============================================================================
# Common Shape Component
# ============================================================================

@dataclass
class ShapeComponent:
    """
    SHAPE_COMPONENT record (geometry shared by every drawing object).

    Attributes:
        ctrl_id: Object control id (e.g. '$pic', '$rec', '$con')
        ctrl_id2: Repeated control id (top-level components only)
        matrices: (scale, rotation) matrix pairs, one per group level
        extra: Undecoded tail (line/fill/shadow info)
    """
    ctrl_id: str
    ctrl_id2: Optional[str]
    group_offset_x: int
    group_offset_y: int
    group_count: int
    local_version: int
    initial_width: int
    initial_height: int
    width: int
    height: int
    attribute: int
    rotation: int
    rotation_center_x: int
    rotation_center_y: int
    translation: Matrix
    matrices: List[Tuple[Matrix, Matrix]] = field(default_factory=list)
    extra: bytes = b""

    @property
    def flip_horizontal(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def flip_vertical(self) -> bool:
        return bool(self.attribute & 0x2)


def decode_shape_component(data: bytes, context: DecodeContext) -> ShapeComponent:
    reader = ByteReader(data, "ShapeComponent")
    ctrl_id = reader.ctrl_id()
    ctrl_id2 = None
    if not context.nested:
        ctrl_id2 = reader.ctrl_id()

    group_x, group_y, group_count, local_version = reader.unpack('iiHH')
    initial_width, initial_height, width, height, attribute = reader.unpack('5I')
    rotation, center_x, center_y = reader.unpack('hii')
    matrix_count = reader.u16()
    translation = reader.unpack('6d')
    matrices = [(reader.unpack('6d'), reader.unpack('6d')) for _ in range(matrix_count)]

    return ShapeComponent(
        ctrl_id=ctrl_id,
        ctrl_id2=ctrl_id2,
        group_offset_x=group_x,
        group_offset_y=group_y,
        group_count=group_count,
        local_version=local_version,
        initial_width=initial_width,
        initial_height=initial_height,
        width=width,
        height=height,
        attribute=attribute,
        rotation=rotation,
        rotation_center_x=center_x,
        rotation_center_y=center_y,
        translation=translation,
        matrices=matrices,
        extra=reader.rest(),
    )


# ============================================================================
# Shape Types
# ============================================================================

@dataclass
class ShapeLine:
    start: Point
    end: Point
    flag: int


@dataclass
class ShapeRectangle:
    corner_curvature: int
    x: Tuple[int, int, int, int]
    y: Tuple[int, int, int, int]


@dataclass
class ShapeEllipse:
    attribute: int
    center: Point
    axis1: Point
    axis2: Point
    start: Point
    end: Point
    interval: int
    start2: Point
    end2: Point

    @property
    def is_arc(self) -> bool:
        return bool(self.attribute & 0x2)

    @property
    def arc_type(self) -> int:
        return (self.attribute >> 2) & 0xFF


@dataclass
class ShapeArc:
    attribute: int
    center: Point
    axis1: Point
    axis2: Point

    @property
    def arc_type(self) -> int:
        return (self.attribute >> 2) & 0xFF


@dataclass
class ShapePolygon:
    points: List[Point] = field(default_factory=list)


@dataclass
class ShapeCurve:
    points: List[Point] = field(default_factory=list)
    segment_types: List[int] = field(default_factory=list)


@dataclass
class ShapeOle:
    attribute: int
    extent_x: int
    extent_y: int
    bindata_id: int
    border_color: int
    border_width: int
    border_attribute: int

    @property
    def drawing_aspect(self) -> int:
        return self.attribute & 0xFF

    @property
    def has_moniker(self) -> bool:
        return bool(self.attribute & 0x100)

    @property
    def baseline(self) -> int:
        return (self.attribute >> 9) & 0x7F


@dataclass
class ShapePicture:
    """
    SHAPE_COMPONENT_PICTURE record.

    Attributes:
        bindata_id: 1-based index into DocInfo.bin_data
        effect_data: Picture effect bytes (shadow, glow, ...) kept raw
    """
    border_color: int
    border_width: int
    border_attribute: int
    rect_x: Tuple[int, int, int, int]
    rect_y: Tuple[int, int, int, int]
    crop: Tuple[int, int, int, int]
    padding: Tuple[int, int, int, int]
    brightness: int
    contrast: int
    effect: int
    bindata_id: int
    border_opacity: int
    instance_id: int
    effect_data: bytes = b""


@dataclass
class ShapeContainer:
    ctrl_ids: List[str] = field(default_factory=list)
    extra: bytes = b""


@dataclass
class ShapeTextArt:
    data: bytes


@dataclass
class ShapeUnknown:
    tag_id: int
    data: bytes


def decode_line(data: bytes, context: DecodeContext) -> ShapeLine:
    start_x, start_y, end_x, end_y, flag = ByteReader(data, "ShapeLine").unpack('4iH')
    return ShapeLine((start_x, start_y), (end_x, end_y), flag)


def decode_rectangle(data: bytes, context: DecodeContext) -> ShapeRectangle:
    reader = ByteReader(data, "ShapeRectangle")
    curvature = reader.u8()
    return ShapeRectangle(curvature, reader.unpack('4i'), reader.unpack('4i'))


def _point(reader: ByteReader) -> Point:
    return reader.unpack('ii')


def decode_ellipse(data: bytes, context: DecodeContext) -> ShapeEllipse:
    reader = ByteReader(data, "ShapeEllipse")
    attribute = reader.u32()
    center, axis1, axis2, start, end = (_point(reader) for _ in range(5))
    interval = reader.i32()
    start2 = _point(reader)
    end2_x = reader.i32()
    end2_y = reader.i32() if reader.has(4) else 0
    return ShapeEllipse(attribute, center, axis1, axis2, start, end, interval, start2, (end2_x, end2_y))


def decode_arc(data: bytes, context: DecodeContext) -> ShapeArc:
    reader = ByteReader(data, "ShapeArc")
    attribute = reader.u32()
    return ShapeArc(attribute, _point(reader), _point(reader), _point(reader))


def decode_polygon(data: bytes, context: DecodeContext) -> ShapePolygon:
    reader = ByteReader(data, "ShapePolygon")
    count = max(reader.i16(), 0)
    xs = reader.unpack(f'{count}i')
    ys = reader.unpack(f'{count}i')
    return ShapePolygon(list(zip(xs, ys)))


def decode_curve(data: bytes, context: DecodeContext) -> ShapeCurve:
    reader = ByteReader(data, "ShapeCurve")
    count = max(reader.i16(), 0)
    points = [_point(reader) for _ in range(count)]
    segment_types = list(reader.unpack(f'{max(count - 1, 0)}B'))
    return ShapeCurve(points, segment_types)


def decode_ole(data: bytes, context: DecodeContext) -> ShapeOle:
    return ShapeOle(*ByteReader(data, "ShapeOle").unpack('HiiHIiI'))


def decode_picture(data: bytes, context: DecodeContext) -> ShapePicture:
    reader = ByteReader(data, "ShapePicture")
    border_color, border_width, border_attribute = reader.unpack('IiI')
    rect_x = reader.unpack('4i')
    rect_y = reader.unpack('4i')
    crop = reader.unpack('4i')
    padding = reader.unpack('4h')
    brightness, contrast, effect, bindata_id, border_opacity, instance_id = reader.unpack('bbBHBI')
    return ShapePicture(
        border_color=border_color,
        border_width=border_width,
        border_attribute=border_attribute,
        rect_x=rect_x,
        rect_y=rect_y,
        crop=crop,
        padding=padding,
        brightness=brightness,
        contrast=contrast,
        effect=effect,
        bindata_id=bindata_id,
        border_opacity=border_opacity,
        instance_id=instance_id,
        effect_data=reader.rest(),
    )


def decode_container(data: bytes, context: DecodeContext) -> ShapeContainer:
    reader = ByteReader(data, "ShapeContainer")
    count = reader.u16()
    ctrl_ids = [decode_ctrl_id(reader.read(4)) for _ in range(count)]
    return ShapeContainer(ctrl_ids, reader.rest())


def decode_textart(data: bytes, context: DecodeContext) -> ShapeTextArt:
    return ShapeTextArt(data)


def decode_unknown_shape(data: bytes, context: DecodeContext) -> ShapeUnknown:
    return ShapeUnknown(HWPTAG_SHAPE_COMPONENT_UNKNOWN, data)


# ============================================================================
# Dispatch Table
# ============================================================================

SHAPE_COMPONENT_DECODERS: Dict[int, RecordDecoder] = {
    HWPTAG_SHAPE_COMPONENT: RecordDecoder("ShapeComponent", 4, decode_shape_component),
    HWPTAG_SHAPE_COMPONENT_LINE: RecordDecoder("ShapeLine", 18, decode_line),
    HWPTAG_SHAPE_COMPONENT_RECTANGLE: RecordDecoder("ShapeRectangle", 33, decode_rectangle),
    HWPTAG_SHAPE_COMPONENT_ELLIPSE: RecordDecoder("ShapeEllipse", 60, decode_ellipse),
    HWPTAG_SHAPE_COMPONENT_ARC: RecordDecoder("ShapeArc", 28, decode_arc),
    HWPTAG_SHAPE_COMPONENT_POLYGON: RecordDecoder("ShapePolygon", 2, decode_polygon),
    HWPTAG_SHAPE_COMPONENT_CURVE: RecordDecoder("ShapeCurve", 2, decode_curve),
    HWPTAG_SHAPE_COMPONENT_OLE: RecordDecoder("ShapeOle", 24, decode_ole),
    HWPTAG_SHAPE_COMPONENT_PICTURE: RecordDecoder("ShapePicture", 78, decode_picture),
    HWPTAG_SHAPE_COMPONENT_CONTAINER: RecordDecoder("ShapeContainer", 2, decode_container),
    HWPTAG_SHAPE_COMPONENT_TEXTART: RecordDecoder("ShapeTextArt", 0, decode_textart),
    HWPTAG_SHAPE_COMPONENT_UNKNOWN: RecordDecoder("ShapeUnknown", 0, decode_unknown_shape),
}


__all__ = [
    'ShapeComponent',
    'ShapeLine',
    'ShapeRectangle',
    'ShapeEllipse',
    'ShapeArc',
    'ShapePolygon',
    'ShapeCurve',
    'ShapeOle',
    'ShapePicture',
    'ShapeContainer',
    'ShapeTextArt',
    'ShapeUnknown',
    'SHAPE_COMPONENT_DECODERS',
    'decode_shape_component',
]
