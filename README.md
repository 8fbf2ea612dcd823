# lamsketch

`lamsketch` takes a laminate cross-section sketch, given as a set of polylines, and
rebuilds it as a stack of layers. Each layer is made of plies. Each ply is a row of
nodes, and each node records which node sits directly above or below it.

The sketch has no units. Its coordinates are usually millimetres. The colour of a
drawn line sets the lay-up direction of its ply (`lamsketch.handler.ori_from_color`):

| colour | direction        |
|--------|------------------|
| 5      | `Ori.ZERO` (0°)  |
| 2      | `Ori.PERP` (90°) |
| other  | `Ori.OTHER`      |

## Installation

```
pip install .
```

The package uses only the standard library.

## Modules

- `lamsketch.geometry` provides `Point`, with equality that tolerates rounding noise,
  and `Ori`, `RawPolyline` and `Polygon`. It has tolerant number comparisons such as
  `approximately_equal`, `is_zero` and `is_less_or_equal`. It finds segment and line
  intersections (`find_segments_intersection`, `find_lines_intersection`) and tests
  whether a point is in a polygon (`is_point_in_polygon`). It also offsets polylines
  (`offset_polyline`), removes self-intersections (`remove_self_intersections`), drops
  collinear points (`remove_extra_dots`, `remove_extra_dots_all`) and computes angle
  bisectors (`calculate_bisector`).
- `lamsketch.layers` holds the layered model: `NodePos`, `Node`, `Ply`, `Layer` and
  `LaminateData`.
- `lamsketch.sketch` finds the upper plies of a raw sketch (`is_upper_polyline`,
  `get_upper_plies`). `convert_raw_sketch` peels the sketch into layers from the top
  down and links the nodes of neighbouring layers. `Sketch` is the entry point: it
  moves the sketch to the origin, records its width and height, and builds the layers.
- `lamsketch.handler` converts between drawing entities and a raw sketch. The entities
  are `PolylineEntity` and `SplineEntity`, held in `DrawingData`.

## Example

```python
from lamsketch.geometry import Point, Ori, RawPolyline
from lamsketch.sketch import Sketch

raw = [
    RawPolyline([Point(0, 0), Point(10, 0)], Ori.ZERO),
    RawPolyline([Point(0, 1), Point(10, 1)], Ori.PERP),
]

sketch = Sketch()
if sketch.fill_sketch(raw):
    print(sketch.width, sketch.height)
    for ply in sketch.raw_sketch():
        print(ply.ori, ply.polyline)
```

`Sketch.fill_sketch` moves the given polylines in place and returns `False` when the
lines cannot be arranged into layers.

To go from drawing entities to a raw sketch and back:

```python
from lamsketch.geometry import Point
from lamsketch.handler import (
    DrawingData, PolylineEntity, convert_data_to_raw_sketch, convert_raw_sketch_to_data,
)

data = DrawingData()
data.entities.append(PolylineEntity(vertices=[Point(0.0, 0.0), Point(10.0, 0.0)], color=5))
raw = convert_data_to_raw_sketch(data)

out = DrawingData()
convert_raw_sketch_to_data(raw, out)  # polylines land on the "SketchLayer" layer
```

## What it does not do

`lamsketch` does not read or write drawing files. `DrawingData` is an in-memory
container, and you fill it from your own reader. The package has no command-line tool
and does not draw the sketch on screen.

## Running the tests

```
pip install .[test]
pytest
```