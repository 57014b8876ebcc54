# camgeom

Geometry utilities for camera calibration work, built on NumPy.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

- `camgeom.colormaps`: the 128-entry `jet` and `autumn` colormaps through
  `colormap(name, idx)`, which returns an `(r, g, b)` tuple in `[0, 1]` and raises
  `ValueError` for an unknown name and `IndexError` for an index outside 0..127;
  and `color_depth_image(depth, min_range, max_range)`, which turns a 2-D depth
  image into an 8-bit BGR image using the jet map, near depths red and far depths
  blue, with pixels of zero depth left black.
- `camgeom.geometry`: `hypot3`, `d2r`, `r2d` and `sinc` (NaN at zero);
  Bresenham rasterisation with `bres_line` and `bres_circle` (the filled disc,
  cells ordered by x then y); `fit_circle(points)`, a modified least-squares
  circle fit returning `(center_x, center_y, radius)`; and
  `intersect_circles(x1, y1, r1, x2, y2, r2)`, which returns zero, one or two
  intersection points.
- `camgeom.utm`: `utm_letter_designator`, `ll_to_utm` and `utm_to_ll` for WGS84
  latitude/longitude to UTM conversion and back, including the Norway and
  Svalbard zone exceptions. `ll_to_utm` returns `(northing, easting, zone)`
  with a zone such as `"32T"`.
- `camgeom.timing`: wall-clock `time_in_seconds()` and `time_in_microseconds()`,
  and `timestamp_diff(t1, t2)`, the signed difference `t2 - t1` of unsigned
  64-bit timestamps, saturated to the signed 64-bit range.
- `camgeom.quaternion`: `quaternion_product`, the on-manifold update
  `quaternion_plus(x, delta)` and its 4×3 Jacobian `quaternion_plus_jacobian(x)`,
  all with quaternions stored as `(x, y, z, w)`.
- `camgeom.transform`: `Transform`, a dataclass holding a `rotation` quaternion
  and a `translation` vector, with `Transform.from_matrix`, `to_matrix` and the
  `rotation_matrix` property for 4×4 homogeneous and 3×3 rotation matrices.
- Chessboard corner extraction from a group of quadrangles:
  - `camgeom.quadgraph`: the graph nodes `ChessboardCorner` and
    `ChessboardQuad`, `min_quad_size(image_width, image_height)`,
    `is_acceptable_quad(contour, min_size, filter_quads)`,
    `build_quads(quadrilaterals)` and `match_corners(quad1, corner1, quad2, corner2)`,
    the geometric test of whether two quad corners may be linked;
  - `camgeom.labeling`: `convex_hull_area(points)`,
    `clean_found_connected_quads(quad_group, pattern_size)`, which drops
    surplus quads in place, and `label_quad_group(quad_group, pattern_size, first_run)`,
    which gives every corner a board row and column;
  - `camgeom.extraction`: `check_quad_group(quads, pattern_size, image_size)`,
    which reads a labelled group out as a row-major list of inner corners (or
    `None` when it is not a complete board), and
    `has_chessboard_hypotheses(hypotheses, pattern_size)`, a quick test of
    whether `(box_size, class_id)` blob hypotheses look like a chessboard.

## Example

```python
import numpy as np

from camgeom.geometry import bres_line
from camgeom.quaternion import quaternion_plus
from camgeom.transform import Transform
from camgeom.utm import ll_to_utm, utm_to_ll

print(bres_line(0, 0, 3, 1))

northing, easting, zone = ll_to_utm(47.3769, 8.5417)
lat, lon = utm_to_ll(northing, easting, zone)

q = quaternion_plus(np.array([0.0, 0.0, 0.0, 1.0]), np.array([0.0, 0.0, 0.1]))

matrix = np.eye(4)
matrix[:3, 3] = [1.0, 2.0, 3.0]
t = Transform.from_matrix(matrix)
assert np.allclose(t.to_matrix(), matrix)
```

## What it does not do

camgeom is not a complete chessboard detector. It does not read images,
threshold them or trace contours; the four-point contours passed to
`build_quads` have to come from your imaging library of choice. Nor does it
link quads into a neighbour graph or split them into connected groups: it
offers `match_corners` as the test for a link, but setting each quad's
`neighbors`, `count` and shared `corners` before calling
`clean_found_connected_quads` and `label_quad_group` is left to the caller.
There is no command-line tool.