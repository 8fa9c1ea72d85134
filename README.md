# kuruk

Building blocks for a small-size robot soccer stack, using only the
standard library.

## Modules

- `kuruk.voronoi`: the data types of Fortune's Voronoi sweep. `Point`
  (coordinates and an integer `id`, `-1` when untagged), `Edge` (the line
  `y = f*x + g` between two sites, with `start`, `end`, `direction` and
  `neighbour`), `Event` (site or circle event, ordered by `y`) and
  `Parabola` (a beach-line tree node, with `set_left`, `set_right` and the
  static helpers `get_left`, `get_right`, `get_left_parent`,
  `get_right_parent`, `get_left_child`, `get_right_child`).
- `kuruk.graph`: `Graph`, built from edges whose `start` and `end` points
  carry ids. Edge weights are Euclidean lengths of the endpoints truncated
  to integers. It offers `nearest_vertex(x, y)`, `vertex_by_id(id)`,
  `dist(a, b)`, `path_endpoints(...)` to choose the best pair of start and
  end vertices, `shortest_path(start, end)` (Dijkstra; the path is listed
  from `end` back to `start`, and the walk back stops after 100 steps) and
  `display(stream)`.
- `kuruk.vmath`: `Vec3`, `Quat` (with `vec()`), `v3_dot`, `quat_mul`,
  `quat_rotate` and `quat_to_mat` (a 4x4 matrix indexed `m[column][row]`).
- `kuruk.heatmap`: `lighter` and `darker` for RGB tuples, `heat_color`
  (yellow shades for positive intensities, blue for zero or below, the
  magnitude clamped to 200) and `HeatCell`, whose `update_color(intensity,
  paint)` returns the new shade and applies it only when `paint` is true.
- `kuruk.field`: `transform_from_scene` (scene centimetres with a top-left
  origin to field metres with a centre origin), `bounding_square`,
  `robot_outline`, `Robot` (pose, `color`, `rotation` in degrees,
  `field_position`, `update_position`) and `Ball` (`update_position` raises
  `ValueError` if the ball was created without a position).
- `kuruk.simerrors`: the `SimError` and `SimErrorSource` enums,
  `SimulatorError`, the message types `MoveCommand`, `RobotCommand`,
  `RadioResponse` and `RobotFeedback`, plus `log`, `make_error`,
  `warn_latency` (warns above 1e6 ns), `check_robot_commands` (flags wheel
  and global velocities) and `robot_feedback`.
- `kuruk.commands`: `scale_up`, `scale_teleport_ball` and
  `scale_teleport_robot` (metres to millimetres), the spec types
  `RobotLimits`, `ErForceSpecs`, `RobotSpecs` and `StrategySpecs`,
  `convert_specs` (raises `ValueError` when a required field is missing),
  `convert_all_specs` (collects `MISSING_SPEC` errors instead), and
  `TeamCommandMerger`, which remembers team and realism settings and
  replays them first whenever a command carries a simulator setup.
- `kuruk.net`: `VisionServer` sends datagrams to an address and port with
  multicast TTL 1 (`send`, `change_port`, `change_address`, `close`);
  `VisionReceiver` binds with address reuse and returns pending datagrams
  from `receive()`, waiting up to its `timeout` attribute. Both are
  context managers.

## Example

```python
from kuruk.voronoi import Edge, Point
from kuruk.graph import Graph

def edge(start, end):
    e = Edge(start, Point(0.0, 0.0), Point(1.0, 1.0))
    e.end = end
    return e

a, b, c = Point(0, 0, 0), Point(300, 0, 1), Point(300, 400, 2)
graph = Graph([edge(a, b), edge(b, c)])

graph.nearest_vertex(290, 10)   # 1
graph.shortest_path(0, 2)       # [2, 1, 0]
```

## What the package does not do

- It does not compute Voronoi diagrams: it holds the sweep's data types,
  and a `Graph` must be given edges whose endpoints are already set.
- It has no physics simulation, no drawing or window, and no command-line
  program; the command and network helpers only prepare, check and carry
  messages.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```