# arborgen

arborgen builds procedural 3D trees from a small set of parameters. A tree
starts as a trunk. Children branch off the trunk at a chosen angle and scale,
each child branches again level by level, and the last level ends in leaves.
The package can also walk through the parameter space at random, so the tree
changes shape smoothly over time.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Running the viewer

```
arborgen
```

This opens a matplotlib window that shows the current tree slowly rotating
about its vertical axis. Below the plot are:

- one slider per parameter: Children, Levels, Child Translation Factor,
  Deviation Angle from Parent Branch, Child Scale, Base Radius and Leaf
  Radius. Moving a slider rebuilds the tree;
- a **Generate** button, which draws every parameter at random from its
  allowed range;
- a **Random Walk** button, which turns the continuous random walk through
  parameter space on or off. While the walk is on, the parameters take one
  step every 0.1 seconds.

Options:

| Option | Meaning |
| --- | --- |
| `--seed N` | seed for the random generator |
| `--random-walk` | start with the random walk running |
| `--save PATH` | render one frame to an image file and exit, without opening a window |
| `--time SECONDS` | simulated time before the frame is saved (with `--save`; default 0.1) |

For example, to save an image after five seconds of random walk:

```
arborgen --seed 1 --random-walk --save tree.png --time 5
```

## Using the library

```python
import random

from arborgen.params import Params, ParamsVector, random_params
from arborgen.tree import generate, world_transforms

params = Params()                    # the default tree
branches = generate(params)          # flat list of Branch records, root first
placed = world_transforms(branches)  # each branch's transform in the root's frame

rng = random.Random(42)
other = random_params(rng)           # parameters drawn uniformly within their limits
```

`generate` returns the branches in depth-first order, and every parent comes
before its children. Each `Branch` has a `transform`, a `parent_idx` (`None`
for the root) and an `is_leaf` flag. The transform is relative to the parent.
`generate` raises `ValueError` if `children` is not greater than 1.

`world_transforms` combines the local transforms into `Transform` objects in
the root's frame. `arborgen.transform.Transform` holds a translation, a
quaternion rotation and a scale. It can compose with another transform
(`mul_transform`), map points (`transform_point`) and rotate about its own or
the world axes.

### Parameter limits

| Parameter | Range |
| --- | --- |
| `children` | 3 – 6 |
| `levels` | 2 – 5 |
| `child_translation_factor` | 0 – 1 |
| `angle_from_parent_branch` | 0 – π/2 |
| `child_scale` | 0.4 – 0.8 |
| `base_radius` | 0.1 – 0.3 |
| `leaf_radius` | 0.1 – 0.5 |

### Random walk

`ParamsVector` maps every parameter onto the range [-1, 1]. A vector with a
`magnitude` is a velocity. A vector whose `magnitude` is `None`, such as the
one `from_params` returns, is a point. `nudge` adds a small random
acceleration to the velocity and normalises it again, so each step is the same
size. When the velocity is added to a point and a component would leave the
range, that component is clamped to the edge and the matching velocity
component is reversed, so the walk bounces off the edge:

```python
position = ParamsVector.from_params(params)
velocity = ParamsVector()
velocity.nudge(rng)
position.add(velocity)
params = position.to_params()
```

`arborgen.app.TreeSimulation` combines this loop with a `Timer` and the
current tree. The viewer runs on it, and you can drive it yourself:
`update(delta)` advances the scene by `delta` seconds and returns whether the
tree was rebuilt. `randomize`, `set_params` and `toggle_random_walk` match the
viewer's controls. `leaf_color(params)` gives the leaf colour, which runs from
red through green to blue as the branch angle widens.

## Limitations

The viewer is a plain matplotlib 3D plot. Branches are drawn as lines and
leaves as dots. There is no ground plane, lighting, shading or solid meshes,
and no frame-rate display. The package does not export trees to any mesh or
model file format. `--save` writes only a rendered image.