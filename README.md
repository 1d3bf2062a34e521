# globalsfm

Building blocks for global structure-from-motion, on top of NumPy and SciPy.

A scene is held in plain Python containers: dictionaries of `Camera`,
`Image` and `Track` objects keyed by id, and a `ViewGraph` whose
`image_pairs` dictionary maps pair ids to `ImagePair` objects. The
processing functions work on these containers in place and usually return
a count of what they changed.

## Modules

- `globalsfm.types`: constants (`EPS`, `MAX_NUM_IMAGES`, ...), the
  `ConfigurationType` enum of two-view geometry kinds, and the
  `InlierThresholdOptions` dataclass of thresholds.
- `globalsfm.rigid3d`: the `Rigid3d` transform (`identity`, `inverse`,
  `compose`, `transform`), angle differences between poses and rotations
  (`calc_angle`, `calc_rotation_angle`, `calc_trans`, `calc_trans_angle`),
  degree/radian conversion and angle-axis conversion
  (`rotation_to_angle_axis`, `rigid3d_to_angle_axis`,
  `angle_axis_to_rotation`).
- `globalsfm.gravity`: `get_align_rot` builds a rotation whose second column
  is the gravity direction; `rot_up_to_angle` and `angle_to_rot_up` convert
  between angles and rotations about the y axis.
- `globalsfm.union_find`: a generic `UnionFind` over hashable elements.
- `globalsfm.camera`: `Camera` with the `CameraModel` models
  `SIMPLE_PINHOLE`, `PINHOLE`, `SIMPLE_RADIAL`, `RADIAL` and `OPENCV`;
  `focal`, `principal_point`, `get_k`, and `cam_from_img` / `img_from_cam`
  for conversion between pixels and normalised coordinates (undistortion is
  iterative).
- `globalsfm.two_view_geometry`: `essential_from_motion`,
  `fundamental_from_motion_and_cameras`, `sampson_error` (for 2D image
  points or 3D rays), `homography_error`, `check_cheirality` and
  `get_orientation_signum`.
- `globalsfm.image`: `Image` (pose, features, undistorted rays, cluster id,
  `center()`) and `GravityInfo`.
- `globalsfm.image_pair`: `ImagePair`, plus `image_pair_to_pair_id` and
  `pair_id_to_image_pair` for order-independent pair ids.
- `globalsfm.track`: `Track`, a 3D point with `(image_id, feature_index)`
  observations.
- `globalsfm.view_graph`: `ViewGraph` with `establish_adjacency_list`,
  `keep_largest_connected_components`, `mark_connected_components` and
  `remove_invalid_pair`.
- `globalsfm.gravity_io`: `read_gravity` reads lines of
  `name gx gy gz` into the matching images and aligns their rotations;
  malformed lines raise `ValueError`.
- `globalsfm.l1_solver`: `L1Solver` and `L1SolverOptions`, an ADMM solver for
  `min ||A x - b||_1` with dense arrays or SciPy sparse matrices.
- `globalsfm.tree`: `bfs` over an adjacency list (returns the number of
  vertices reached and the parent list) and `maximum_spanning_tree` over the
  registered images, weighted by `WeightType.INLIER_NUM` or
  `WeightType.INLIER_RATIO` (returns the root image id and a parent map).
- `globalsfm.image_pair_inliers`: `ImagePairInliers.score_error` and
  `image_pairs_inlier_count` collect inlier matches of pairs according to
  their configuration (essential, fundamental or homography).
- `globalsfm.image_undistorter`: `undistort_images` fills each image's
  `features_undist` with unit rays.
- `globalsfm.relpose_filter`: `filter_rotations`, `filter_inlier_num` and
  `filter_inlier_ratio` invalidate unreliable pairs.
- `globalsfm.track_filter`: `filter_tracks_by_reprojection`,
  `filter_tracks_by_angle` and `filter_track_triangulation_angle` drop
  observations that disagree with the current geometry.
- `globalsfm.view_graph_manipulation`: `sparsify_graph` (takes an optional
  `random.Random` for reproducible thinning), `establish_strong_clusters`
  with `StrongClusterCriteria`, and `update_image_pairs_config`.
- `globalsfm.reconstruction_pruning`: `prune_weakly_connected_images`
  clusters images by covisibility in the tracks; it raises `ValueError` when
  no pair of images shares enough points.

Progress messages go through the standard `logging` module.

## Installation

```
pip install globalsfm
```

The `test` extra installs pytest for the test suite in `tests/`.

## Example

```python
import numpy as np

from globalsfm.rigid3d import Rigid3d, angle_axis_to_rotation, calc_angle
from globalsfm.image import Image
from globalsfm.image_pair import ImagePair
from globalsfm.view_graph import ViewGraph

pose = Rigid3d(angle_axis_to_rotation(np.array([0.0, 0.1, 0.0])), np.zeros(3))
print(calc_angle(Rigid3d.identity(), pose))  # about 5.73 degrees

images = {i: Image(image_id=i, camera_id=1, file_name=f"{i}.jpg") for i in (1, 2, 3)}
graph = ViewGraph()
for a, b in [(1, 2), (2, 3)]:
    pair = ImagePair(a, b)
    graph.image_pairs[pair.pair_id] = pair

print(graph.keep_largest_connected_components(images))  # 3
```

## What the package does not do

The package provides the preparation and filtering steps only. It does not
read feature or match databases, does not write reconstructions to disk,
does not estimate or decompose relative poses from matches, does not solve
for global rotations or positions, and has no command-line program.