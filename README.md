# percam

Camera models for perspective and omnidirectional vision, least-squares
conversions between them, and photometric Gaussian mixture features sampled
on images.

## What it covers

- `percam.geometry`: homogeneous points `Point2D` and `Point3D`, which can be
  moved between frames with `change_frame` and a 4×4 homogeneous matrix.
  `pose_matrix(tx, ty, tz, tux, tuy, tuz)` builds such a matrix from a
  translation and a theta-u rotation vector.
- `percam.point`: `PointFeature` holds the world, camera-frame,
  normalized-image (`x`, `y`) and pixel (`u`, `v`) coordinates of one point.
- `percam.camera`: `CameraModel`, the intrinsics (`au`, `av`, `u0`, `v0`) and
  up to eight distortion coefficients (radial k1–k3 in the numerator,
  tangential k4–k5, radial k6–k8 in the denominator), with
  `meter_pixel_conversion`, `pixel_meter_conversion`, `intrinsic_matrix` and
  `describe`. `CameraType` lists the model kinds.
- `percam.perspective`: `PerspectiveCamera`.
- `percam.cameras`: `OmniCamera` (unified model with parameter `xi`),
  `ParaboloidCamera`, `EquirectangularCamera`, `FisheyeEquidistantCamera` and
  `PolyCartCamera` (polynomial ray depth as a function of pixel radius).
- `percam.stereo`: `StereoModel`, a list of sensors with the pose of each
  relative to the first.
- `percam.convert`: `fisheye_to_omni` and `omni_to_polycart`, which return the
  fitted camera and the fit residual, and `convert_distortions`, which sets on
  an output camera a polynomial radial distortion fitted to the rational one
  of an input camera and returns the root mean square pixel error.
- `percam.comparator`: `SSDComparator`, the sum of squared differences between
  two equally long feature sets, optionally weighted by Cauchy M-estimator
  weights (`cauchy_weights`).
- `percam.neighborhood`: `Neighborhood`, which computes for every pixel the
  row and column of six neighbours along each of the X, Y and Z axes of the
  unit sphere; `compute_index_neighbor` rounds a coordinate to an index.
- `percam.gms`: `PhotometricGMS`, a normalized Gaussian mixture of intensities
  on the sphere over a `SampledImage`, with its pose Jacobian.
- `percam.nngms`: `PhotometricNNGMS`, a non-normalized Gaussian mixture over a
  square window of a `GridImage`, with its feature Jacobian.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Projecting a point

```python
import math

from percam.geometry import pose_matrix
from percam.perspective import PerspectiveCamera
from percam.point import PointFeature

camera = PerspectiveCamera(500, 500, 320, 240)

point = PointFeature()
point.set_world_coordinates(0.1, 0.1, 0.1)

cMo = pose_matrix(0.25, 0.0, 0.33, math.pi * 0.2, 0.0, 0.0)
point.change_frame(cMo)               # world -> camera frame
camera.project_3d_image(point)        # camera frame -> normalized image plane
camera.meter_pixel_conversion(point)  # normalized image plane -> pixels
print(point.u, point.v)
```

## Converting between camera models

```python
from percam.cameras import FisheyeEquidistantCamera
from percam.convert import fisheye_to_omni

f, k = 1.45e-3, 2.2e-6
fisheye = FisheyeEquidistantCamera(f / k, f / k, 2592 * 0.5, 1944 * 0.5)
omni, residual = fisheye_to_omni(fisheye, 190)
print(omni.au, omni.xi, residual)
```

The fits use one sample per degree across the given field of view.

## Command line

```
percam fisheye-to-omni
percam omni-to-polycart
percam distortions
percam project-point
```

Each prints one worked example: a fisheye-to-omni conversion, an
omni-to-polynomial conversion, a distortion-model conversion for a
perspective camera, and the projection of a 3D point through a perspective
camera down to pixel coordinates.

## What it does not do

- Cameras and rigs are held in memory only; there is no saving or loading of
  camera or `StereoModel` parameters to files.
- It reads no image files; `SampledImage` and `GridImage` are built from
  NumPy arrays.
- `PerspectiveCamera` and `FisheyeEquidistantCamera` have no image-to-sphere
  lifting, and `PolyCartCamera` has no 3D-to-image projection, so
  `Neighborhood.build` needs a camera such as `OmniCamera` or
  `EquirectangularCamera`.
- There is no pose estimation or visual servoing loop; the Jacobians are
  provided for such code to use.