"""Command-line reports of camera model conversions and point projections."""

from __future__ import annotations

import argparse
import math
import sys

from percam.cameras import FisheyeEquidistantCamera, OmniCamera
from percam.convert import convert_distortions, fisheye_to_omni, omni_to_polycart
from percam.geometry import pose_matrix
from percam.perspective import PerspectiveCamera
from percam.point import PointFeature


def _format_matrix(matrix) -> str:
    return "\n".join("  ".join(f"{value:g}" for value in row) for row in matrix)


def _intrinsics(camera) -> str:
    return (
        f"alpha_u = {camera.au:g} ; alpha_v = {camera.av:g} ; "
        f"u_0 = {camera.u0:g} ; v_0 = {camera.v0:g}"
    )


def _residual_line(residual: float) -> str:
    return f"An average error of {residual:g} pixel(s) has been made during the conversion"


def fisheye_to_omni_report() -> str:
    """Fit an omni model to an M-12 fisheye lens on a 5 MP sensor."""
    focal = 1.45e-3  # metres
    fov = 190.0  # degrees
    pixel_size = 2.2e-6  # square photodiodes, metres
    width, height = 2592, 1944

    fisheye = FisheyeEquidistantCamera(
        focal / pixel_size, focal / pixel_size, width * 0.5, height * 0.5
    )
    omni, residual = fisheye_to_omni(fisheye, fov)
    lines = [
        f"The input camera is a {fisheye.name} camera of intrinsic parameters "
        f"{_intrinsics(fisheye)}",
        f"The output camera is a {omni.name} camera of intrinsic parameters "
        f"{_intrinsics(omni)} ; xi = {omni.xi:g}",
        _residual_line(residual),
    ]
    return "\n".join(lines) + "\n"


def omni_to_polycart_report() -> str:
    """Fit a polynomial model to a calibrated catadioptric camera."""
    omni = OmniCamera(259.8888419, 259.3345743, 514.1675494, 382.7969728, 0.9751280249)
    polycart, residual = omni_to_polycart(omni)
    coefficients = " ; ".join(f"a_{n} = {c:g}" for n, c in enumerate(polycart.a))
    lines = [
        f"The input camera is a {omni.name} camera of intrinsic parameters "
        f"{_intrinsics(omni)} ; xi = {omni.xi:g}",
        f"The output camera is a {polycart.name} camera of intrinsic parameters "
        f"alpha_u = alpha_v = {polycart.au:g} ; u_0 = {polycart.u0:g} ; "
        f"v_0 = {polycart.v0:g} ; {coefficients}",
        _residual_line(residual),
    ]
    return "\n".join(lines) + "\n"


def distortion_conversion_report() -> str:
    """Fit a polynomial radial distortion to a rational one over a 90 degree field."""
    params = (
        967.548, 967.409, 1025.603, 777.720,
        0.399, -2.589, 1.528, -1.526e-6, -3.088e-4, 0.276, -2.402, 1.448,
    )
    fov = 90.0
    incam = PerspectiveCamera(*params)
    outcam = PerspectiveCamera(*params)
    header_in = f"The input camera is a {incam.name} camera of intrinsic parameters \n"
    description_in = incam.describe()
    residual = convert_distortions(incam, outcam, fov)
    header_out = f"The output camera is a {outcam.name} camera of intrinsic parameters \n"
    return (
        header_in
        + description_in
        + header_out
        + outcam.describe()
        + _residual_line(residual)
        + "\n"
    )


def point_projection_report() -> str:
    """Project a 3D point through a perspective camera down to pixel coordinates."""
    point = PointFeature()
    point.set_world_coordinates(0.1, 0.1, 0.1)
    camera = PerspectiveCamera(500, 500, 640 // 2, 480 // 2)
    pose = pose_matrix(0.25, 0.0, 0.33, math.pi * 0.2, 0.0, 0.0)

    lines = [
        f"The 3D point of coordinates oX = {point.ox:g} ; oY = {point.oy:g} ; "
        f"oZ = {point.oz:g} in the object frame...",
        f"...is observed by a {camera.name} camera of intrinsic parameters "
        f"{_intrinsics(camera)}...",
        "...at camera pose cMo = ",
        _format_matrix(pose),
    ]
    point.change_frame(pose)
    lines.append(
        f"...with respect to what the 3D point coordinates become cX = {point.X:g} ; "
        f"cY = {point.Y:g} ; cZ = {point.Z:g} in the camera frame..."
    )
    camera.project_3d_image(point)
    lines.append(
        f"...that projects as x = {point.x:g} ; y = {point.y:g} "
        "in the normalized image plane..."
    )
    camera.meter_pixel_conversion(point)
    lines.append(
        f"...corresponding to coordinates u = {point.u:g} ; v = {point.v:g} "
        "in the digital image plane"
    )
    return "\n".join(lines) + "\n"


_REPORTS = {
    "fisheye-to-omni": fisheye_to_omni_report,
    "omni-to-polycart": omni_to_polycart_report,
    "distortions": distortion_conversion_report,
    "project-point": point_projection_report,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="percam",
        description="Print camera model conversion and projection reports.",
    )
    parser.add_argument("report", choices=sorted(_REPORTS), help="report to print")
    args = parser.parse_args(argv)
    sys.stdout.write(_REPORTS[args.report]())
    return 0


if __name__ == "__main__":
    sys.exit(main())