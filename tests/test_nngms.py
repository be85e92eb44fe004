import numpy as np
import pytest

from percam.nngms import GridImage, PhotometricNNGMS


def _ramp(size=11):
    rows, cols = np.indices((size, size))
    return GridImage(cols.astype(float))


def _uniform(size=11, level=1.0):
    return GridImage(np.full((size, size), level))


def test_grid_image_default_points_are_pixel_coordinates():
    image = GridImage(np.arange(6.0).reshape(2, 3))
    location, value = image.sample(4)
    assert location.tolist() == [1.0, 1.0]
    assert value == 4.0
    assert image.width == 3
    assert len(image) == 6
    assert image.rho(2) == 1.0


def test_grid_image_rejects_mismatched_points():
    with pytest.raises(ValueError):
        GridImage(np.zeros((2, 2)), points=np.zeros((3, 2)))


def test_grid_image_rejects_non_2d_values():
    with pytest.raises(ValueError):
        GridImage(np.zeros(4))


def test_half_side_follows_lambda():
    assert PhotometricNNGMS(1.0).half_side == 3
    assert PhotometricNNGMS(0.1).half_side == 0


def test_non_positive_lambda_resets_constants():
    feature = PhotometricNNGMS(2.0)
    feature.set_lambda(0.0)
    assert feature.lambda_g == 1.0
    assert feature.one_o_l2 == 0.0
    assert feature.norm_fact == 0.0


def test_single_sample_window_gives_the_sample_value():
    image = GridImage(np.arange(25.0).reshape(5, 5))
    feature = PhotometricNNGMS(0.1)
    feature.build_from(image, (2.0, 3.0), source_index=17)
    assert feature.to_double() == pytest.approx(17.0)


def test_symmetric_image_has_zero_jacobian():
    feature = PhotometricNNGMS(1.0)
    feature.build_from(_uniform(), (5.0, 5.0), True, 1.0, 60)
    assert np.allclose(feature.feature_jacobian(), 0.0)


def test_jacobian_points_towards_brighter_samples():
    feature = PhotometricNNGMS(1.0)
    feature.build_from(_ramp(), (5.0, 5.0), True, 1.0, 60)
    jacobian = feature.feature_jacobian()
    assert jacobian.shape == (2,)
    assert jacobian[0] > 0
    assert jacobian[1] == pytest.approx(0.0, abs=1e-9)


def test_jacobian_unavailable_before_derivatives():
    feature = PhotometricNNGMS(1.0)
    feature.build_from(_uniform(), (5.0, 5.0), False, 1.0, 60)
    with pytest.raises(RuntimeError):
        feature.feature_jacobian()


def test_update_matches_build_with_derivatives():
    built = PhotometricNNGMS(1.0)
    built.build_from(_ramp(), (5.0, 5.0), True, 1.0, 60)
    updated = PhotometricNNGMS(1.0)
    updated.build_from(_uniform(), (5.0, 5.0), True, 1.0, 60)
    updated.update_from(_ramp(), True, 60)
    assert updated.value == pytest.approx(built.value)
    assert np.allclose(updated.feature_jacobian(), built.feature_jacobian())


def test_update_scales_with_image():
    feature = PhotometricNNGMS(1.0)
    feature.build_from(_uniform(level=1.0), (5.0, 5.0), False, 1.0, 60)
    first = feature.value
    feature.update_from(_uniform(level=2.0), False, 60)
    assert feature.value == pytest.approx(2.0 * first)


def test_update_before_build_raises():
    with pytest.raises(RuntimeError):
        PhotometricNNGMS(1.0).update_from(_uniform())


def test_value_grows_with_lambda_on_uniform_image():
    small = PhotometricNNGMS(0.5)
    small.build_from(_uniform(15), (7.0, 7.0), source_index=112)
    large = PhotometricNNGMS(1.5)
    large.build_from(_uniform(15), (7.0, 7.0), source_index=112)
    assert large.value > small.value >= 1.0


def test_copy_is_independent():
    feature = PhotometricNNGMS(1.0)
    feature.build_from(_ramp(), (5.0, 5.0), True, 1.0, 60)
    clone = feature.copy()
    assert clone.value == feature.value
    assert np.allclose(clone.feature_jacobian(), feature.feature_jacobian())
    clone.update_from(_uniform(level=0.0), True, 60)
    assert clone.value == 0.0
    assert feature.value > 0.0


def test_arithmetic():
    a = PhotometricNNGMS(1.0)
    a.value = 5.0
    b = PhotometricNNGMS(1.0)
    b.value = 2.0
    assert (a - b).value == 3.0
    assert (a * b).value == 10.0
    assert (a * 0.5).value == 2.5
    a += b
    assert a.value == 7.0
    assert (a - b).lambda_g == 1.0