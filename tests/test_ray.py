"""Unit tests for the ray module.

Tests cover:
- Ray dataclass, ray_at and make_ray (including the time stamp)
- Vector utility functions (dot, normalize, length, near_zero)
- Reflection, refraction and Schlick reflectance
"""

import math

import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from raymat.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0), time=0.0)
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 2.0) < 1e-6
        assert abs(r[2] - 3.0) < 1e-6

    def test_ray_at_positive_t(self):
        """Test ray_at computes correct point along ray."""
        from raymat.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(1.0, 0.0, 0.0), time=0.0)
            result[None] = ray_at(ray, 5.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 5.0) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_make_ray_keeps_time(self):
        """Test make_ray stores origin, direction and time."""
        from raymat.core.ray import make_ray, vec3

        result_dir = ti.field(dtype=ti.math.vec3, shape=())
        result_time = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 2.0, 0.0), 0.75)
            result_dir[None] = ray.direction
            result_time[None] = ray.time

        test_kernel()
        assert abs(result_dir[None][1] - 2.0) < 1e-6
        assert abs(result_time[None] - 0.75) < 1e-6


class TestVectorUtilities:
    """Tests for vector helpers."""

    def test_length_and_normalize(self):
        """Test length of a 3-4-0 vector and its normalization."""
        from raymat.core.ray import length, length_squared, normalize, vec3

        result_len = ti.field(dtype=ti.f32, shape=())
        result_len_sq = ti.field(dtype=ti.f32, shape=())
        result_norm = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 0.0)
            result_len[None] = length(v)
            result_len_sq[None] = length_squared(v)
            result_norm[None] = normalize(v)

        test_kernel()
        assert abs(result_len[None] - 5.0) < 1e-5
        assert abs(result_len_sq[None] - 25.0) < 1e-4
        n = result_norm[None]
        assert abs(n[0] - 0.6) < 1e-6
        assert abs(n[1] - 0.8) < 1e-6

    def test_dot(self):
        """Test dot product."""
        from raymat.core.ray import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))

        test_kernel()
        assert abs(result[None] - 12.0) < 1e-5

    def test_near_zero(self):
        """Test near_zero only accepts vectors with all components tiny."""
        from raymat.core.ray import near_zero, vec3

        results = ti.field(dtype=ti.i32, shape=4)

        @ti.kernel
        def test_kernel():
            results[0] = near_zero(vec3(0.0, 0.0, 0.0))
            results[1] = near_zero(vec3(1e-9, -1e-9, 1e-9))
            results[2] = near_zero(vec3(1e-9, 1e-3, 0.0))
            results[3] = near_zero(vec3(0.0, 1.0, 0.0) + vec3(0.0, -1.0, 0.0))

        test_kernel()
        assert results[0] == 1
        assert results[1] == 1
        assert results[2] == 0
        assert results[3] == 1


class TestReflectRefract:
    """Tests for reflect, refract and schlick_reflectance."""

    def test_reflect_45_degrees(self):
        """Test reflection of a 45 degree ray off a floor."""
        from raymat.core.ray import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            inv_sqrt2 = 1.0 / ti.sqrt(2.0)
            result[None] = reflect(vec3(inv_sqrt2, -inv_sqrt2, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        d = result[None]
        inv_sqrt2 = 1.0 / math.sqrt(2.0)
        assert abs(d[0] - inv_sqrt2) < 1e-6
        assert abs(d[1] - inv_sqrt2) < 1e-6
        assert abs(d[2]) < 1e-6

    def test_refract_normal_incidence_unchanged(self):
        """At normal incidence the ray continues straight for any ratio."""
        from raymat.core.ray import refract, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = refract(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0), 1.0 / 1.5)

        test_kernel()
        d = result[None]
        assert abs(d[0]) < 1e-6
        assert abs(d[1] + 1.0) < 1e-6
        assert abs(d[2]) < 1e-6

    def test_refract_snells_law(self):
        """Test that the refracted tangent component follows Snell's law."""
        from raymat.core.ray import length, refract, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        result_len = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            inv_sqrt2 = 1.0 / ti.sqrt(2.0)
            d = refract(vec3(inv_sqrt2, -inv_sqrt2, 0.0), vec3(0.0, 1.0, 0.0), 1.0 / 1.5)
            result[None] = d
            result_len[None] = length(d)

        test_kernel()
        d = result[None]
        sin_theta2 = (1.0 / math.sqrt(2.0)) / 1.5
        assert abs(d[0] - sin_theta2) < 1e-5
        assert d[1] < 0.0
        # Unit input refracts to unit output
        assert abs(result_len[None] - 1.0) < 1e-5

    def test_schlick_at_normal_incidence_is_r0(self):
        """At cos_theta = 1 Schlick's reflectance equals r0."""
        from raymat.core.ray import schlick_reflectance

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = schlick_reflectance(1.0, 1.5)

        test_kernel()
        assert abs(result[None] - 0.04) < 1e-6

    def test_schlick_at_grazing_is_one(self):
        """At cos_theta = 0 Schlick's reflectance is 1."""
        from raymat.core.ray import schlick_reflectance

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = schlick_reflectance(0.0, 1.0 / 1.5)

        test_kernel()
        assert abs(result[None] - 1.0) < 1e-6
