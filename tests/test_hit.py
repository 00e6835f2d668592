"""Unit tests for the hit record module."""

import taichi as ti


class TestMakeHitInfo:
    """Tests for normal orientation and front_face detection."""

    def test_front_face_keeps_outward_normal(self):
        """A ray arriving from outside keeps the outward normal."""
        from raymat.core.hit import make_hit_info
        from raymat.core.ray import Ray, vec3

        result_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_front = ti.field(dtype=ti.i32, shape=())
        result_uv = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 5.0, 0.0), direction=vec3(0.0, -1.0, 0.0), time=0.0)
            hit = make_hit_info(ray, 4.0, vec3(0.0, 1.0, 0.0), vec3(0.0, 1.0, 0.0), 0.25, 0.75)
            result_normal[None] = hit.normal
            result_front[None] = hit.front_face
            result_uv[None] = ti.math.vec2(hit.u, hit.v)

        test_kernel()
        assert result_front[None] == 1
        assert abs(result_normal[None][1] - 1.0) < 1e-6
        assert abs(result_uv[None][0] - 0.25) < 1e-6
        assert abs(result_uv[None][1] - 0.75) < 1e-6

    def test_back_face_flips_normal(self):
        """A ray arriving from inside gets the normal flipped toward it."""
        from raymat.core.hit import make_hit_info
        from raymat.core.ray import Ray, vec3

        result_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_front = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 1.0, 0.0), time=0.0)
            hit = make_hit_info(ray, 1.0, vec3(0.0, 1.0, 0.0), vec3(0.0, 1.0, 0.0), 0.0, 0.0)
            result_normal[None] = hit.normal
            result_front[None] = hit.front_face

        test_kernel()
        assert result_front[None] == 0
        assert abs(result_normal[None][1] + 1.0) < 1e-6
