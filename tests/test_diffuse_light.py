"""Unit tests for the DiffuseLight material module."""

import taichi as ti


class TestDiffuseLightScatter:
    """Tests for scatter_diffuse_light."""

    def test_always_absorbed_with_black_attenuation(self):
        """A light never continues the path."""
        from raymat.core.hit import HitInfo
        from raymat.core.ray import Ray, vec3
        from raymat.materials.diffuse_light import scatter_diffuse_light
        from raymat.materials.material import ScatterResult

        result_atten = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_scatter = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 1.0, 0.0), direction=vec3(0.0, -1.0, 0.0), time=0.0)
            front = HitInfo(
                p=vec3(0.0, 0.0, 0.0),
                normal=vec3(0.0, 1.0, 0.0),
                t=1.0,
                u=0.0,
                v=0.0,
                front_face=1,
            )
            back = HitInfo(
                p=vec3(0.0, 0.0, 0.0),
                normal=vec3(0.0, 1.0, 0.0),
                t=1.0,
                u=0.0,
                v=0.0,
                front_face=0,
            )
            scattered_front, atten_front, result_front = scatter_diffuse_light(ray, front)
            scattered_back, atten_back, result_back = scatter_diffuse_light(ray, back)
            result_atten[None] = atten_front
            result_scatter[0] = result_front
            result_scatter[1] = result_back

        test_kernel()
        a = result_atten[None]
        assert (a[0], a[1], a[2]) == (0.0, 0.0, 0.0)
        assert result_scatter[0] == int(ScatterResult.ABSORBED)
        assert result_scatter[1] == int(ScatterResult.ABSORBED)

    def test_absorbed_ray_continues_from_hit_point(self):
        """The returned ray starts at the hit and keeps direction and time."""
        from raymat.core.hit import HitInfo
        from raymat.core.ray import Ray, vec3
        from raymat.materials.diffuse_light import scatter_diffuse_light

        result_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_dir = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_time = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(0.0, 1.0, 0.0), direction=vec3(0.0, -2.0, 0.0), time=0.6)
            hit = HitInfo(
                p=vec3(0.5, 0.0, -0.5),
                normal=vec3(0.0, 1.0, 0.0),
                t=0.5,
                u=0.0,
                v=0.0,
                front_face=1,
            )
            scattered, attenuation, result = scatter_diffuse_light(ray, hit)
            result_origin[None] = scattered.origin
            result_dir[None] = scattered.direction
            result_time[None] = scattered.time

        test_kernel()
        o = result_origin[None]
        d = result_dir[None]
        assert (o[0], o[1], o[2]) == (0.5, 0.0, -0.5)
        assert (d[0], d[1], d[2]) == (0.0, -2.0, 0.0)
        assert abs(result_time[None] - 0.6) < 1e-6


class TestDiffuseLightEmission:
    """Tests for emitted_diffuse_light."""

    def test_solid_emission_above_one(self):
        """Emission returns the light color unclamped."""
        from raymat.core.ray import vec3
        from raymat.materials.diffuse_light import emitted_diffuse_light
        from raymat.textures.texture import add_solid_color

        lamp = add_solid_color((4.0, 4.0, 4.0))
        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = emitted_diffuse_light(lamp, 0.3, 0.7, vec3(1.0, 2.0, 3.0))

        test_kernel()
        e = result[None]
        assert (e[0], e[1], e[2]) == (4.0, 4.0, 4.0)

    def test_textured_emission(self):
        """A checker emitter glows with the color of the cell hit."""
        from raymat.core.ray import vec3
        from raymat.materials.diffuse_light import emitted_diffuse_light
        from raymat.textures.texture import add_uv_checker_texture

        panel = add_uv_checker_texture(2.0, (2.0, 2.0, 2.0), (0.5, 0.5, 0.5))
        results = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            p = vec3(0.0, 0.0, 0.0)
            results[0] = emitted_diffuse_light(panel, 0.25, 0.25, p)
            results[1] = emitted_diffuse_light(panel, 0.75, 0.25, p)

        test_kernel()
        assert results[0][0] == 2.0
        assert results[1][0] == 0.5
