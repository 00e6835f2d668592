"""Diffuse light (emitter) material implementation.

A diffuse light never scatters; hitting it ends the path. Its contribution
comes entirely from emission, which samples the light's texture at the hit
point. Emission colors may exceed 1 for bright sources.
"""

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray
from raymat.materials.material import ScatterResult, scattered_ray
from raymat.textures.texture import texture_value

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_diffuse_light(ray_in: Ray, hit: HitInfo):
    """Scatter for a light source: always absorbed.

    Returns:
        A tuple of (scattered, attenuation, result) where scattered
        continues the incoming direction from the hit point, attenuation is
        black and result is ScatterResult.ABSORBED.
    """
    scattered = scattered_ray(ray_in, hit, ray_in.direction)
    attenuation = vec3(0.0, 0.0, 0.0)
    result = int(ScatterResult.ABSORBED)
    return scattered, attenuation, result


@ti.func
def emitted_diffuse_light(texture_id: ti.i32, u: ti.f32, v: ti.f32, p: vec3) -> vec3:
    """Radiance emitted by a diffuse light.

    Args:
        texture_id: The emission texture index.
        u: First surface coordinate.
        v: Second surface coordinate.
        p: The emitting point.

    Returns:
        The emission texture sampled at (u, v, p).
    """
    return texture_value(texture_id, u, v, p)
