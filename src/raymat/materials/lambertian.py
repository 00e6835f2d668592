"""Lambertian (ideal diffuse) material implementation.

This module implements ideal diffuse reflection. The scattered direction is
the surface normal plus a uniformly random unit vector, i.e. a random point
on the unit sphere tangent to the surface at the hit point. The resulting
directions are distributed proportionally to cos(theta) around the normal,
which is exactly the importance-sampling shape of the Lambertian BRDF, so
the attenuation reduces to the albedo:

    attenuation = (BRDF * cos_theta) / pdf
                = (albedo / pi) * cos_theta / (cos_theta / pi)
                = albedo

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymat.materials.lambertian import scatter_lambertian
    >>> # Use within a Taichi kernel:
    >>> # scattered, attenuation, result = scatter_lambertian(
    >>> #     texture_id, ray_in, hit, sample
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray, near_zero
from raymat.core.sampling import ScatterSample
from raymat.materials.material import ScatterResult, scattered_ray
from raymat.textures.texture import texture_value

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def lambertian_direction(normal: vec3, unit_sample: vec3) -> vec3:
    """Compute the diffuse scatter direction for a unit sample.

    Args:
        normal: The surface normal at the hit point (should be normalized).
        unit_sample: A random unit vector.

    Returns:
        ``normal + unit_sample``, or ``normal`` itself when the sum is
        degenerate (the sample points almost exactly against the normal).
    """
    direction = normal + unit_sample
    if near_zero(direction):
        direction = normal
    return direction


@ti.func
def scatter_lambertian(
    texture_id: ti.i32,
    ray_in: Ray,
    hit: HitInfo,
    sample: ScatterSample,
):
    """Scatter a ray off a Lambertian surface.

    Lambertian surfaces always scatter.

    Args:
        texture_id: The albedo texture index.
        ray_in: The incoming ray.
        hit: The hit record for the surface point.
        sample: Random variates for this interaction (uses ``unit``).

    Returns:
        A tuple of (scattered, attenuation, result) where:
        - scattered: The ray leaving the hit point (direction not normalized).
        - attenuation: The albedo sampled at (u, v, p).
        - result: Always ScatterResult.SCATTERED.
    """
    direction = lambertian_direction(hit.normal, sample.unit)
    scattered = scattered_ray(ray_in, hit, direction)
    attenuation = texture_value(texture_id, hit.u, hit.v, hit.p)
    result = int(ScatterResult.SCATTERED)
    return scattered, attenuation, result
