"""Isotropic (volumetric) scattering material implementation.

Used inside participating media such as fog or smoke. Light scatters with
no directional preference: the new direction is a uniformly random unit
vector and does not depend on the hit normal, which has no physical meaning
inside a volume.
"""

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray
from raymat.core.sampling import ScatterSample
from raymat.materials.material import ScatterResult, scattered_ray
from raymat.textures.texture import texture_value

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_isotropic(
    texture_id: ti.i32,
    ray_in: Ray,
    hit: HitInfo,
    sample: ScatterSample,
):
    """Scatter a ray inside an isotropic medium.

    Args:
        texture_id: The albedo texture index.
        ray_in: The incoming ray.
        hit: The hit record for the scattering event.
        sample: Random variates for this interaction (uses ``unit``).

    Returns:
        A tuple of (scattered, attenuation, result) where scattered leaves
        the hit point along ``sample.unit``, attenuation is the albedo at
        (u, v, p) and result is always ScatterResult.SCATTERED.
    """
    scattered = scattered_ray(ray_in, hit, sample.unit)
    attenuation = texture_value(texture_id, hit.u, hit.v, hit.p)
    result = int(ScatterResult.SCATTERED)
    return scattered, attenuation, result
