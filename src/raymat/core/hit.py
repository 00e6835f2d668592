"""Hit record consumed by the material models.

The intersection routine that produces these records lives outside this
package. Materials only read a HitInfo; they never modify it.
"""

import taichi as ti
import taichi.math as tm

from raymat.core.ray import Ray

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class HitInfo:
    """Record of a ray-surface intersection.

    Attributes:
        p: The 3D point where the ray hit the surface.
        normal: The unit surface normal, oriented against the incoming ray.
        t: The ray parameter at the hit point.
        u: First surface parametrization coordinate.
        v: Second surface parametrization coordinate.
        front_face: 1 if the ray hit the outward-facing side, 0 otherwise.
    """

    p: vec3
    normal: vec3
    t: ti.f32
    u: ti.f32
    v: ti.f32
    front_face: ti.i32


@ti.func
def make_hit_info(
    ray: Ray,
    t: ti.f32,
    p: vec3,
    outward_normal: vec3,
    u: ti.f32,
    v: ti.f32,
) -> HitInfo:
    """Build a HitInfo with the normal facing against the incoming ray.

    Args:
        ray: The ray that produced the hit.
        t: The ray parameter at the hit point.
        p: The hit point.
        outward_normal: The geometric normal pointing out of the surface
            (should be normalized).
        u: First surface coordinate.
        v: Second surface coordinate.

    Returns:
        The hit record with ``front_face`` set and ``normal`` flipped when
        the ray arrives from inside.
    """
    front_face = 1
    normal = outward_normal
    if tm.dot(ray.direction, outward_normal) >= 0.0:
        front_face = 0
        normal = -outward_normal
    return HitInfo(p=p, normal=normal, t=t, u=u, v=v, front_face=front_face)
