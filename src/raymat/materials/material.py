"""Material contract shared by all material models.

Every material answers two questions for the integrator:

    scatter(ray_in, hit, sample) -> (scattered_ray, attenuation, result)
        Whether the path continues, along which ray, and the color factor
        applied to the light that ray carries.

    emitted(u, v, p) -> color
        Radiance emitted by the surface itself. Black for everything but
        diffuse lights.

The set of materials is closed, so a material is a plain struct tagged with
its MaterialKind and dispatched by ``raymat.materials.library``.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray

# Type alias for 3D vectors
vec3 = tm.vec3


class MaterialKind(IntEnum):
    """Enumeration of supported material kinds.

    Used for material dispatch to determine which scattering function to
    call.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2
    DIFFUSE_LIGHT = 3
    ISOTROPIC = 4


class ScatterResult(IntEnum):
    """Outcome of a scatter call.

    ABSORBED ends the path at this surface; only emission contributes.
    SCATTERED continues the path along the returned ray.
    """

    ABSORBED = 0
    SCATTERED = 1


@ti.dataclass
class Material:
    """Material properties for every kind, tagged by ``kind``.

    Attributes:
        kind: The MaterialKind of this material.
        texture_id: Texture sampled for albedo (Lambertian, Isotropic) or
            emission (DiffuseLight). -1 when unused.
        albedo: Constant reflective color (Metal).
        fuzz: Reflection roughness in [0, 1] (Metal).
        eta: Index of refraction relative to the surrounding medium
            (Dielectric).
    """

    kind: ti.i32
    texture_id: ti.i32
    albedo: vec3
    fuzz: ti.f32
    eta: ti.f32


@ti.func
def scattered_ray(ray_in: Ray, hit: HitInfo, direction: vec3) -> Ray:
    """Create the outgoing ray leaving the hit point.

    The outgoing ray keeps the time of the incoming ray.
    """
    return Ray(origin=hit.p, direction=direction, time=ray_in.time)


@ti.func
def emitted_black(u: ti.f32, v: ti.f32, p: vec3) -> vec3:
    """Default emission for non-emissive materials."""
    return vec3(0.0, 0.0, 0.0)
