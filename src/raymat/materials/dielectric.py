"""Dielectric (glass/water) material implementation.

This module implements transparent, non-absorbing materials like glass and
water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1

When refraction is possible the material reflects with probability equal to
the Schlick reflectance and refracts otherwise, which importance-samples
the Fresnel split (grazing angles reflect more).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymat.materials.dielectric import scatter_dielectric
    >>> # Use within a Taichi kernel:
    >>> # scattered, attenuation, result = scatter_dielectric(
    >>> #     eta, ray_in, hit, sample
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray, reflect, refract, schlick_reflectance
from raymat.core.sampling import ScatterSample
from raymat.materials.material import ScatterResult, scattered_ray

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def refraction_ratio(eta: ti.f32, front_face: ti.i32) -> ti.f32:
    """Select the refraction ratio for the side of the surface that was hit.

    Entering from outside (front_face=1) the ratio is 1/eta; leaving the
    material (front_face=0) it is eta.
    """
    ratio = 1.0 / eta
    if front_face == 0:
        ratio = eta
    return ratio


@ti.func
def will_reflect(
    eta: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
) -> ti.i32:
    """Determine if total internal reflection will occur.

    Args:
        eta: Index of refraction of the material.
        incident_direction: The incoming ray direction (should be normalized).
        normal: The surface normal (should be normalized).
        front_face: 1 if ray is hitting the outside of the surface,
            0 if ray is inside the material hitting from within.

    Returns:
        1 if total internal reflection will occur, 0 otherwise.
    """
    ratio = refraction_ratio(eta, front_face)
    cos_theta = tm.min(-tm.dot(incident_direction, normal), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    return 1 if ratio * sin_theta > 1.0 else 0


@ti.func
def fresnel_reflectance(
    eta: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
) -> ti.f32:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        eta: Index of refraction of the material.
        incident_direction: The incoming ray direction (should be normalized).
        normal: The surface normal (should be normalized).
        front_face: 1 if ray is hitting the outside of the surface,
            0 if ray is inside the material hitting from within.

    Returns:
        The Fresnel reflectance coefficient in [0, 1].
    """
    ratio = refraction_ratio(eta, front_face)
    cos_theta = tm.min(-tm.dot(incident_direction, normal), 1.0)
    return schlick_reflectance(cos_theta, ratio)


@ti.func
def scatter_dielectric(
    eta: ti.f32,
    ray_in: Ray,
    hit: HitInfo,
    sample: ScatterSample,
):
    """Scatter a ray off a dielectric surface.

    Args:
        eta: Index of refraction of the material.
        ray_in: The incoming ray.
        hit: The hit record. ``front_face`` selects the refraction ratio.
        sample: Random variates for this interaction (uses ``scalar`` for
            the reflect/refract choice).

    Returns:
        A tuple of (scattered, attenuation, result) where:
        - scattered: The reflected or refracted ray leaving the hit point.
        - attenuation: White; clear dielectrics absorb nothing.
        - result: Always ScatterResult.SCATTERED.
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    ratio = refraction_ratio(eta, hit.front_face)

    unit_direction = tm.normalize(ray_in.direction)
    cos_theta = tm.min(-tm.dot(unit_direction, hit.normal), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)

    cannot_refract = ratio * sin_theta > 1.0

    direction = vec3(0.0, 0.0, 0.0)
    if cannot_refract or sample.scalar < schlick_reflectance(cos_theta, ratio):
        direction = reflect(unit_direction, hit.normal)
    else:
        direction = refract(unit_direction, hit.normal, ratio)

    scattered = scattered_ray(ray_in, hit, direction)
    result = int(ScatterResult.SCATTERED)
    return scattered, attenuation, result
