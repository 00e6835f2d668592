"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness. The
incoming direction is normalized and mirrored about the normal:

    R = D - 2(D . N)N

and then perturbed by ``fuzz`` times a random unit vector. fuzz = 0 gives
a perfect mirror; larger values spread reflections over a wider cone.

A fuzzed direction can end up below the surface. Such rays are absorbed:
the scatter result is SCATTERED exactly when ``dot(normal, direction) > 0``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymat.materials.metal import scatter_metal
    >>> # Use within a Taichi kernel:
    >>> # scattered, attenuation, result = scatter_metal(
    >>> #     albedo, fuzz, ray_in, hit, sample
    >>> # )
"""

import logging

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray, reflect
from raymat.core.sampling import ScatterSample
from raymat.materials.material import ScatterResult, scattered_ray

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

MAX_FUZZ = 1.0


def clamp_fuzz(fuzz: float) -> float:
    """Clamp a fuzz value to at most MAX_FUZZ.

    Args:
        fuzz: The requested fuzz. Must be non-negative.

    Returns:
        ``fuzz`` if it is below 1, otherwise 1.

    Raises:
        ValueError: If fuzz is negative or NaN.
    """
    # NaN fails every comparison
    if not fuzz >= 0.0:
        raise ValueError(
            f"Fuzz = {fuzz} is negative or NaN. "
            "Fuzz must be between 0 (perfect mirror) and 1 (maximum spread)."
        )
    if fuzz >= MAX_FUZZ:
        if fuzz > MAX_FUZZ:
            logger.warning("Metal fuzz %.3f clamped to %.1f", fuzz, MAX_FUZZ)
        return MAX_FUZZ
    return fuzz


@ti.func
def scatter_metal(
    albedo: vec3,
    fuzz: ti.f32,
    ray_in: Ray,
    hit: HitInfo,
    sample: ScatterSample,
):
    """Scatter a ray off a metal surface.

    Args:
        albedo: The reflective color (RGB).
        fuzz: The reflection roughness in [0, 1]. 0 = perfect mirror.
        ray_in: The incoming ray.
        hit: The hit record for the surface point.
        sample: Random variates for this interaction (uses ``unit``).

    Returns:
        A tuple of (scattered, attenuation, result) where:
        - scattered: The fuzzed reflection leaving the hit point.
        - attenuation: The albedo.
        - result: SCATTERED if the direction points away from the surface,
          ABSORBED otherwise.
    """
    reflected = reflect(tm.normalize(ray_in.direction), hit.normal)
    direction = reflected + fuzz * sample.unit
    scattered = scattered_ray(ray_in, hit, direction)

    result = int(ScatterResult.ABSORBED)
    if tm.dot(hit.normal, direction) > 0.0:
        result = int(ScatterResult.SCATTERED)

    # Metal attenuation is simply the albedo
    attenuation = albedo

    return scattered, attenuation, result
