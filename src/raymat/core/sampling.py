"""Random sampling for Monte Carlo scattering.

Scatter functions never call the random number generator themselves.
Instead the caller draws a ScatterSample once per ray-surface interaction
and passes it in, so every material model is a pure function of its inputs
and tests can force any sample they like.

Taichi keeps one RNG state per thread, which makes draws inside parallel
kernels safe. Seed it through ``ti.init(random_seed=...)`` for reproducible
renders.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class ScatterSample:
    """Random variates consumed by one scatter call.

    Attributes:
        unit: A unit vector uniformly distributed on the sphere.
        scalar: A uniform scalar in [0, 1).
    """

    unit: vec3
    scalar: ti.f32


@ti.func
def random_scalar() -> ti.f32:
    """Draw a uniform scalar in [0, 1)."""
    return ti.random(ti.f32)


@ti.func
def random_in_unit_sphere() -> vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling to generate uniformly distributed points
    within the unit sphere.

    Returns:
        A random point with 0 < length < 1.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    # Rejection sampling loop
    for _ in range(100):  # Max iterations to avoid infinite loops
        if not found:
            p = vec3(
                ti.random(ti.f32) * 2.0 - 1.0,
                ti.random(ti.f32) * 2.0 - 1.0,
                ti.random(ti.f32) * 2.0 - 1.0,
            )
            lensq = tm.dot(p, p)
            # Points too close to the center lose precision when normalized
            if 1e-20 < lensq < 1.0:
                found = True
    return p


@ti.func
def random_unit_vector() -> vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return tm.normalize(random_in_unit_sphere())


@ti.func
def make_scatter_sample(unit: vec3, scalar: ti.f32) -> ScatterSample:
    """Build a ScatterSample from explicit variates.

    Useful for deterministic callers (tests, stratified samplers).
    """
    return ScatterSample(unit=unit, scalar=scalar)


@ti.func
def draw_scatter_sample() -> ScatterSample:
    """Draw the variates for one scatter call from the thread's RNG."""
    unit = random_unit_vector()
    scalar = random_scalar()
    return ScatterSample(unit=unit, scalar=scalar)
