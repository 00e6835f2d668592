"""Core building blocks shared by the material models.

Components:
    ray: Ray data structure, vector utilities, reflection and refraction
    sampling: Random variates and the ScatterSample handle
    hit: Hit record structure consumed by materials
"""

from .hit import HitInfo, make_hit_info
from .ray import (
    NEAR_ZERO_EPSILON,
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)
from .sampling import (
    ScatterSample,
    draw_scatter_sample,
    make_scatter_sample,
    random_in_unit_sphere,
    random_scalar,
    random_unit_vector,
)

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "near_zero",
    "NEAR_ZERO_EPSILON",
    "reflect",
    "refract",
    "schlick_reflectance",
    "ScatterSample",
    "make_scatter_sample",
    "draw_scatter_sample",
    "random_scalar",
    "random_in_unit_sphere",
    "random_unit_vector",
    "HitInfo",
    "make_hit_info",
]
