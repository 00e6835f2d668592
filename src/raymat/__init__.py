"""Taichi material and scattering models for path tracing.

This package implements the surface/volume interaction step of a path
tracer: given a ray that has struck a surface, decide whether and how it
continues and what fraction of light survives.

Subpackages:
    core: Ray struct, vector utilities, random sampling, hit records
    textures: Texture arena (solid colors, checker patterns)
    materials: Lambertian, metal, dielectric, diffuse light and isotropic
        materials, plus the material library used to build scenes
"""

__version__ = "0.1.0"
