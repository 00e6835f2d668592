"""Materials module for light scattering models.

Components:
    material: Material contract (MaterialKind, ScatterResult, Material)
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with fuzz
    dielectric: Glass-like refraction with Schlick-weighted reflection
    diffuse_light: Emissive surfaces that end the path
    isotropic: Uniform scattering inside participating media
    library: Material arena, dispatch and the MaterialLibrary scene API

Each scatter function returns ``(scattered_ray, attenuation, result)`` and
takes its random variates as an explicit ScatterSample argument.
"""

from .dielectric import fresnel_reflectance, refraction_ratio, scatter_dielectric, will_reflect
from .diffuse_light import emitted_diffuse_light, scatter_diffuse_light
from .isotropic import scatter_isotropic
from .lambertian import lambertian_direction, scatter_lambertian
from .library import (
    MAX_MATERIALS,
    LibraryConfig,
    MaterialInfo,
    MaterialLibrary,
    TextureInfo,
    add_material,
    clear_materials,
    emitted,
    emitted_by_id,
    get_material,
    get_material_count,
    sample_scatter,
    scatter,
    scatter_by_id,
)
from .material import Material, MaterialKind, ScatterResult, emitted_black, scattered_ray
from .metal import MAX_FUZZ, clamp_fuzz, scatter_metal

__all__ = [
    # Contract
    "Material",
    "MaterialKind",
    "ScatterResult",
    "emitted_black",
    "scattered_ray",
    # Lambertian
    "lambertian_direction",
    "scatter_lambertian",
    # Metal
    "MAX_FUZZ",
    "clamp_fuzz",
    "scatter_metal",
    # Dielectric
    "refraction_ratio",
    "will_reflect",
    "fresnel_reflectance",
    "scatter_dielectric",
    # Diffuse light
    "scatter_diffuse_light",
    "emitted_diffuse_light",
    # Isotropic
    "scatter_isotropic",
    # Library
    "MAX_MATERIALS",
    "LibraryConfig",
    "MaterialInfo",
    "TextureInfo",
    "MaterialLibrary",
    "add_material",
    "clear_materials",
    "get_material",
    "get_material_count",
    "scatter",
    "emitted",
    "scatter_by_id",
    "sample_scatter",
    "emitted_by_id",
]
