"""Material library: storage, dispatch and scene-build API.

This module ties the material models together. It provides:

- A material arena in Taichi fields, one slot per material, addressed by a
  stable material ID.
- ``scatter`` and ``emitted``: the single dispatch point over the closed set
  of MaterialKinds, plus ``*_by_id`` variants that read the arena.
- MaterialLibrary: a high-level Python API for registering textures and
  materials at scene-build time, with configuration export/import.

Materials are built once and only read afterwards, so kernels may call the
dispatch functions from any number of threads without locking.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymat.materials.library import MaterialLibrary
    >>> library = MaterialLibrary()
    >>> ground = library.add_lambertian(albedo=(0.5, 0.5, 0.5))
    >>> gold = library.add_metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
    >>> glass = library.add_dielectric(eta=1.5)
    >>> # Inside a Taichi kernel:
    >>> # scattered, attenuation, result = sample_scatter(gold, ray, hit)
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import taichi as ti
import taichi.math as tm

from raymat.core.hit import HitInfo
from raymat.core.ray import Ray
from raymat.core.sampling import ScatterSample, draw_scatter_sample
from raymat.materials.dielectric import scatter_dielectric
from raymat.materials.diffuse_light import emitted_diffuse_light, scatter_diffuse_light
from raymat.materials.isotropic import scatter_isotropic
from raymat.materials.lambertian import scatter_lambertian
from raymat.materials.material import (
    Material,
    MaterialKind,
    ScatterResult,
    emitted_black,
    scattered_ray,
)
from raymat.materials.metal import clamp_fuzz, scatter_metal
from raymat.textures.texture import (
    MAX_TEXTURES,
    TextureKind,
    add_checker_texture,
    add_solid_color,
    add_uv_checker_texture,
    clear_textures,
    get_texture_count,
    is_valid_texture_id,
)

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

Color = tuple[float, float, float]

# =============================================================================
# Material Field Storage
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_texture_ids = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzzes = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_etas = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(
    kind: MaterialKind,
    texture_id: int = -1,
    albedo: Color = (0.0, 0.0, 0.0),
    fuzz: float = 0.0,
    eta: float = 1.0,
) -> int:
    """Store a material in the arena without validation.

    Prefer the MaterialLibrary methods, which validate parameters and keep
    track of what was registered.

    Returns:
        The material ID of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_kinds[idx] = int(kind)
    material_texture_ids[idx] = texture_id
    material_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    material_fuzzes[idx] = fuzz
    material_etas[idx] = eta
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the arena."""
    return int(num_materials[None])


@ti.func
def get_material(material_id: ti.i32) -> Material:
    """Load a material from the arena.

    Args:
        material_id: The material ID.

    Returns:
        The material. Invalid IDs yield a material of kind -1, which
        absorbs everything and emits nothing.
    """
    material = Material(
        kind=-1,
        texture_id=-1,
        albedo=vec3(0.0, 0.0, 0.0),
        fuzz=0.0,
        eta=1.0,
    )
    if 0 <= material_id < num_materials[None]:
        material = Material(
            kind=material_kinds[material_id],
            texture_id=material_texture_ids[material_id],
            albedo=material_albedos[material_id],
            fuzz=material_fuzzes[material_id],
            eta=material_etas[material_id],
        )
    return material


# =============================================================================
# Material Dispatch
# =============================================================================


@ti.func
def scatter(material: Material, ray_in: Ray, hit: HitInfo, sample: ScatterSample):
    """Dispatch to the scattering function for the material's kind.

    Args:
        material: The material at the hit point.
        ray_in: The incoming ray.
        hit: The hit record.
        sample: Random variates for this interaction.

    Returns:
        A tuple of (scattered, attenuation, result) where:
        - scattered: The ray to trace next. Starts at hit.p and keeps the
          incoming time.
        - attenuation: The color factor for light carried by scattered.
        - result: ScatterResult.SCATTERED to continue the path,
          ScatterResult.ABSORBED to stop and use emission only.
    """
    direction = ray_in.direction
    attenuation = vec3(0.0, 0.0, 0.0)
    result = int(ScatterResult.ABSORBED)

    if material.kind == int(MaterialKind.LAMBERTIAN):
        out, atten, res = scatter_lambertian(material.texture_id, ray_in, hit, sample)
        direction = out.direction
        attenuation = atten
        result = res

    elif material.kind == int(MaterialKind.METAL):
        out, atten, res = scatter_metal(
            material.albedo, material.fuzz, ray_in, hit, sample
        )
        direction = out.direction
        attenuation = atten
        result = res

    elif material.kind == int(MaterialKind.DIELECTRIC):
        out, atten, res = scatter_dielectric(material.eta, ray_in, hit, sample)
        direction = out.direction
        attenuation = atten
        result = res

    elif material.kind == int(MaterialKind.DIFFUSE_LIGHT):
        out, atten, res = scatter_diffuse_light(ray_in, hit)
        direction = out.direction
        attenuation = atten
        result = res

    elif material.kind == int(MaterialKind.ISOTROPIC):
        out, atten, res = scatter_isotropic(material.texture_id, ray_in, hit, sample)
        direction = out.direction
        attenuation = atten
        result = res

    return scattered_ray(ray_in, hit, direction), attenuation, result


@ti.func
def emitted(material: Material, u: ti.f32, v: ti.f32, p: vec3) -> vec3:
    """Radiance emitted by a material at a surface point.

    Only diffuse lights emit; every other kind returns black.
    """
    radiance = emitted_black(u, v, p)
    if material.kind == int(MaterialKind.DIFFUSE_LIGHT):
        radiance = emitted_diffuse_light(material.texture_id, u, v, p)
    return radiance


@ti.func
def scatter_by_id(
    material_id: ti.i32,
    ray_in: Ray,
    hit: HitInfo,
    sample: ScatterSample,
):
    """Scatter off the material stored under ``material_id``.

    Returns:
        A tuple of (scattered, attenuation, result), see scatter().
    """
    return scatter(get_material(material_id), ray_in, hit, sample)


@ti.func
def sample_scatter(material_id: ti.i32, ray_in: Ray, hit: HitInfo):
    """Draw a ScatterSample from the thread's RNG and scatter.

    Convenience entry point for integrators.

    Returns:
        A tuple of (scattered, attenuation, result), see scatter().
    """
    sample = draw_scatter_sample()
    return scatter(get_material(material_id), ray_in, hit, sample)


@ti.func
def emitted_by_id(material_id: ti.i32, u: ti.f32, v: ti.f32, p: vec3) -> vec3:
    """Radiance emitted by the material stored under ``material_id``."""
    return emitted(get_material(material_id), u, v, p)


# =============================================================================
# Scene-build API
# =============================================================================


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The material ID.
        kind: The kind of material.
        params: The material parameters as stored (fuzz after clamping).
    """

    material_id: int
    kind: MaterialKind
    params: dict[str, Any]


@dataclass
class TextureInfo:
    """Information about a registered texture.

    Attributes:
        texture_id: The texture index.
        kind: The kind of texture.
        params: The texture parameters as provided during creation.
    """

    texture_id: int
    kind: TextureKind
    params: dict[str, Any]


@dataclass
class LibraryConfig:
    """Configuration for material library serialization.

    Attributes:
        textures: List of texture configurations, in texture ID order.
        materials: List of material configurations, in material ID order.
    """

    textures: list[dict[str, Any]] = field(default_factory=list)
    materials: list[dict[str, Any]] = field(default_factory=list)


def _as_color(values: Any) -> Color:
    return (float(values[0]), float(values[1]), float(values[2]))


class MaterialLibrary:
    """Registry of the textures and materials used by a scene.

    The library owns the texture and material arenas. Color arguments to
    the texture-backed materials (Lambertian, DiffuseLight, Isotropic) are
    turned into a new solid-color texture; pass ``texture_id`` instead to
    share an existing texture between materials.

    Attributes:
        materials: List of MaterialInfo for all registered materials.
        textures: List of TextureInfo for all registered textures.

    Example:
        >>> library = MaterialLibrary()
        >>> checker = library.add_checker_texture(
        ...     0.32, (0.2, 0.3, 0.1), (0.9, 0.9, 0.9)
        ... )
        >>> floor = library.add_lambertian(texture_id=checker)
        >>> wall = library.add_lambertian(texture_id=checker)
        >>> lamp = library.add_diffuse_light(emit=(4.0, 4.0, 4.0))
        >>> fog = library.add_isotropic(albedo=(1.0, 1.0, 1.0))
    """

    def __init__(self) -> None:
        """Initialize an empty library."""
        self.materials: list[MaterialInfo] = []
        self.textures: list[TextureInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        clear_textures()
        clear_materials()
        self.materials.clear()
        self.textures.clear()

    def clear(self) -> None:
        """Remove every texture and material."""
        self._clear_all()
        logger.debug("Material library cleared")

    # =========================================================================
    # Texture Management
    # =========================================================================

    def add_solid_color(self, color: Color) -> int:
        """Add a constant-color texture.

        Args:
            color: The color as (R, G, B).

        Returns:
            The texture ID.

        Raises:
            RuntimeError: If the maximum number of textures is exceeded.
        """
        color = _as_color(color)
        texture_id = add_solid_color(color)
        self.textures.append(
            TextureInfo(texture_id, TextureKind.SOLID_COLOR, {"color": color})
        )
        return texture_id

    def add_checker_texture(self, scale: float, even: Color, odd: Color) -> int:
        """Add a 3D world-space checker texture.

        Args:
            scale: The side length of one checker cell.
            even: Color of the even cells.
            odd: Color of the odd cells.

        Returns:
            The texture ID.

        Raises:
            RuntimeError: If the maximum number of textures is exceeded.
            ValueError: If scale is not positive.
        """
        scale, even, odd = float(scale), _as_color(even), _as_color(odd)
        texture_id = add_checker_texture(scale, even, odd)
        self.textures.append(
            TextureInfo(
                texture_id,
                TextureKind.CHECKER,
                {"scale": scale, "even": even, "odd": odd},
            )
        )
        return texture_id

    def add_uv_checker_texture(self, scale: float, even: Color, odd: Color) -> int:
        """Add a surface-space checker texture.

        Args:
            scale: Number of checker cells per unit of u and v.
            even: Color of the even cells.
            odd: Color of the odd cells.

        Returns:
            The texture ID.

        Raises:
            RuntimeError: If the maximum number of textures is exceeded.
            ValueError: If scale is not positive.
        """
        scale, even, odd = float(scale), _as_color(even), _as_color(odd)
        texture_id = add_uv_checker_texture(scale, even, odd)
        self.textures.append(
            TextureInfo(
                texture_id,
                TextureKind.UV_CHECKER,
                {"scale": scale, "even": even, "odd": odd},
            )
        )
        return texture_id

    def _resolve_texture(
        self,
        color: Color | None,
        texture_id: int | None,
        role: str,
    ) -> int:
        """Turn a color-or-texture argument pair into a texture ID.

        Checks material capacity first so a full arena does not leave an
        unused solid-color texture behind.
        """
        if get_material_count() >= MAX_MATERIALS:
            raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")
        if (color is None) == (texture_id is None):
            raise ValueError(f"Exactly one of {role} color or texture_id must be given.")
        if texture_id is None:
            return self.add_solid_color(color)
        if not is_valid_texture_id(texture_id):
            raise ValueError(f"Invalid texture_id: {texture_id}")
        return texture_id

    # =========================================================================
    # Material Management
    # =========================================================================

    def _register(self, kind: MaterialKind, params: dict[str, Any], **stored: Any) -> int:
        material_id = add_material(kind, **stored)
        self.materials.append(MaterialInfo(material_id, kind, params))
        logger.debug("Registered %s material %d", kind.name.lower(), material_id)
        return material_id

    def add_lambertian(
        self,
        albedo: Color | None = None,
        texture_id: int | None = None,
    ) -> int:
        """Add a Lambertian (diffuse) material.

        Args:
            albedo: The diffuse color as (R, G, B).
            texture_id: An existing texture to use as albedo instead.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If an arena is full.
            ValueError: If both or neither of albedo and texture_id are given,
                or texture_id is not registered.
        """
        tex = self._resolve_texture(albedo, texture_id, "albedo")
        return self._register(
            MaterialKind.LAMBERTIAN, {"texture_id": tex}, texture_id=tex
        )

    def add_metal(self, albedo: Color, fuzz: float = 0.0) -> int:
        """Add a metal (specular reflective) material.

        Args:
            albedo: The reflective color as (R, G, B).
            fuzz: The reflection roughness. 0 is a perfect mirror; values
                of 1 or more are clamped to 1.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If fuzz is negative or NaN.
        """
        albedo = _as_color(albedo)
        fuzz = float(clamp_fuzz(fuzz))
        return self._register(
            MaterialKind.METAL,
            {"albedo": albedo, "fuzz": fuzz},
            albedo=albedo,
            fuzz=fuzz,
        )

    def add_dielectric(self, eta: float = 1.5) -> int:
        """Add a dielectric (glass/water) material.

        Args:
            eta: Index of refraction relative to the surrounding medium.
                Common values: Water=1.33, Glass=1.5, Diamond=2.4. Values
                below 1 model e.g. an air bubble inside water.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If eta is not positive.
        """
        eta = float(eta)
        if not eta > 0.0:
            raise ValueError(
                f"Index of refraction = {eta} is not positive. "
                "eta must be > 0 for physically meaningful materials."
            )
        return self._register(MaterialKind.DIELECTRIC, {"eta": eta}, eta=eta)

    def add_diffuse_light(
        self,
        emit: Color | None = None,
        texture_id: int | None = None,
    ) -> int:
        """Add a diffuse light (emitter) material.

        Args:
            emit: The emitted radiance as (R, G, B). May exceed 1.
            texture_id: An existing texture to use as emission instead.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If an arena is full.
            ValueError: If both or neither of emit and texture_id are given,
                or texture_id is not registered.
        """
        tex = self._resolve_texture(emit, texture_id, "emit")
        return self._register(
            MaterialKind.DIFFUSE_LIGHT, {"texture_id": tex}, texture_id=tex
        )

    def add_isotropic(
        self,
        albedo: Color | None = None,
        texture_id: int | None = None,
    ) -> int:
        """Add an isotropic (volumetric scattering) material.

        Args:
            albedo: The medium color as (R, G, B).
            texture_id: An existing texture to use as albedo instead.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If an arena is full.
            ValueError: If both or neither of albedo and texture_id are given,
                or texture_id is not registered.
        """
        tex = self._resolve_texture(albedo, texture_id, "albedo")
        return self._register(
            MaterialKind.ISOTROPIC, {"texture_id": tex}, texture_id=tex
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return get_material_count()

    def get_texture_count(self) -> int:
        """Get the number of registered textures."""
        return get_texture_count()

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material.

        Args:
            material_id: The material ID.

        Returns:
            The MaterialInfo, or None if the ID is not registered.
        """
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    def get_texture_info(self, texture_id: int) -> TextureInfo | None:
        """Get information about a texture, or None if not registered."""
        if 0 <= texture_id < len(self.textures):
            return self.textures[texture_id]
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> LibraryConfig:
        """Export the library to a configuration object.

        Returns:
            A LibraryConfig containing all textures and materials.
        """
        config = LibraryConfig()
        for tex in self.textures:
            config.textures.append({"type": tex.kind.name.lower(), **tex.params})
        for mat in self.materials:
            config.materials.append({"type": mat.kind.name.lower(), **mat.params})
        return config

    def from_config(self, config: LibraryConfig) -> None:
        """Load a library from a configuration object.

        Replaces the current library. Texture and material IDs are
        assigned in list order, so references between them survive a
        round trip. If any entry is rejected, the previous library is
        restored before the error propagates.

        Args:
            config: The library configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
            RuntimeError: If the configuration exceeds arena capacity.
        """
        previous = self.to_config()
        try:
            self._load_config(config)
        except Exception:
            self._load_config(previous)
            logger.debug("Config rejected, previous library restored")
            raise

        logger.debug(
            "Loaded %d textures and %d materials from config",
            len(self.textures),
            len(self.materials),
        )

    def _load_config(self, config: LibraryConfig) -> None:
        self.clear()

        # Textures first (materials reference them)
        for tex_config in config.textures:
            tex_type = tex_config.get("type", "").lower()
            if tex_type == "solid_color":
                self.add_solid_color(_as_color(tex_config.get("color", [0.0, 0.0, 0.0])))
            elif tex_type in ("checker", "uv_checker"):
                scale = tex_config.get("scale", 1.0)
                even = _as_color(tex_config.get("even", [0.0, 0.0, 0.0]))
                odd = _as_color(tex_config.get("odd", [1.0, 1.0, 1.0]))
                if tex_type == "checker":
                    self.add_checker_texture(scale, even, odd)
                else:
                    self.add_uv_checker_texture(scale, even, odd)
            else:
                raise ValueError(f"Unknown texture type: {tex_type}")

        for mat_config in config.materials:
            mat_type = mat_config.get("type", "").lower()
            if mat_type == "lambertian":
                self.add_lambertian(texture_id=mat_config.get("texture_id", 0))
            elif mat_type == "metal":
                albedo = _as_color(mat_config.get("albedo", [0.8, 0.8, 0.8]))
                self.add_metal(albedo, mat_config.get("fuzz", 0.0))
            elif mat_type == "dielectric":
                self.add_dielectric(mat_config.get("eta", 1.5))
            elif mat_type == "diffuse_light":
                self.add_diffuse_light(texture_id=mat_config.get("texture_id", 0))
            elif mat_type == "isotropic":
                self.add_isotropic(texture_id=mat_config.get("texture_id", 0))
            else:
                raise ValueError(f"Unknown material type: {mat_type}")

    def to_dict(self) -> dict[str, Any]:
        """Export the library to a dictionary (for JSON serialization).

        Returns:
            A dictionary with 'textures' and 'materials' keys.
        """
        config = self.to_config()
        return {
            "textures": [_listify(t) for t in config.textures],
            "materials": [_listify(m) for m in config.materials],
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a library from a dictionary.

        Args:
            data: Dictionary with 'textures' and 'materials' keys.
        """
        config = LibraryConfig(
            textures=data.get("textures", []),
            materials=data.get("materials", []),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS

    @staticmethod
    def get_max_textures() -> int:
        """Get the maximum number of textures supported."""
        return MAX_TEXTURES


def _listify(entry: dict[str, Any]) -> dict[str, Any]:
    # Tuples become lists so the output matches what json.loads returns
    return {k: list(v) if isinstance(v, tuple) else v for k, v in entry.items()}
