"""Texture arena for surface and volume colors.

Materials do not own texture data. Each texture is registered once at
scene-build time and referenced by its stable integer index, so any number
of materials may share one texture (a checker floor and a checker wall, for
instance).

Supported texture kinds:
    SOLID_COLOR: Constant color, ignores (u, v, p).
    CHECKER: 3D world-space checker pattern evaluated on the hit point.
    UV_CHECKER: Surface-space checker pattern evaluated on (u, v).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymat.textures.texture import add_solid_color, texture_value
    >>> red = add_solid_color((0.8, 0.1, 0.1))
    >>> # Inside a Taichi kernel:
    >>> # color = texture_value(red, hit.u, hit.v, hit.p)
"""

import logging
from enum import IntEnum

import taichi as ti
import taichi.math as tm

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3


class TextureKind(IntEnum):
    """Enumeration of supported texture kinds."""

    SOLID_COLOR = 0
    CHECKER = 1
    UV_CHECKER = 2


# =============================================================================
# Texture Field Storage
# =============================================================================

# Maximum number of textures in the scene
MAX_TEXTURES = 512

texture_kinds = ti.field(dtype=ti.i32, shape=MAX_TEXTURES)
# Solid color, or the "even" color of a checker
texture_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TEXTURES)
# The "odd" color of a checker (unused for solid colors)
texture_alt_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TEXTURES)
texture_scales = ti.field(dtype=ti.f32, shape=MAX_TEXTURES)
num_textures = ti.field(dtype=ti.i32, shape=())


def clear_textures() -> None:
    """Clear all textures.

    Resets the texture count to zero. Existing data in the fields will be
    overwritten when new textures are added.
    """
    num_textures[None] = 0


def _store_texture(
    kind: TextureKind,
    color: tuple[float, float, float],
    alt_color: tuple[float, float, float],
    scale: float,
) -> int:
    idx = num_textures[None]
    if idx >= MAX_TEXTURES:
        raise RuntimeError(f"Maximum number of textures ({MAX_TEXTURES}) exceeded")

    texture_kinds[idx] = int(kind)
    texture_colors[idx] = vec3(color[0], color[1], color[2])
    texture_alt_colors[idx] = vec3(alt_color[0], alt_color[1], alt_color[2])
    texture_scales[idx] = scale
    num_textures[None] = idx + 1
    logger.debug("Registered %s texture %d", kind.name.lower(), idx)
    return idx


def _check_scale(scale: float) -> None:
    if scale <= 0.0:
        raise ValueError(f"Checker scale = {scale} must be positive.")


def add_solid_color(color: tuple[float, float, float]) -> int:
    """Add a constant-color texture.

    Args:
        color: The color as (R, G, B). Values above 1 are allowed for
            emitters.

    Returns:
        The index of the added texture.

    Raises:
        RuntimeError: If the maximum number of textures is exceeded.
    """
    return _store_texture(TextureKind.SOLID_COLOR, color, (0.0, 0.0, 0.0), 1.0)


def add_checker_texture(
    scale: float,
    even: tuple[float, float, float],
    odd: tuple[float, float, float],
) -> int:
    """Add a 3D world-space checker texture.

    The pattern alternates between ``even`` and ``odd`` on a lattice of
    cubes with side ``scale``.

    Args:
        scale: The side length of one checker cell. Must be positive.
        even: Color of cells whose integer coordinates sum to an even number.
        odd: Color of the remaining cells.

    Returns:
        The index of the added texture.

    Raises:
        RuntimeError: If the maximum number of textures is exceeded.
        ValueError: If scale is not positive.
    """
    _check_scale(scale)
    return _store_texture(TextureKind.CHECKER, even, odd, scale)


def add_uv_checker_texture(
    scale: float,
    even: tuple[float, float, float],
    odd: tuple[float, float, float],
) -> int:
    """Add a surface-space checker texture.

    Args:
        scale: Number of checker cells per unit of u and v. Must be positive.
        even: Color of cells whose integer coordinates sum to an even number.
        odd: Color of the remaining cells.

    Returns:
        The index of the added texture.

    Raises:
        RuntimeError: If the maximum number of textures is exceeded.
        ValueError: If scale is not positive.
    """
    _check_scale(scale)
    return _store_texture(TextureKind.UV_CHECKER, even, odd, scale)


def get_texture_count() -> int:
    """Get the number of textures in the arena."""
    return int(num_textures[None])


def is_valid_texture_id(texture_id: int) -> bool:
    """Check whether a texture index refers to a registered texture."""
    return 0 <= texture_id < get_texture_count()


@ti.func
def texture_value(texture_id: ti.i32, u: ti.f32, v: ti.f32, p: vec3) -> vec3:
    """Sample a texture at a surface point.

    Args:
        texture_id: The index of the texture in the arena.
        u: First surface coordinate.
        v: Second surface coordinate.
        p: The point in world space.

    Returns:
        The texture color. Unregistered indices sample as black.
    """
    color = vec3(0.0, 0.0, 0.0)
    if 0 <= texture_id < num_textures[None]:
        kind = texture_kinds[texture_id]
        even = texture_colors[texture_id]
        odd = texture_alt_colors[texture_id]
        scale = texture_scales[texture_id]

        if kind == int(TextureKind.SOLID_COLOR):
            color = even

        elif kind == int(TextureKind.CHECKER):
            inv_scale = 1.0 / scale
            x_integer = ti.cast(ti.floor(inv_scale * p.x), ti.i32)
            y_integer = ti.cast(ti.floor(inv_scale * p.y), ti.i32)
            z_integer = ti.cast(ti.floor(inv_scale * p.z), ti.i32)
            is_even = (x_integer + y_integer + z_integer) % 2 == 0
            color = ti.select(is_even, even, odd)

        elif kind == int(TextureKind.UV_CHECKER):
            u_integer = ti.cast(ti.floor(scale * u), ti.i32)
            v_integer = ti.cast(ti.floor(scale * v), ti.i32)
            is_even = (u_integer + v_integer) % 2 == 0
            color = ti.select(is_even, even, odd)

    return color
