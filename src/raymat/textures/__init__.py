"""Textures module.

Textures map a surface point to a color. They are stored in a shared arena
and referenced by index from materials.
"""

from .texture import (
    MAX_TEXTURES,
    TextureKind,
    add_checker_texture,
    add_solid_color,
    add_uv_checker_texture,
    clear_textures,
    get_texture_count,
    is_valid_texture_id,
    texture_value,
)

__all__ = [
    "MAX_TEXTURES",
    "TextureKind",
    "add_solid_color",
    "add_checker_texture",
    "add_uv_checker_texture",
    "clear_textures",
    "get_texture_count",
    "is_valid_texture_id",
    "texture_value",
]
