from .svg import to_svg_markup, write_svg

__all__ = ["to_svg_markup", "write_svg"]
