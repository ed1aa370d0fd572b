"""
Pointer-to-raster coordinate mapping.

The drawing surface is usually shown scaled, so a pointer position in
display pixels has to be rescaled per axis to land on the right raster
pixel.

Functions:
    scale_factors: Horizontal and vertical display-to-raster scale
    map_to_raster: Convert a display-space point to raster space
    map_to_display: Convert a raster-space point back to display space
"""

from typing import Tuple

from SS_Libs.MaskEditingLib.mask_models import Point, Size, SurfaceBox


def scale_factors(surface_box: SurfaceBox, native_size: Size) -> Tuple[float, float]:
    """
    Compute display-to-raster scale factors.

    Args:
        surface_box: On-screen box of the drawing surface
        native_size: (width, height) of the raster in source pixels

    Returns:
        (scale_x, scale_y)

    Raises:
        ValueError: If the surface has no display size
    """
    if surface_box.width <= 0 or surface_box.height <= 0:
        raise ValueError(
            f"Surface must have a positive display size, got "
            f"{surface_box.width}x{surface_box.height}"
        )

    native_width, native_height = native_size
    return native_width / surface_box.width, native_height / surface_box.height


def map_to_raster(display_point: Point, surface_box: SurfaceBox, native_size: Size) -> Point:
    """
    Map a display-space point onto the raster.

    Args:
        display_point: Pointer position in display pixels
        surface_box: On-screen box of the drawing surface
        native_size: (width, height) of the raster

    Returns:
        The corresponding raster-space Point
    """
    scale_x, scale_y = scale_factors(surface_box, native_size)
    return Point(
        (display_point.x - surface_box.left) * scale_x,
        (display_point.y - surface_box.top) * scale_y,
    )


def map_to_display(raster_point: Point, surface_box: SurfaceBox, native_size: Size) -> Point:
    """Inverse of map_to_raster."""
    scale_x, scale_y = scale_factors(surface_box, native_size)
    return Point(
        raster_point.x / scale_x + surface_box.left,
        raster_point.y / scale_y + surface_box.top,
    )
