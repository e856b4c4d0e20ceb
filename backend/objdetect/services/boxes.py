from ..models.schemas import Box, DisplayBox


def clamp_box(box: Box, image_width: float, image_height: float) -> Box:
    """Clip a box to the image bounds"""
    xmin = min(max(box.xmin, 0.0), image_width)
    ymin = min(max(box.ymin, 0.0), image_height)
    xmax = min(max(box.xmax, xmin), image_width)
    ymax = min(max(box.ymax, ymin), image_height)
    return Box(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax)


def scale_bounding_box(box: Box, image_width: float, image_height: float,
                       clamp: bool = False) -> DisplayBox:
    """
    Convert an absolute pixel box into percentages of the image size.

    Boxes outside the image are passed through unchanged unless clamp is set.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions not resolved: {image_width}x{image_height}")

    if clamp:
        box = clamp_box(box, image_width, image_height)

    return DisplayBox(
        left=box.xmin / image_width * 100,
        top=box.ymin / image_height * 100,
        width=(box.xmax - box.xmin) / image_width * 100,
        height=(box.ymax - box.ymin) / image_height * 100,
    )
