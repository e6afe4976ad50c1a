class RenderError(Exception):
    pass


class InvalidGeometry(RenderError, ValueError):
    """Degenerate geometry: zero-length directions, bad radii or plane frames."""


class InvalidParameter(RenderError, ValueError):
    """A caller passed a value outside the accepted range."""
