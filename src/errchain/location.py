"""Caller-location capture for error nodes."""

import inspect
import os


def detect_path(skip: int = 0, full_path: bool = True) -> str:
    """Describe the source location of a calling frame.

    Args:
        skip: Number of frames to skip above the function that called
              ``detect_path``. ``0`` reports that function itself, ``1`` its
              caller, and so on.
        full_path: Render the full file path instead of the base name.

    Returns:
        ``"Called from <file>, line #<line>"``, or an empty string when the
        stack is not deep enough.

    Examples:
        >>> def where():
        ...     return detect_path(1)
        >>> where().startswith("Called from ")
        True
    """
    frame = inspect.currentframe()
    try:
        # Step past detect_path itself, then the requested number of frames
        for _ in range(skip + 1):
            if frame is None:
                return ""
            frame = frame.f_back
        if frame is None:
            return ""

        filename = frame.f_code.co_filename
        if not full_path:
            filename = os.path.basename(filename)
        return f"Called from {filename}, line #{frame.f_lineno}"
    finally:
        del frame
