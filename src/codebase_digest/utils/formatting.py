"""Human-readable size formatting."""

SIZE_UNITS = ["bytes", "KB", "MB", "GB", "TB"]


def format_size(size_bytes: float) -> str:
    """
    Format a byte count with binary units and three significant digits.

    Args:
        size_bytes: Byte count, may be negative.

    Returns:
        e.g. "0 bytes", "1 KB", "1.5 KB", "-2 KB".
    """
    if size_bytes == 0:
        return "0 bytes"

    size = abs(size_bytes)
    index = 0
    while size >= 1024 and index < len(SIZE_UNITS) - 1:
        size /= 1024
        index += 1

    rounded = float(f"{size:.3g}")
    if size_bytes < 0:
        rounded = -rounded
    return f"{rounded:g} {SIZE_UNITS[index]}"
