# =============================================================================
# Errors
# =============================================================================

__all__ = ["MappingFormatError"]


class MappingFormatError(ValueError):
    """Raised when a mapping document cannot be decoded or compiled."""
