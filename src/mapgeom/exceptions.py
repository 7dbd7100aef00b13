"""Exception hierarchy for mapgeom."""


class MapGeomError(Exception):
    """Base exception for all mapgeom errors."""

    pass


class GeometryError(MapGeomError):
    """Errors related to geometry structure or mutation."""

    pass


class NestedGeometryError(GeometryError):
    """A MultiGeometry was added as a part of another MultiGeometry."""

    def __init__(self) -> None:
        super().__init__("A MultiGeometry cannot contain another MultiGeometry")


class ReadOnlyGeometryError(GeometryError):
    """Mutation attempted through a read-only geometry view."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot call '{operation}' on a read-only geometry view")


class TraversalError(MapGeomError):
    """Iterator used past its end."""

    def __init__(self, message: str = "Traversal has no more elements") -> None:
        super().__init__(message)


class EngineError(MapGeomError):
    """Errors raised by the boolean/offset geometry engine."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Engine failed during '{operation}': {reason}")


class EngineUnavailableError(EngineError):
    """No geometry engine is available in this configuration."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "no geometry engine available")


class GeometryIOError(MapGeomError):
    """Errors related to reading or writing geometry text formats."""

    pass


class GeometryReadError(GeometryIOError):
    """Error parsing geometry input."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read geometry from '{source}': {reason}")


class GeometryWriteError(GeometryIOError):
    """Error writing geometry output."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write geometry '{path}': {reason}")
