class LayoutError(Exception):
    pass


class GraphInputError(LayoutError, ValueError):
    """The input items do not describe a valid dependency DAG."""


class CyclicGraphError(GraphInputError):
    pass


class DanglingReferenceError(GraphInputError):
    pass


class LayoutInvariantError(LayoutError, RuntimeError):
    """An internal invariant of the layering pipeline was violated."""
