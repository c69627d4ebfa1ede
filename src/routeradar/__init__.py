"""RouteRadar - navigate file-system routed projects."""

__version__ = "0.1.0"
