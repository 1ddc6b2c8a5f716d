"""JavaSlice - split Java source files into method-level segments."""

__version__ = "0.1.0"
