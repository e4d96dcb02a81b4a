"""A small simulated filesystem stored in a single disk image file, with an interactive menu shell."""

__version__ = "0.1.0"
__all__ = ["__version__"]