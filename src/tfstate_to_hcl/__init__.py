from tfstate_to_hcl.version import __version__

__all__ = ["__version__"]
