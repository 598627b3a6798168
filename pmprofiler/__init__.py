"""pmprofiler — detect JavaScript package manager versions and run yarn safely."""

__version__ = "0.1.0"
