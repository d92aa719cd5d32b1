"""wbtl - provisioning helpers for wbtl.app tools."""

__version__ = "0.1.0"
