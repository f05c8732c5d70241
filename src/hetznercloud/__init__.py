"""Typed client for the Hetzner Cloud REST API."""

from hetznercloud.adapters.cloud_api import HetznerCloudAPI
from hetznercloud.core.config import AppSettings

__version__ = "0.1.0"

__all__ = ["AppSettings", "HetznerCloudAPI", "__version__"]
