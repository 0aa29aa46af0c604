"""HTTP API routers."""

from access_hub.api import auth, software

__all__ = ["auth", "software"]
