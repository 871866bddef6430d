"""Base controller contract."""

from kubedash.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
