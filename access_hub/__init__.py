"""Access Hub: software access requests and approvals."""

__version__ = "0.1.0"
