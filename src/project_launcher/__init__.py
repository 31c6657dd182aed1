"""Project Launcher - terminal dashboard for starting development projects."""

__version__ = "0.1.0"
