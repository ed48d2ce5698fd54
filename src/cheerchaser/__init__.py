"""CheerChaser: plan spectator cheer spots along a race course."""

__version__ = "0.1.0"
