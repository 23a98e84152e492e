"""Pixel images, XPM textures, player movement and a pygame window for a grid raycaster."""

__version__ = "0.1.0"