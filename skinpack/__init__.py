"""Minecraft skin resource packs for Toi's Item Animator."""

__version__ = '0.1.0'
