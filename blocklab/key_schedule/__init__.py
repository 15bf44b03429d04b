"""
Key Schedule Package

This package implements the key expansion algorithms that transform a
master key into the round keys of each block cipher, together with the
word-rotation helpers shared by the ARX designs.
"""

from .arx_key_schedule import rotate_left, rotate_right

__all__ = ['rotate_left', 'rotate_right']
