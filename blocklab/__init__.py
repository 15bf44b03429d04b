"""
BlockLab - Round-Reduced Block Cipher Laboratory

This library implements a small set of well-known block ciphers behind a
common interface whose round count is chosen at construction time, and a
statistical harness that measures how their diffusion grows with the number
of rounds.

Key Features:
- Uniform block cipher contract with configurable round count
- AES-128, PRESENT-80, HIGHT and Threefish-256
- Known-answer tests against published vectors
- Avalanche test: chained single-bit differences, Hamming distance
  histogram, chi-square test against binomial(N, 0.5)
- S-box difference and linear approximation tables

"""

__version__ = '0.1.0'
__author__ = 'BlockLab Team'
