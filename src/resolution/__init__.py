"""SLCSP resolution layer.

This module maps target ZIP codes to rate areas and benchmark rates.
It also orchestrates the end-to-end load, resolve, and write run.
"""
