"""Result persistence layer.

This module writes resolved target tables back to disk.
Writes are atomic so a failed run never leaves partial output.
"""
