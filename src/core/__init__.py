"""
Core modules for Picverter
"""

from .file_manager import build_output_path, scratch_file, write_output

__all__ = [
    "build_output_path",
    "scratch_file",
    "write_output",
]
