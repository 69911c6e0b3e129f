"""Utility functions and helpers"""

from career_craft.utils.export import (
    export_to_pdf,
    export_to_txt,
    generate_filename,
    render_pdf,
)

__all__ = [
    "export_to_pdf",
    "export_to_txt",
    "generate_filename",
    "render_pdf",
]
