"""
CLI display modules.
"""

from cli.display.tables import (
    display_header_table,
    display_record_results,
    display_patch_detail,
    display_bank_listing,
)
from cli.display.hex_view import display_hex_dump, display_hex_comparison

__all__ = [
    "display_header_table",
    "display_record_results",
    "display_patch_detail",
    "display_bank_listing",
    "display_hex_dump",
    "display_hex_comparison",
]
