"""
Typer callbacks that check raw arguments before they reach the packer.
"""

from pathlib import Path
from typing import List, Optional

import typer

ADD_USAGE = (
    "Need <src=dst>. With src the source folder or path and dst "
    "where it should be in the vpk archive."
)


def check_file(value: Optional[Path]) -> Optional[Path]:
    """The path must exist and be a regular file."""
    if value is None:
        return value
    if not value.exists():
        raise typer.BadParameter("File doesn't exist!")
    if not value.is_file():
        raise typer.BadParameter("Given path is not a valid file!")
    return value


def check_add(values: Optional[List[str]]) -> Optional[List[str]]:
    for value in values or []:
        if "=" not in value or len(value) < 3:
            raise typer.BadParameter(f"{ADD_USAGE} Got: {value}")
    return values
