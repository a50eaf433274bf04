# vpkpack/pipelines/pack_pipeline.py

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from vpkpack.archive.assembler import ArchiveAssembler
from vpkpack.core.config import settings
from vpkpack.schemas.worklist import AssembleReport
from vpkpack.worklist.builder import WorklistBuilder

logger = logging.getLogger(__name__)


def pack_vpk(
    sfo_path: Union[str, Path],
    eboot_path: Union[str, Path],
    add_tokens: Optional[Iterable[str]] = None,
    output_path: Optional[Union[str, Path]] = None,
    assembler: Optional[ArchiveAssembler] = None,
) -> AssembleReport:
    """
    Build the worklist and write it out as a VPK.

    Errors while building the worklist propagate before the output file is
    touched. Per-entry write failures are reported in the returned report.
    """
    output_path = Path(output_path or settings.default_output_file)

    worklist = WorklistBuilder().build(sfo_path, eboot_path, add_tokens)
    logger.info(f"Packing {len(worklist)} items into {output_path}")

    assembler = assembler or ArchiveAssembler()
    return assembler.assemble(worklist, output_path)
