"""
Writing worklists out as VPK archives.
"""

from vpkpack.archive.assembler import ArchiveAssembler

__all__ = ["ArchiveAssembler"]
