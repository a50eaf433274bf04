"""Archive assembler component.

This module writes a worklist to disk as a VPK: a zip container in which every
entry is stored uncompressed and carries Unix permissions 0755.
"""

import os
import stat
import time
import shutil
import logging
import zipfile
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from vpkpack.core.config import settings
from vpkpack.core.errors import AssemblerStateError, OutputCreateError
from vpkpack.core.settings import ENTRY_PERMISSIONS, ZIP_EPOCH
from vpkpack.schemas.worklist import (
    AssembleReport, AssemblerState, EntryFailure, Worklist, WorklistEntry
)

logger = logging.getLogger(__name__)

# Latest timestamp the DOS date fields can hold
ZIP_MAX_DATE_TIME = (2107, 12, 31, 23, 59, 58)

# ZipInfo.create_system value for Unix
UNIX_SYSTEM = 3


class ArchiveAssembler:
    """Materializes a worklist as a single VPK file.

    An assembler runs once: IDLE -> FILE_CREATED -> WRITING -> FINALIZED -> CLOSED.
    """

    def __init__(self, chunk_size: Optional[int] = None,
                 source_date_epoch: Optional[int] = None):
        """Initialize the assembler.

        Args:
            chunk_size: Bytes copied per read from a source file
            source_date_epoch: Fixed timestamp for every entry; when omitted the
                configured SOURCE_DATE_EPOCH is used, or the current time
        """
        self.chunk_size = chunk_size or settings.copy_chunk_size
        if source_date_epoch is None:
            source_date_epoch = settings.source_date_epoch
        self.source_date_epoch = source_date_epoch
        self.state = AssemblerState.IDLE

    def assemble(self, worklist: Worklist, output_path: Union[str, Path]) -> AssembleReport:
        """Write every worklist entry, in order, into a new archive.

        Args:
            worklist: Entries to pack
            output_path: Archive to create; an existing file is overwritten

        Returns:
            AssembleReport listing written entries and per-entry failures

        Raises:
            OutputCreateError: If the output file cannot be created
            AssemblerStateError: If this assembler already ran
        """
        if self.state is not AssemblerState.IDLE:
            raise AssemblerStateError(f"Assembler already used (state: {self.state.value})")

        output_path = Path(output_path)
        report = AssembleReport(output_path=output_path)
        date_time = self._entry_date_time()

        try:
            vpk_file = open(output_path, "wb")
        except OSError as e:
            self.state = AssemblerState.CLOSED
            logger.error(f"Unable to make the {output_path} file: {e}")
            raise OutputCreateError(str(output_path), e) from e

        try:
            with vpk_file:
                self.state = AssemblerState.FILE_CREATED
                with zipfile.ZipFile(vpk_file, "w", compression=zipfile.ZIP_STORED) as vpk_writer:
                    self.state = AssemblerState.WRITING
                    for entry in worklist:
                        self._write_entry(vpk_writer, entry, output_path, date_time, report)
                # Central directory is flushed when the writer closes
                self.state = AssemblerState.FINALIZED
        finally:
            self.state = AssemblerState.CLOSED

        logger.info(
            f"Wrote {report.entry_count} entries to {output_path}"
            + (f" ({len(report.failures)} failed)" if report.failures else "")
        )
        return report

    def _write_entry(self, writer: zipfile.ZipFile, entry: WorklistEntry,
                     output_path: Path, date_time: Tuple[int, ...],
                     report: AssembleReport) -> None:
        if entry.source.is_dir():
            for source, destination in self._expand_directory(
                    entry.source, entry.destination, output_path, report):
                self._write_file(writer, source, destination, date_time, report)
        else:
            self._write_file(writer, entry.source, entry.destination, date_time, report)

    def _expand_directory(self, root: Path, destination: str, output_path: Path,
                          report: AssembleReport) -> Iterator[Tuple[Path, str]]:
        """Yield (file, archive name) for every file below root, in sorted order.

        Folders that cannot be listed are recorded as failures in the report.
        """
        prefix = destination if destination.endswith("/") else destination + "/"
        output_resolved = output_path.resolve()

        def on_walk_error(error: OSError) -> None:
            failed = Path(error.filename) if error.filename else root
            rel = failed.relative_to(root).as_posix() if failed != root else ""
            failed_destination = prefix + rel
            logger.error(f"Error: cannot read folder {failed} for '{failed_destination}': {error}")
            report.failures.append(
                EntryFailure(source=failed, destination=failed_destination, reason=str(error))
            )

        for cur_root, cur_dirs, cur_files in os.walk(root, onerror=on_walk_error):
            cur_dirs.sort()
            for name in sorted(cur_files):
                path = Path(cur_root) / name
                if path.resolve() == output_resolved:
                    logger.debug(f"Skipping the archive being written: {path}")
                    continue
                rel = path.relative_to(root).as_posix()
                yield path, prefix + rel

    def _write_file(self, writer: zipfile.ZipFile, source: Path, destination: str,
                    date_time: Tuple[int, ...], report: AssembleReport) -> None:
        """Stream one source file into a new stored entry; failures are recorded, not raised."""
        zinfo = self._make_info(destination, date_time)
        try:
            with open(source, "rb") as src:
                # Size hint lets zipfile pick zip64 headers up front
                zinfo.file_size = os.fstat(src.fileno()).st_size
                with writer.open(zinfo, "w") as dst:
                    shutil.copyfileobj(src, dst, self.chunk_size)
        except (OSError, ValueError, RuntimeError, zipfile.LargeZipFile) as e:
            reason = str(e)
            self._discard_partial(writer, zinfo)
            logger.error(f"Error: failed to write entry '{destination}': {reason}")
            report.failures.append(
                EntryFailure(source=source, destination=destination, reason=reason)
            )
            return

        report.entries.append(destination)
        logger.debug(f"Added {source} as {destination} ({zinfo.file_size} bytes)")

    @staticmethod
    def _discard_partial(writer: zipfile.ZipFile, zinfo: zipfile.ZipInfo) -> None:
        """Drop an entry whose copy failed after zipfile had already closed it."""
        if not writer.filelist or writer.filelist[-1] is not zinfo:
            return

        writer.filelist.pop()
        earlier = [i for i in writer.filelist if i.filename == zinfo.filename]
        if earlier:
            writer.NameToInfo[zinfo.filename] = earlier[-1]
        else:
            writer.NameToInfo.pop(zinfo.filename, None)

        # Next entry, or the central directory, starts where the partial one did
        writer.start_dir = zinfo.header_offset
        try:
            writer.fp.seek(zinfo.header_offset)
            writer.fp.truncate()
        except OSError as e:
            logger.warning(f"Could not cut partial entry '{zinfo.filename}' from archive: {e}")

    @staticmethod
    def _make_info(destination: str, date_time: Tuple[int, ...]) -> zipfile.ZipInfo:
        zinfo = zipfile.ZipInfo(destination, date_time=date_time)
        zinfo.compress_type = zipfile.ZIP_STORED
        zinfo.create_system = UNIX_SYSTEM
        zinfo.external_attr = (stat.S_IFREG | ENTRY_PERMISSIONS) << 16
        return zinfo

    def _entry_date_time(self) -> Tuple[int, ...]:
        if self.source_date_epoch is None:
            return max(tuple(time.localtime()[:6]), ZIP_EPOCH)
        if self.source_date_epoch <= 0:
            return ZIP_EPOCH
        try:
            t = time.gmtime(self.source_date_epoch)
        except (OverflowError, OSError, ValueError):
            return ZIP_MAX_DATE_TIME
        stamp = (t.tm_year, t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec)
        # Zip timestamps cannot represent dates outside 1980-2107
        return min(max(stamp, ZIP_EPOCH), ZIP_MAX_DATE_TIME)
