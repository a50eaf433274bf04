"""
Builds the ordered worklist of (source, destination) pairs to pack.

The two files the installer requires always come first, metadata before
executable, followed by the user's `src=dst` additions in the order given.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from vpkpack.core.errors import InvalidEntryError, MissingInputError
from vpkpack.core.settings import DEFAULT_EBOOT_VPK_PATH, DEFAULT_SFO_VPK_PATH
from vpkpack.schemas.worklist import Worklist, WorklistEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class WorklistBuilder:
    """
    Resolves raw command-line strings into a validated worklist.

    Every source is checked for existence when its entry is made. The first
    missing source aborts the whole build; no partial worklist is returned.
    """

    def build(
        self,
        metadata_file_path: PathLike,
        executable_file_path: PathLike,
        extra_tokens: Optional[Iterable[str]] = None,
    ) -> Worklist:
        """
        Build the worklist for one package.

        Args:
            metadata_file_path: The param.sfo file
            executable_file_path: The eboot.bin file
            extra_tokens: `src=dst` strings, in command-line order

        Returns:
            List of WorklistEntry, mandatory entries first

        Raises:
            MissingInputError: If any source does not exist
            InvalidEntryError: If a token or destination is unusable
        """
        worklist: Worklist = [
            self.make_entry(metadata_file_path, DEFAULT_SFO_VPK_PATH),
            self.make_entry(executable_file_path, DEFAULT_EBOOT_VPK_PATH),
        ]

        for token in extra_tokens or []:
            worklist.append(self.parse_add(token))

        logger.debug(f"Worklist ready with {len(worklist)} entries")
        return worklist

    def parse_add(self, token: str) -> WorklistEntry:
        """
        Turn a `src=dst` token into an entry. Only the first `=` splits;
        anything after it, further `=` included, is the destination.
        """
        raw_source, sep, raw_destination = token.partition("=")
        if not sep:
            raise InvalidEntryError(f"Need <src=dst>, got '{token}'")
        return self.make_entry(raw_source, raw_destination)

    def make_entry(self, source: PathLike, destination: str) -> WorklistEntry:
        # An empty string would otherwise resolve to the current directory
        if not str(source) or not Path(source).exists():
            logger.error(f"Given file or folder doesn't exist: {source}")
            raise MissingInputError(str(source))

        try:
            entry = WorklistEntry(source=Path(source), destination=destination)
        except ValidationError as e:
            raise InvalidEntryError(
                f"Invalid archive path {destination!r} for {source}: "
                f"{e.errors()[0]['msg']}"
            ) from e

        logger.debug(f"Queued {entry.source} -> {entry.destination}")
        return entry
