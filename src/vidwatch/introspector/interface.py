"""CodecInspector interface for codec extraction."""

from pathlib import Path
from typing import Protocol

from vidwatch.core.codecs import CodecSet


class CodecInspector(Protocol):
    """Protocol for codec inspection implementations.

    Implementations probe a media file and report the codec of every
    stream, in the order the probing tool lists them.
    """

    def get_codecs(self, path: Path) -> CodecSet:
        """Determine the codecs used by a media file.

        Args:
            path: Path to the media file.

        Returns:
            CodecSet in report order.

        Raises:
            ProbeError: If the file cannot be probed or the report is invalid.
        """
        ...
