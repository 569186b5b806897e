"""
Encoding detection and text decoding for file contents.

Files are read as bytes and decoded with a BOM check followed by a list of
fallback encodings, so a stray latin-1 file still makes it into the context.
"""

import logging
from typing import List, Optional, Tuple

# Common encodings to try, ordered by likelihood
DEFAULT_ENCODINGS = [
    'utf-8',
    'utf-8-sig',  # UTF-8 with BOM
    'latin-1',
    'cp1252',     # Windows-1252
]

BOM_CHECKS = [
    # UTF-32 first: its LE BOM starts with the UTF-16 LE BOM
    (b'\xff\xfe\x00\x00', 'utf-32'),
    (b'\x00\x00\xfe\xff', 'utf-32'),
    (b'\xef\xbb\xbf', 'utf-8-sig'),
    (b'\xff\xfe', 'utf-16'),
    (b'\xfe\xff', 'utf-16'),
]

logger = logging.getLogger(__name__)


class EncodingDetector:
    """Handles encoding detection and text decoding."""

    def __init__(self, fallback_encodings: Optional[List[str]] = None):
        """
        Initialize the encoding detector.

        Args:
            fallback_encodings: List of encodings to try. If None, uses defaults.
        """
        self.encodings = fallback_encodings or DEFAULT_ENCODINGS

    def read_text(self, file_path: str) -> str:
        """
        Read a whole file and decode it.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If no encoding can decode the content.
        """
        with open(file_path, 'rb') as f:
            raw_content = f.read()

        text, encoding, error = self.decode_bytes(raw_content, file_path)
        if text is None:
            raise UnicodeDecodeError(self.encodings[0], raw_content, 0, len(raw_content), error)
        return text

    def decode_bytes(self, content: bytes, file_path: Optional[str] = None) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """
        Attempt to decode bytes to string using multiple encodings.

        Args:
            content: Raw bytes to decode.
            file_path: Optional file path for better log messages.

        Returns:
            Tuple of (decoded_text, encoding_used, error_message).
            If successful: (text, encoding, None)
            If failed: (None, None, error_message)
        """
        bom_encoding = self.detect_bom(content)
        if bom_encoding:
            try:
                decoded = content.decode(bom_encoding)
                logger.debug(f"Decoded {file_path} using BOM-detected {bom_encoding}")
                return decoded, bom_encoding, None
            except UnicodeDecodeError as e:
                logger.debug(f"BOM decode failed for {file_path}: {e}")

        for encoding in self.encodings:
            try:
                decoded = content.decode(encoding)
                logger.debug(f"Decoded {file_path} using {encoding}")
                return decoded, encoding, None
            except UnicodeDecodeError:
                continue

        error_msg = f"Unable to decode file with available encodings ({', '.join(self.encodings)})"
        return None, None, error_msg

    @staticmethod
    def detect_bom(content: bytes) -> Optional[str]:
        """Return the encoding named by a leading Byte Order Mark, if any."""
        for bom, encoding in BOM_CHECKS:
            if content.startswith(bom):
                return encoding
        return None
