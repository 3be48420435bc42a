"""
Text normalization for board templates.

Folds typographic characters onto the board's limited glyph set and strips
control characters before templates are tokenized.
"""

import re
from typing import Optional


class TextNormalizer:
    """Normalizes template text before it is scanned for glyphs."""

    # Typographic characters that have a plain board equivalent
    SPECIAL_CHARS = {
        '\r\n': '\n',       # Windows line ending → newline
        '\r': '\n',         # Carriage return → newline
        '\t': ' ',          # Tab → space
        '\u00a0': ' ',      # Non-breaking space → regular space
        '\u2009': ' ',      # Thin space → regular space
        '\u2007': ' ',      # Figure space → regular space
        '\u2008': ' ',      # Punctuation space → regular space
        '\u200b': '',       # Zero-width space → remove
        '\u200c': '',       # Zero-width non-joiner → remove
        '\u200d': '',       # Zero-width joiner → remove
        '\ufeff': '',       # Byte order mark → remove
        '\u00ad': '',       # Soft hyphen → remove
        '\u2010': '-',      # Hyphen → hyphen-minus
        '\u2011': '-',      # Non-breaking hyphen → hyphen-minus
        '\u2013': '-',      # En dash → hyphen-minus
        '\u2014': '-',      # Em dash → hyphen-minus
        '\u2018': "'",      # Left single quotation mark
        '\u2019': "'",      # Right single quotation mark
        '\u201c': '"',      # Left double quotation mark
        '\u201d': '"',      # Right double quotation mark
        '\u2026': '...',    # Horizontal ellipsis
        '\u00ba': '\u00b0',      # Masculine ordinal → degree sign
    }

    # Control characters other than newline
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x09\x0b-\x1f\x7f-\x9f]')

    def normalize_text(self, text: Optional[str]) -> Optional[str]:
        """Normalize template text."""
        if not text:
            return text

        normalized = self._replace_special_chars(text)
        normalized = self._remove_control_chars(normalized)

        return normalized

    def _replace_special_chars(self, text: str) -> str:
        """Replace special Unicode characters with board-friendly equivalents."""
        for original, replacement in self.SPECIAL_CHARS.items():
            text = text.replace(original, replacement)
        return text

    def _remove_control_chars(self, text: str) -> str:
        """Remove control characters that have no glyph."""
        return self.CONTROL_CHARS_PATTERN.sub('', text)
