"""
Text normalization utilities for FB2 parsing.

Removes invisible characters and, unless whitespace is preserved,
collapses runs of whitespace in extracted text content.
"""

import re
from typing import Optional
from xml.etree.ElementTree import Element


class TextNormalizer:
    """Normalizes text content extracted from FictionBook markup."""
    
    # Invisible characters that never belong in displayed text
    SPECIAL_CHARS = {
        '\u200b': '',       # Zero-width space → remove
        '\u200c': '',       # Zero-width non-joiner → remove
        '\u200d': '',       # Zero-width joiner → remove
        '\ufeff': '',       # Byte order mark → remove
        '\u00ad': '',       # Soft hyphen → remove
    }
    
    # Regex for collapsing multiple whitespace characters
    WHITESPACE_PATTERN = re.compile(r'\s+')
    
    # Regex for removing control characters (except tabs, newlines, carriage returns)
    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
    
    def __init__(self, preserve_whitespace: bool = True):
        """Initialize text normalizer.
        
        Args:
            preserve_whitespace: If True, keep whitespace exactly as written.
                                If False, collapse whitespace to single spaces and trim.
        """
        self.preserve_whitespace = preserve_whitespace
    
    def normalize_text(self, text: Optional[str]) -> str:
        """Normalize a text fragment taken from FB2 markup."""
        if not text:
            return ""
        
        normalized = self._replace_special_chars(text)
        normalized = self._remove_control_chars(normalized)
        
        if not self.preserve_whitespace:
            normalized = self._normalize_whitespace(normalized)
        
        return normalized
    
    def normalize_fragment(self, text: Optional[str]) -> str:
        """Normalize an inline fragment; whitespace is collapsed but never trimmed."""
        if not text:
            return ""

        normalized = self._remove_control_chars(self._replace_special_chars(text))
        if not self.preserve_whitespace:
            normalized = self.WHITESPACE_PATTERN.sub(' ', normalized)
        return normalized

    def extract_plain_text(self, element: Optional[Element]) -> str:
        """Extract plain text content, ignoring all inline markup."""
        if element is None:
            return ""
        return self.normalize_text(''.join(element.itertext()))
    
    def _replace_special_chars(self, text: str) -> str:
        for original, replacement in self.SPECIAL_CHARS.items():
            text = text.replace(original, replacement)
        return text
    
    def _remove_control_chars(self, text: str) -> str:
        return self.CONTROL_CHARS_PATTERN.sub('', text)
    
    def _normalize_whitespace(self, text: str) -> str:
        normalized = self.WHITESPACE_PATTERN.sub(' ', text)
        return normalized.strip()
