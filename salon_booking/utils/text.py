"""
Text processing utilities.
"""

import re
from typing import List


class TextProcessor:
    """Text processing utilities."""

    @staticmethod
    def normalize_command(text: str) -> str:
        """Lowercase and collapse whitespace for command matching."""
        if not isinstance(text, str):
            text = str(text or "")
        return re.sub(r"\s+", " ", text.strip()).lower()

    @staticmethod
    def split_text(text: str, max_length: int = 5000) -> List[str]:
        """Split text into chunks no longer than ``max_length``, preferring line breaks."""
        if len(text) <= max_length:
            return [text]

        chunks = []
        current_chunk = ""

        for line in text.split("\n"):
            while len(line) > max_length:
                if current_chunk:
                    chunks.append(current_chunk)
                    current_chunk = ""
                chunks.append(line[:max_length])
                line = line[max_length:]

            candidate = f"{current_chunk}\n{line}" if current_chunk else line
            if len(candidate) <= max_length:
                current_chunk = candidate
            else:
                chunks.append(current_chunk)
                current_chunk = line

        if current_chunk:
            chunks.append(current_chunk)

        return chunks
