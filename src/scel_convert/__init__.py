"""Sogou .scel dictionary to ibus-libpinyin text conversion package."""

from .models import DictionaryMetadata, ParsedDictionary, VocabularyItem

__all__ = ["VocabularyItem", "DictionaryMetadata", "ParsedDictionary"]
