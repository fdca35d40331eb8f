"""Built-in languages and the language registry.

Each language module defines a LanguageInfo and a factory that builds its
RuleTable. Tables are compiled on first use through the registry.

Built-in languages:
- java: Java (the reference table: nested states, self-delegation)
- text: plain text
"""

from pincel.languages.registry import (
    LanguageEntry,
    LanguageRegistry,
    find_language_by_filename,
    find_language_by_mimetype,
    get_default_registry,
    get_language_info,
    get_rule_table,
    list_languages,
    register_language,
)

__all__ = [
    "LanguageEntry",
    "LanguageRegistry",
    "find_language_by_filename",
    "find_language_by_mimetype",
    "get_default_registry",
    "get_language_info",
    "get_rule_table",
    "list_languages",
    "register_language",
]
