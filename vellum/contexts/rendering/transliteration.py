"""
Transliteration fallback.

When the backend cannot display Simplified Chinese (or the caller forces
English output), text is rewritten through a fixed table of phrase
substitutions before it is drawn. Replacement is literal and in table
order: there is no longest-match-wins, so "解决" (listed before "解决方案")
turns "解决方案" into "Solution方案".
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vellum.contexts.rendering.logger import _log_warning

load_dotenv()
TRANSLITERATION_TABLE_PATH = Path(
    os.getenv(
        "VELLUM_TRANSLITERATION_TABLE", Path(__file__).resolve().parent / "transliteration.yaml"
    )
)

SubstitutionTable = Tuple[Tuple[str, str], ...]


class LanguageMode(str, Enum):
    """How source-script text is treated for one render."""

    AUTO = "auto"
    FORCE_TARGET_SCRIPT = "force-target-script"
    FORCE_SOURCE_SCRIPT = "force-source-script"

    @classmethod
    def parse(cls, raw) -> "LanguageMode":
        """
        Map a user-facing language option to a mode.

        Accepts the mode values themselves plus the aliases
        english/en/en-us and chinese/zh/zh-cn/zh-tw. Unknown values log a
        warning and yield AUTO.
        """
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return cls.AUTO

        value = str(raw).strip().lower()
        if value in _LANGUAGE_ALIASES:
            return _LANGUAGE_ALIASES[value]

        _log_warning(f"Unknown language option '{raw}', using auto")
        return cls.AUTO


_LANGUAGE_ALIASES = {
    "auto": LanguageMode.AUTO,
    "force-target-script": LanguageMode.FORCE_TARGET_SCRIPT,
    "english": LanguageMode.FORCE_TARGET_SCRIPT,
    "en": LanguageMode.FORCE_TARGET_SCRIPT,
    "en-us": LanguageMode.FORCE_TARGET_SCRIPT,
    "force-source-script": LanguageMode.FORCE_SOURCE_SCRIPT,
    "chinese": LanguageMode.FORCE_SOURCE_SCRIPT,
    "zh": LanguageMode.FORCE_SOURCE_SCRIPT,
    "zh-cn": LanguageMode.FORCE_SOURCE_SCRIPT,
    "zh-tw": LanguageMode.FORCE_SOURCE_SCRIPT,
}


def load_table(path: Path) -> SubstitutionTable:
    """
    Load a substitution table from YAML.

    The file holds a `transliteration` mapping of category name to a list
    of [source, target] pairs. Categories and pairs keep file order.

    Args:
        path: YAML file to load

    Returns:
        Flattened tuple of (source, target) pairs

    Raises:
        ValueError: If a pair does not have exactly two entries
    """
    config = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    categories = config.get("transliteration", {}) if isinstance(config, dict) else {}

    pairs = []
    for category, entries in categories.items():
        for entry in entries or []:
            if len(entry) != 2:
                raise ValueError(
                    f"Bad transliteration entry in '{category}' ({path}): {entry!r}"
                )
            source, target = entry
            pairs.append((str(source), str(target)))

    return tuple(pairs)


TRANSLITERATION_TABLE: SubstitutionTable = load_table(TRANSLITERATION_TABLE_PATH)


def transliterate(text: str, table: SubstitutionTable = TRANSLITERATION_TABLE) -> str:
    """Apply every substitution in table order with a literal global replace."""
    for source, target in table:
        if source in text:
            text = text.replace(source, target)
    return text


def should_transliterate(mode, capable: bool) -> bool:
    """
    Decide whether text is transliterated for one render.

    force-source-script never transliterates, force-target-script always
    does, auto transliterates only when no capable font was found.
    """
    mode = LanguageMode.parse(mode)
    if mode is LanguageMode.FORCE_SOURCE_SCRIPT:
        return False
    if mode is LanguageMode.FORCE_TARGET_SCRIPT:
        return True
    return not capable


@dataclass(frozen=True)
class TextProcessor:
    """Text hook bound to one render's transliteration decision."""

    enabled: bool
    table: SubstitutionTable = TRANSLITERATION_TABLE

    def __call__(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        return transliterate(text, self.table)

    @classmethod
    def for_mode(cls, mode, capable: bool) -> "TextProcessor":
        return cls(enabled=should_transliterate(mode, capable))
