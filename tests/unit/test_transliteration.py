"""Unit tests for the transliteration fallback."""

import pytest

from vellum.contexts.rendering.transliteration import (
    TRANSLITERATION_TABLE,
    LanguageMode,
    TextProcessor,
    load_table,
    should_transliterate,
    transliterate,
)


@pytest.mark.unit
def test_table_loaded_in_file_order():
    """Headings come first, generic vocabulary last."""
    sources = [source for source, _ in TRANSLITERATION_TABLE]

    assert TRANSLITERATION_TABLE[0] == ("个人简介", "Personal Summary")
    assert TRANSLITERATION_TABLE[-1] == ("恢复", "Recovery")
    assert sources.index("项目经历") < sources.index("项目")
    assert sources.index("技能专长") < sources.index("技能")


@pytest.mark.unit
def test_table_has_unique_sources():
    sources = [source for source, _ in TRANSLITERATION_TABLE]
    assert len(sources) == len(set(sources))


@pytest.mark.unit
def test_duplicate_phrase_keeps_later_meaning():
    """维护 keeps its first position but the later translation."""
    table = dict(TRANSLITERATION_TABLE)
    assert table["维护"] == "Maintainability"


@pytest.mark.unit
def test_table_is_immutable():
    assert isinstance(TRANSLITERATION_TABLE, tuple)
    assert all(isinstance(pair, tuple) for pair in TRANSLITERATION_TABLE)


@pytest.mark.unit
def test_transliterate_headings_and_present():
    assert transliterate("工作经历") == "Work Experience"
    assert transliterate("2021-01 - 至今") == "2021-01 - Present"


@pytest.mark.unit
def test_transliterate_mixed_text():
    assert transliterate("高级工程师 at 阿里巴巴, 杭州市") == "Senior Engineer at Alibaba, Hangzhou"


@pytest.mark.unit
def test_transliterate_uses_literal_table_order():
    """No longest-match-wins: 解决 is listed before 解决方案."""
    assert transliterate("解决方案") == "Solution方案"


@pytest.mark.unit
def test_transliterate_leaves_unknown_text():
    assert transliterate("Plain English") == "Plain English"
    assert transliterate("") == ""


@pytest.mark.unit
def test_transliterate_treats_sources_literally():
    table = (("a.c", "X"),)
    assert transliterate("abc a.c", table) == "abc X"


@pytest.mark.unit
def test_later_pairs_see_earlier_output():
    table = (("甲", "乙"), ("乙", "done"))
    assert transliterate("甲", table) == "done"


@pytest.mark.unit
@pytest.mark.parametrize(
    "mode,capable,expected",
    [
        (LanguageMode.FORCE_SOURCE_SCRIPT, False, False),
        (LanguageMode.FORCE_SOURCE_SCRIPT, True, False),
        (LanguageMode.FORCE_TARGET_SCRIPT, False, True),
        (LanguageMode.FORCE_TARGET_SCRIPT, True, True),
        (LanguageMode.AUTO, False, True),
        (LanguageMode.AUTO, True, False),
    ],
)
def test_should_transliterate(mode, capable, expected):
    assert should_transliterate(mode, capable) is expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("english", LanguageMode.FORCE_TARGET_SCRIPT),
        ("EN", LanguageMode.FORCE_TARGET_SCRIPT),
        ("en-us", LanguageMode.FORCE_TARGET_SCRIPT),
        ("chinese", LanguageMode.FORCE_SOURCE_SCRIPT),
        ("zh-cn", LanguageMode.FORCE_SOURCE_SCRIPT),
        ("zh-TW", LanguageMode.FORCE_SOURCE_SCRIPT),
        ("auto", LanguageMode.AUTO),
        ("force-target-script", LanguageMode.FORCE_TARGET_SCRIPT),
        (None, LanguageMode.AUTO),
        (LanguageMode.FORCE_SOURCE_SCRIPT, LanguageMode.FORCE_SOURCE_SCRIPT),
    ],
)
def test_language_mode_parse(raw, expected):
    assert LanguageMode.parse(raw) is expected


@pytest.mark.unit
def test_language_mode_parse_unknown_falls_back_to_auto():
    assert LanguageMode.parse("klingon") is LanguageMode.AUTO


@pytest.mark.unit
def test_text_processor_disabled_is_identity():
    processor = TextProcessor.for_mode(LanguageMode.FORCE_SOURCE_SCRIPT, capable=False)
    assert not processor.enabled
    assert processor("至今") == "至今"


@pytest.mark.unit
def test_text_processor_enabled_transliterates():
    processor = TextProcessor.for_mode("english", capable=True)
    assert processor.enabled
    assert processor("至今") == "Present"


@pytest.mark.unit
def test_load_table_flattens_categories_in_order(tmp_path):
    table_file = tmp_path / "table.yaml"
    table_file.write_text(
        "transliteration:\n"
        "  first:\n"
        '    - ["一", "one"]\n'
        "  second:\n"
        '    - ["二", "two"]\n'
        '    - ["三", "three"]\n',
        encoding="utf-8",
    )

    assert load_table(table_file) == (("一", "one"), ("二", "two"), ("三", "three"))


@pytest.mark.unit
def test_load_table_rejects_malformed_pair(tmp_path):
    table_file = tmp_path / "table.yaml"
    table_file.write_text('transliteration:\n  bad:\n    - ["一"]\n', encoding="utf-8")

    with pytest.raises(ValueError, match="bad"):
        load_table(table_file)
