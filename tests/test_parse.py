from fitlog.pipeline.extract import parse_nutrition_text
from fitlog.pipeline.parse import clean_pasted_text, to_plain_text


def test_whatsapp_prefixes_are_removed():
    text = (
        "[19/10/2026 08:15] Nutri Ana: - 3 ovos cozidos: 210 Kcal | 18g proteína | 1g carboidrato | 15g gordura\r\n"
        "19/10/2026 08:16 - Nutri Ana: - 1 banana: 90 Kcal | 1g proteína | 23g carboidrato | 0g gordura"
    )
    cleaned = clean_pasted_text(text)
    assert cleaned.splitlines()[0].startswith("- 3 ovos cozidos")
    assert cleaned.splitlines()[1].startswith("- 1 banana")
    assert [i.original_name for i in parse_nutrition_text(cleaned)] == ["ovos cozidos", "banana"]


def test_tabs_and_non_breaking_spaces():
    cleaned = clean_pasted_text("Supino Reto\t4x10")
    assert cleaned == "Supino Reto 4x10"


def test_html_list_becomes_lines():
    html = (
        "<ul><li>- 3 ovos <b>cozidos</b>: 210 Kcal | 18g proteína | 1g carboidrato | 15g gordura</li>"
        "<li>- 30g de castanhas: 180 Kcal | 5g proteína | 6g carboidrato | 16g gordura</li></ul>"
    )
    items = parse_nutrition_text(to_plain_text("auto", html))
    assert [i.original_name for i in items] == ["ovos cozidos", "castanhas"]


def test_plain_text_untouched():
    assert to_plain_text("text", "- 1 ovo: 70 Kcal") == "- 1 ovo: 70 Kcal"
    assert to_plain_text("auto", "") == ""
