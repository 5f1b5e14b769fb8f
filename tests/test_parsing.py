from recipes.parsing import (
    number_steps,
    parse_ingredient_line,
    parse_ingredient_lines,
    parse_step_lines,
)


def test_quantity_unit_name():
    ing = parse_ingredient_line("2 cups flour")
    assert (ing.name, ing.quantity, ing.unit) == ("flour", "2", "cups")


def test_multi_word_name_and_extra_whitespace():
    ing = parse_ingredient_line("  1   tbsp   olive  oil ")
    assert (ing.name, ing.quantity, ing.unit) == ("olive oil", "1", "tbsp")


def test_single_token_is_a_bare_name():
    ing = parse_ingredient_line("salt")
    assert (ing.name, ing.quantity, ing.unit) == ("salt", None, None)


def test_two_tokens_keep_both_in_the_name():
    ing = parse_ingredient_line("2 eggs")
    assert (ing.name, ing.quantity, ing.unit) == ("2 eggs", "2", "eggs")


def test_free_text_quantity_is_not_rejected():
    ing = parse_ingredient_line("a pinch of nutmeg")
    assert (ing.name, ing.quantity, ing.unit) == ("of nutmeg", "a", "pinch")


def test_blank_line_is_skipped():
    assert parse_ingredient_line("   ") is None
    assert parse_ingredient_line("") is None


def test_parse_ingredient_lines_drops_blanks():
    parsed = parse_ingredient_lines("2 cups flour\n\nsalt\n")
    assert [p.name for p in parsed] == ["flour", "salt"]


def test_steps_are_numbered_sequentially_after_dropping_blanks():
    steps = parse_step_lines("Mix\n\n  Bake  \n\nServe")
    assert [(s.step_number, s.description) for s in steps] == [
        (1, "Mix"),
        (2, "Bake"),
        (3, "Serve"),
    ]


def test_number_steps_ignores_empty_entries():
    assert number_steps(["", "  ", "Only"])[0].step_number == 1


def test_overlong_quantity_is_folded_into_the_name():
    line = "9" * 100 + " cups flour"
    ing = parse_ingredient_line(line)
    assert (ing.name, ing.quantity, ing.unit) == (line, None, None)


def test_overlong_unit_is_folded_into_the_name():
    ing = parse_ingredient_line("2  " + "u" * 65 + "  flour")
    assert ing.name == "2 " + "u" * 65 + " flour"
    assert ing.quantity is None and ing.unit is None
