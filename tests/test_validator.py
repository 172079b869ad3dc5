from keypad_calculator import validator


def test_is_valid_number():
    assert validator.is_valid_number("0")
    assert validator.is_valid_number("-42")
    assert not validator.is_valid_number("4.2")
    assert not validator.is_valid_number("+4")
    assert not validator.is_valid_number(" 4")
    assert not validator.is_valid_number("1_000")
    assert not validator.is_valid_number("-")
    assert not validator.is_valid_number("Error")
    assert not validator.is_valid_number(None)


def test_labels():
    assert validator.is_valid_digit("7")
    assert not validator.is_valid_digit(".")
    assert validator.is_valid_action("equals")
    assert not validator.is_valid_action("sqrt")
    assert validator.is_valid_operation("divide")
    assert not validator.is_valid_operation("percent")


def test_division_by_zero_check():
    assert validator.is_division_by_zero(0)
    assert not validator.is_division_by_zero(-1)


def test_limit_input_length():
    assert validator.limit_input_length("1234567890123") == "123456789012"
    assert validator.limit_input_length("123") == "123"
    assert validator.limit_input_length("12345", max_length=3) == "123"
