from mrz_service.mrz_parser import parse_lines


TD3_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
TD3_LINE2_VALID = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"
TD3_LINE2_INVALID_COMPOSITE = "L898902C36UTO7408122F1204159ZE184226B<<<<<11"
TD3_LINE2_INVALID_OPTIONAL = "L898902C36UTO7408122F1204159ZE184226B<<<<<20"

TD2_LINE1 = "I<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<"
TD2_LINE2_VALID = "D231458907UTO7408122F1204159<<<<<<<6"
TD2_LINE2_INVALID_COMPOSITE = "D231458907UTO7408122F1204159<<<<<<<5"

TD1_LINES = [
    "I<UTOD231458907<<<<<<<<<<<<<<<",
    "7408122F1204159UTO<<<<<<<<<<<6",
    "ERIKSSON<<ANNA<MARIA<<<<<<<<<<",
]


def test_td3_composite_valid():
    checks = parse_lines([TD3_LINE1, TD3_LINE2_VALID]).checks

    assert checks.composite_ok is True
    assert checks.optional_data_ok is True


def test_td3_composite_failure_is_informational():
    # Documented leniency: a composite mismatch does not invalidate the record.
    result = parse_lines([TD3_LINE1, TD3_LINE2_INVALID_COMPOSITE])

    assert result.checks.composite_ok is False
    assert result.checks.is_valid is True


def test_td3_optional_data_failure_is_informational():
    result = parse_lines([TD3_LINE1, TD3_LINE2_INVALID_OPTIONAL])

    assert result.checks.optional_data_ok is False
    assert result.is_valid is True


def test_td2_composite():
    assert parse_lines([TD2_LINE1, TD2_LINE2_VALID]).checks.composite_ok is True

    result = parse_lines([TD2_LINE1, TD2_LINE2_INVALID_COMPOSITE])
    assert result.checks.composite_ok is False
    assert result.checks.optional_data_ok is True
    assert result.is_valid is True


def test_td1_composite():
    assert parse_lines(TD1_LINES).checks.composite_ok is True

    broken = [TD1_LINES[0], TD1_LINES[1][:-1] + "5", TD1_LINES[2]]
    result = parse_lines(broken)
    assert result.checks.composite_ok is False
    assert result.is_valid is True
