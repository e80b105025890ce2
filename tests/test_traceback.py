from tw import traceback


def test_logic_error_plain():
    e = traceback.LogicError("Something is off.")

    assert str(e) == "Something is off."
    assert e.msg == "Something is off."
    assert e.debug == {}
    assert e.causing_error is None


def test_logic_error_with_debug_and_cause():
    cause = OSError(25, "Inappropriate ioctl for device")
    e = traceback.LogicError("Query failed.", debug={"fd": 1}, causing_error=cause)
    lines = str(e).split("\n")

    assert lines[0] == "With OSError {"
    assert "  [Errno 25] Inappropriate ioctl for device" in lines
    assert "} OSError" in lines
    assert lines[-3:] == ["Query failed.", "Where:", "  fd: 1"]


def test_logic_error_with_raised_cause():
    try:
        raise OSError(9, "Bad file descriptor")
    except OSError as cause:
        e = traceback.LogicError("Query failed.", causing_error=cause)

    assert "  Traceback:" in str(e).split("\n")


def test_stdlib_traceback_is_reexported():
    assert callable(traceback.format_exception)
