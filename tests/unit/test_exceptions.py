from streamcat import exceptions


def test_all():
    all_excs = [
        getattr(exceptions, ex)
        for ex in dir(exceptions)
        if ex.startswith("Streamcat") and ex.endswith("Error")
    ]

    assert all_excs

    exit_codes = set()
    for exc in all_excs:
        if exc is exceptions.StreamcatUserError:
            continue
        assert issubclass(exc, exceptions.StreamcatUserError)
        assert isinstance(exc.exit_code, int)
        exit_codes.add(exc.exit_code)
        e = exc("hello")
        assert str(e) == "hello"

    assert len(exit_codes) == len(all_excs) - 1, "exit codes should be unique"


def test_seek_before_begin_message():
    e = exceptions.StreamcatSeekBeforeBeginError()
    assert isinstance(e, OSError)
    assert (
        str(e)
        == "An attempt was made to move the position before the beginning of the stream."
    )


def test_argument_null_is_type_error():
    assert issubclass(exceptions.StreamcatArgumentNullError, TypeError)
