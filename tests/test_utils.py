from hoist.utils import normalize_args


def callback(error=None):
    return error


def test_all_positionals_and_callback():
    assert normalize_args(("api", "50", callback)) == ("api", "50", callback)


def test_missing_positionals_default_to_none():
    assert normalize_args(("api", callback)) == ("api", None, callback)
    assert normalize_args((callback,)) == (None, None, callback)


def test_empty_invocation():
    assert normalize_args(()) == (None, None, None)


def test_no_callback():
    result = normalize_args(("api", "stream"))
    assert result.primary == "api"
    assert result.secondary == "stream"
    assert result.callback is None


def test_falsy_positionals_count_as_missing():
    assert normalize_args(("", None, callback)) == (None, None, callback)


def test_extra_positionals_are_dropped():
    assert normalize_args(("a", "b", "c", callback)) == ("a", "b", callback)


def test_types_are_not_validated():
    result = normalize_args((42, ["x"], callback))
    assert result.primary == 42
    assert result.secondary == ["x"]
