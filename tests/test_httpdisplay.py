from httpdisplay import for_destination, limit_str

TITLE = 'Title: "' + "x" * 90 + '"'


def test_channel_output_is_capped():
    out = for_destination("#haskell", TITLE)
    assert len(out) == 80
    assert out == " " + TITLE[:76] + "..."


def test_private_output_is_not_capped():
    assert for_destination("someone", TITLE) == " " + TITLE


def test_short_channel_output_untouched():
    assert for_destination("#chan", 'Title: "Hi"') == ' Title: "Hi"'


def test_control_characters_removed_and_lines_indented():
    assert for_destination("nick", "one\x07\x1b\ntwo\tthree") == " one\n two\tthree"


def test_limit_str():
    assert limit_str(5, "hello") == "hello"
    assert limit_str(5, "hello!") == "he..."
