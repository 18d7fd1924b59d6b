from commentcard.utils.date_format import format_published_date


def test_us_format():
    assert format_published_date("2024-03-07T10:15:00Z", "us") == "3/7/2024"


def test_fr_format():
    assert format_published_date("2024-03-07T10:15:00Z", "fr") == "07/03/2024"


def test_unparseable_is_returned_as_is():
    assert format_published_date("yesterday", "us") == "yesterday"


def test_empty():
    assert format_published_date("", "fr") == ""
