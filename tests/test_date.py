import pytest

from fieldmask.engine.date import DateFormatter, is_leap_year


@pytest.fixture
def dmy():
    return DateFormatter(["d", "m", "Y"])


@pytest.mark.parametrize("year, leap", [(2000, True), (1900, False), (2024, True), (2023, False)])
def test_is_leap_year(year, leap):
    assert is_leap_year(year) is leap
    assert DateFormatter.is_leap_year(year) is leap


def test_blocks_follow_pattern():
    assert DateFormatter(["d", "m", "Y"]).get_blocks() == (2, 2, 4)
    assert DateFormatter(["Y", "m", "d"]).get_blocks() == (4, 2, 2)
    assert DateFormatter(["m", "Y"]).get_blocks() == (2, 4)


class TestDigitCorrection:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0", "0"),
            ("00", "01"),
            ("4", "04"),
            ("42", "04"),        # the padded day consumed the only slice
            ("32", "31"),
            ("0113", "0112"),    # month clamped to 12
            ("0100", "0101"),
            ("012", "0102"),     # a month digit above 1 is padded
            ("ab12/03", "1203"),
        ],
    )
    def test_day_month(self, dmy, value, expected):
        assert dmy.get_validated_date(value) == expected

    def test_partial_date_is_not_fixed(self, dmy):
        assert dmy.get_validated_date("320220") == "310220"
        assert dmy.date is None

    def test_complete_date_is_clamped(self, dmy):
        assert dmy.get_validated_date("32022022") == "28022022"
        assert dmy.date == (28, 2, 2022)

    def test_leap_day_kept(self, dmy):
        assert dmy.get_validated_date("29022024") == "29022024"

    def test_thirty_day_month(self, dmy):
        assert dmy.get_validated_date("31042023") == "30042023"


class TestFixedDateString:
    def test_day_month_without_year(self, dmy):
        assert dmy.get_fixed_date_string("3104") == "3004"
        assert dmy.date == (30, 4, 0)

    def test_february_without_year_allows_29(self, dmy):
        # year 0 counts as a leap year
        assert dmy.get_fixed_date_string("3102") == "2902"

    def test_month_first(self):
        fmt = DateFormatter(["m", "d", "Y"])
        assert fmt.get_fixed_date_string("0230") == "0229"
        assert fmt.get_validated_date("02302023") == "02282023"

    def test_year_first(self):
        fmt = DateFormatter(["Y", "m", "d"])
        assert fmt.get_validated_date("20230229") == "20230228"
        assert fmt.date == (28, 2, 2023)

    def test_year_first_four_digits_left_alone(self):
        fmt = DateFormatter(["Y", "m", "d"])
        assert fmt.get_fixed_date_string("2023") == "2023"
        assert fmt.date is None

    def test_year_in_the_middle(self):
        fmt = DateFormatter(["d", "Y", "m"])
        assert fmt.get_fixed_date_string("31202304") == "30202304"
        assert fmt.date == (30, 4, 2023)


def test_get_fixed_date():
    fmt = DateFormatter()
    assert fmt.get_fixed_date(31, 4, 2023) == (30, 4, 2023)
    assert fmt.get_fixed_date(29, 2, 2024) == (29, 2, 2024)
    assert fmt.get_fixed_date(29, 2, 2023) == (28, 2, 2023)
    assert fmt.get_fixed_date(40, 13, 2020) == (31, 12, 2020)


def test_iso_format_date(dmy):
    assert dmy.get_iso_format_date() == ""
    dmy.get_validated_date("0112")
    assert dmy.get_iso_format_date() == ""
    dmy.get_validated_date("01122023")
    assert dmy.get_iso_format_date() == "2023-12-01"
    dmy.get_validated_date("011220")
    assert dmy.get_iso_format_date() == ""
