"""Tests for CSV tokenizing."""

import pytest

from resellit.utils.csv_tokenizer import read_csv_file, split_lines, tokenize_line, tokenize_text


class TestTokenizeLine:
    """Tests for tokenize_line."""

    def test_plain_fields_are_trimmed(self):
        assert tokenize_line("a, b ,c") == ["a", "b", "c"]

    def test_quoted_comma_stays_in_field(self):
        assert tokenize_line('a,"b,c",d') == ["a", "b,c", "d"]

    def test_empty_fields(self):
        assert tokenize_line("a,,b,") == ["a", "", "b", ""]

    def test_unterminated_quote_runs_to_end(self):
        assert tokenize_line('a,"b,c') == ["a", "b,c"]

    def test_quotes_are_dropped_mid_field(self):
        assert tokenize_line('12" ruler,5') == ["12 ruler,5"]


def test_split_lines_drops_blank_lines_and_carriage_returns():
    text = "h1,h2\r\n\r\n1,2\r\n   \n3,4"
    assert split_lines(text) == ["h1,h2", "1,2", "3,4"]


def test_tokenize_text():
    assert tokenize_text("a,b\n1,2\n") == [["a", "b"], ["1", "2"]]


def test_read_csv_file_strips_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("\ufeffASIN,Title\n".encode("utf-8"))
    assert read_csv_file(str(path)) == "ASIN,Title\n"


def test_read_csv_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="CSV file not found"):
        read_csv_file(str(tmp_path / "nope.csv"))
