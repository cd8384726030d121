"""Utility functions for resellit."""

from resellit.utils.date_parser import parse_date
from resellit.utils.amount_parser import parse_amount
from resellit.utils.csv_tokenizer import tokenize_line

__all__ = ["parse_date", "parse_amount", "tokenize_line"]
