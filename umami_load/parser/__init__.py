"""umami_load.parser: pattern extraction and classification of Umami HTML."""

from umami_load.parser.html_parser import extract_assets, get_form_value, remove_duplicates, valid_title
from umami_load.parser.submission import SubmissionOutcome, classify_submission

__all__ = [
    "valid_title",
    "extract_assets",
    "get_form_value",
    "remove_duplicates",
    "SubmissionOutcome",
    "classify_submission",
]
