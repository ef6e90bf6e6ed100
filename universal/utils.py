import re
import warnings
from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

# Only tags a web client log would emit; game text itself uses <...> freely
TAG_RE = re.compile(
	r"</?(?:br|p|div|span|font|pre|b|i|u|li|tr|td|html|body)\b[^>]*>",
	re.IGNORECASE)


def filter_entities(text):
	"""Repair mojibake and stray entities, keeping the line structure."""
	text = text.replace("â\u0080\u0098", "'")
	text = text.replace("â\u0080\u0099", "'")
	text = text.replace("‘", "'")
	text = text.replace("’", "'")
	text = text.replace("â\u0080\u0093", "-")
	text = text.replace("â\u0080\u0094", "-")
	text = text.replace("&amp;", "&")
	text = text.replace("&#39;", "'")
	text = text.replace("&nbsp;", " ")
	text = text.replace("Â ", " ")
	text = text.replace(" ", " ")
	text = text.replace("\t", " ")
	return text


def normalize_newlines(text):
	return text.replace("\r\n", "\n").replace("\r", "\n")


def has_markup(text):
	return TAG_RE.search(text) is not None


def strip_markup(text):
	"""Flatten an HTML fragment to text, one line per <br> or block element."""
	bs = BeautifulSoup(text, 'html.parser')
	for br in bs.find_all("br"):
		br.replace_with("\n")
	for block in bs.find_all(["p", "div", "li", "tr", "pre"]):
		block.insert_after("\n")
	return bs.get_text()


def clean_item_text(text):
	"""Prepare pasted item text for parsing.

	Text copied out of a web client log can arrive as HTML with <br> line
	breaks and escaped quotes; plain terminal pastes pass through with only
	line endings and odd characters normalised.
	"""
	if not text:
		return ""
	text = normalize_newlines(text)
	if has_markup(text):
		text = strip_markup(text)
	return filter_entities(text)
