"""
Built-in filters.

A filter receives the current value and the rule parameters and returns the
new value; filter chains feed each output into the next filter.
"""

import html
import re
import unicodedata
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import quote

from rulegate.core.validators import TRUES

FilterFunc = Callable[[Any, Sequence[Any]], Any]

BASIC_TAGS = frozenset({
    "br", "p", "a", "strong", "b", "i", "em", "img", "blockquote", "code", "dd", "dl",
    "hr", "h1", "h2", "h3", "h4", "h5", "h6", "label", "ul", "li", "span", "sub", "sup",
})

EN_NOISE_WORDS = (
    "about,after,all,also,an,and,another,any,are,as,at,be,because,been,before,"
    "being,between,both,but,by,came,can,come,could,did,do,each,for,from,get,"
    "got,has,had,he,have,her,here,him,himself,his,how,if,in,into,is,it,its,it's,like,"
    "make,many,me,might,more,most,much,must,my,never,now,of,on,only,or,other,"
    "our,out,over,said,same,see,should,since,some,still,such,take,than,that,"
    "the,their,them,then,there,these,they,this,those,through,to,too,under,up,"
    "very,was,way,we,well,were,what,where,which,while,who,with,would,you,your,a,"
    "b,c,d,e,f,g,h,i,j,k,l,m,n,o,p,q,r,s,t,u,v,w,x,y,z,$,1,2,3,4,5,6,7,8,9,0,_"
).split(",")

_TAG_RE = re.compile(r"<\s*(/?)\s*([a-zA-Z][a-zA-Z0-9]*)[^>]*>")
_ANY_TAG_RE = re.compile(r"<[^>]*>")
_MULTISPACE_RE = re.compile(r"\s\s+")
_LEADING_INT_RE = re.compile(r"\s*[+-]?\d+")
_KEPT_PUNCTUATION = frozenset(".=$'€%-")
_MS_WORD_MAP = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'", "–": "-", "…": "..."})


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _keep(value: Any, allowed: Callable[[str], bool]) -> str:
    return "".join(c for c in _text(value) if allowed(c))


def filter_trim(value: Any, params: Sequence[Any] = ()) -> str:
    """Strip surrounding whitespace, or the characters given in params[0]."""
    return _text(value).strip(params[0] if params else None)


def filter_ltrim(value: Any, params: Sequence[Any] = ()) -> str:
    return _text(value).lstrip(params[0] if params else None)


def filter_rtrim(value: Any, params: Sequence[Any] = ()) -> str:
    return _text(value).rstrip(params[0] if params else None)


def filter_lower_case(value: Any, params: Sequence[Any] = ()) -> str:
    return _text(value).lower()


def filter_upper_case(value: Any, params: Sequence[Any] = ()) -> str:
    return _text(value).upper()


def filter_noise_words(value: Any, params: Sequence[Any] = ()) -> str:
    """Remove common English noise words."""
    padded = f" {_MULTISPACE_RE.sub(' ', _text(value))} "
    for word in EN_NOISE_WORDS:
        pattern = re.compile(re.escape(f" {word.strip()} "), re.IGNORECASE)
        # Repeat so adjacent noise words sharing a space are all removed
        while pattern.search(padded):
            padded = pattern.sub(" ", padded)
    return padded.strip()


def filter_rmpunctuation(value: Any, params: Sequence[Any] = ()) -> str:
    """Remove punctuation, keeping . = $ ' € % and -."""
    return _keep(value, lambda c: c in _KEPT_PUNCTUATION or not unicodedata.category(c).startswith("P"))


def filter_urlencode(value: Any, params: Sequence[Any] = ()) -> str:
    return quote(_text(value), safe="")


def filter_htmlencode(value: Any, params: Sequence[Any] = ()) -> str:
    return html.escape(_text(value), quote=True)


def filter_sanitize_email(value: Any, params: Sequence[Any] = ()) -> str:
    """Remove characters that cannot appear in an email address."""
    allowed = set("!#$%&'*+-=?^_`{|}~@.[]")
    return _keep(value, lambda c: (c.isascii() and c.isalnum()) or c in allowed)


def filter_sanitize_numbers(value: Any, params: Sequence[Any] = ()) -> str:
    return _keep(value, lambda c: c in "0123456789+-")


def filter_sanitize_floats(value: Any, params: Sequence[Any] = ()) -> str:
    return _keep(value, lambda c: c in "0123456789+-.")


def filter_sanitize_string(value: Any, params: Sequence[Any] = ()) -> str:
    """Remove markup tags and NUL characters."""
    return _ANY_TAG_RE.sub("", _text(value)).replace("\x00", "")


def filter_boolean(value: Any, params: Sequence[Any] = ()) -> bool:
    """Convert "1", 1, "true", True, "yes" and "on" to True; anything else is False."""
    return any(value == accepted and type(value) is type(accepted) for accepted in TRUES)


def filter_basic_tags(value: Any, params: Sequence[Any] = ()) -> str:
    """Remove every markup tag except BASIC_TAGS."""
    def replace(match: re.Match) -> str:
        return match.group(0) if match.group(2).lower() in BASIC_TAGS else ""

    return _TAG_RE.sub(replace, _text(value))


def filter_whole_number(value: Any, params: Sequence[Any] = ()) -> int:
    """Convert to an int using the leading integer part ("12.7kg" -> 12)."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT_RE.match(_text(value))
    return int(match.group(0)) if match else 0


def filter_ms_word_characters(value: Any, params: Sequence[Any] = ()) -> str:
    """Convert MS Word quotes, dashes and ellipses to plain ASCII."""
    return _text(value).translate(_MS_WORD_MAP)


def filter_slug(value: Any, params: Sequence[Any] = ()) -> str:
    """Convert to a lower-case url slug ("Fish & Chips!" -> "fish-and-chips")."""
    ascii_text = unicodedata.normalize("NFKD", _text(value)).encode("ascii", "ignore").decode("ascii")
    ascii_text = ascii_text.replace("'", "").replace("&", "and")
    ascii_text = re.sub(r"[^A-Za-z0-9-]+", "-", ascii_text)
    ascii_text = re.sub(r"[\s-]+", "-", ascii_text)
    return ascii_text.strip("-").lower()


BUILTIN_FILTERS: dict[str, FilterFunc] = {
    "trim": filter_trim,
    "ltrim": filter_ltrim,
    "rtrim": filter_rtrim,
    "lower_case": filter_lower_case,
    "upper_case": filter_upper_case,
    "noise_words": filter_noise_words,
    "rmpunctuation": filter_rmpunctuation,
    "urlencode": filter_urlencode,
    "htmlencode": filter_htmlencode,
    "sanitize_email": filter_sanitize_email,
    "sanitize_numbers": filter_sanitize_numbers,
    "sanitize_floats": filter_sanitize_floats,
    "sanitize_string": filter_sanitize_string,
    "boolean": filter_boolean,
    "basic_tags": filter_basic_tags,
    "whole_number": filter_whole_number,
    "ms_word_characters": filter_ms_word_characters,
    "slug": filter_slug,
}
