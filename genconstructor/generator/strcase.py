"""Case conversion for Go identifiers."""

import re

# Words written in all capitals in Go identifiers.
INITIALISMS = frozenset(
    [
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML", "HTTP",
        "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS", "RPC", "SLA",
        "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID", "UUID",
        "URI", "URL", "UTF8", "VM", "XML", "XMPP", "XSRF", "XSS",
    ]
)

_SEPARATOR_RE = re.compile(r"[\W_]+")


def split_into_words(s: str) -> list[str]:
    """Split an identifier at separators and case changes.

    A word starts at a capital that follows anything but a capital, or at the
    last capital of a run that is followed by a lower case letter.
    Case is Unicode aware, so `ÜberGröße` splits like `OverSize`.

    >>> split_into_words("HTTPServer_url")
    ['HTTP', 'Server', 'url']
    """
    words: list[str] = []
    for chunk in _SEPARATOR_RE.split(s):
        start = 0
        for i in range(1, len(chunk)):
            if not chunk[i].isupper():
                continue
            following = chunk[i + 1 : i + 2]
            if not chunk[i - 1].isupper() or following.islower():
                words.append(chunk[start:i])
                start = i
        if chunk:
            words.append(chunk[start:])
    return words


def _upper_word(word: str) -> str:
    if word.upper() in INITIALISMS:
        return word.upper()
    return word[:1].upper() + word[1:].lower()


def to_upper_camel(s: str) -> str:
    return "".join(_upper_word(w) for w in split_into_words(s))


def to_lower_camel(s: str) -> str:
    words = split_into_words(s)
    if not words:
        return ""
    return words[0].lower() + "".join(_upper_word(w) for w in words[1:])
