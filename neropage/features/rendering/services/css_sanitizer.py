import re

# \3c, \00003c and friends; an optional single whitespace terminates the escape.
# Anything else after a backslash is a literal character.
_CSS_ESCAPE = re.compile(r"\\(?:([0-9a-fA-F]{1,6})\s?|(.))", re.DOTALL)
# decoded to these, the escape has to stay in place or it would end a string early
_KEEP_ESCAPED = {'"', "'", "\\"}

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_HTML_TAG = re.compile(r"<[^>]*>?")
_AT_RULE_NAME = re.compile(r"@(-?[a-zA-Z][\w-]*)")
_URL = re.compile(r"url\s*\([^)]*\)?", re.IGNORECASE)
_EXPRESSION = re.compile(r"expression\s*\([^)]*\)?", re.IGNORECASE)
_MOZ_BINDING = re.compile(r"-moz-binding\s*:[^;}]*", re.IGNORECASE)
_BEHAVIOR = re.compile(r"behavior\s*:[^;}]*", re.IGNORECASE)
_DANGEROUS_PROTOCOL = re.compile(r"(javascript|vbscript|data)\s*:", re.IGNORECASE)

MAX_PASSES = 10


def _decode_escapes(css: str) -> str:
    def _decode(match):
        if match.group(1) is not None:
            code = int(match.group(1), 16)
            if code == 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                return "\ufffd"
            char = chr(code)
        else:
            char = match.group(2)
            if char == "\n":
                return ""
        return "\\" + char if char in _KEEP_ESCAPED else char

    return _CSS_ESCAPE.sub(_decode, css)


def _skip_string(css: str, i: int) -> int:
    """Index just past the quoted string opening at css[i].

    A raw newline ends the string, as it does for the browser's tokenizer.
    """
    quote = css[i]
    i += 1
    while i < len(css):
        char = css[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        if char == "\n":
            return i
        i += 1
    return len(css)


def _skip_brackets(css: str, i: int) -> int:
    """Index just past the [...] block opening at css[i] (attribute selectors, grid line names)."""
    depth = 0
    while i < len(css):
        char = css[i]
        if char in "\"'":
            i = _skip_string(css, i)
            continue
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(css)


def _rule_end(css: str, i: int) -> int:
    """Where an at-rule starting its prelude at css[i] ends: past a `;` before any `{`, or past the matching `}`."""
    depth = 0
    while i < len(css):
        char = css[i]
        if char in "\"'":
            i = _skip_string(css, i)
            continue
        if depth == 0 and char == ";":
            return i + 1
        if depth == 0 and char == "}":
            # closes the enclosing block, which keeps its brace
            return i
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(css)


def _strip_at_rules(css: str) -> str:
    """Drop every at-rule except @media (block and statement forms alike).

    An `@` inside a quoted string or a [...] block is plain text, not a rule.
    """
    out = []
    start = i = 0
    while i < len(css):
        char = css[i]
        if char in "\"'":
            i = _skip_string(css, i)
            continue
        if char == "[":
            i = _skip_brackets(css, i)
            continue
        if char != "@":
            i += 1
            continue

        match = _AT_RULE_NAME.match(css, i)
        if match is None or match.group(1).lower() == "media":
            i = match.end() if match is not None else i + 1
            continue

        out.append(css[start:i])
        start = i = _rule_end(css, match.end())

    out.append(css[start:])
    return "".join(out)


def _single_pass(css: str) -> str:
    css = _decode_escapes(css)
    css = _COMMENT.sub("", css)
    css = _HTML_TAG.sub("", css)
    css = css.replace("<", "")
    css = _strip_at_rules(css)
    css = _URL.sub("", css)
    css = _EXPRESSION.sub("", css)
    css = _MOZ_BINDING.sub("", css)
    css = _BEHAVIOR.sub("", css)
    css = _DANGEROUS_PROTOCOL.sub("", css)
    return css


def sanitize_css(css: str) -> str:
    """
    Make profile-supplied CSS safe to drop into a <style> element.

    Filtering repeats until the output stops changing, so removing one
    construct can never assemble another (e.g. `jav<x>ascript:`).
    """
    if not css:
        return ""

    for _ in range(MAX_PASSES):
        cleaned = _single_pass(css)
        if cleaned == css:
            break
        css = cleaned
    else:
        # still changing after MAX_PASSES: refuse rather than emit something half-filtered
        return ""

    return css.strip()
