from enum import Enum

import bleach
from bleach.css_sanitizer import CSSSanitizer

STRICT_TAGS = frozenset(
    {
        "div", "span", "p",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "img", "a", "ul", "ol", "li", "br",
        "strong", "em", "u",
    }
)
RELAXED_TAGS = STRICT_TAGS | frozenset(
    {
        "header", "footer", "main", "section", "article", "nav", "aside",
        "figure", "figcaption", "blockquote", "hr", "iframe",
    }
)

STRICT_ATTRIBUTES = ["class", "id", "href", "src", "alt", "target", "rel"]
RELAXED_ATTRIBUTES = STRICT_ATTRIBUTES + ["style"]

# Relative and fragment URLs carry no scheme and are always kept
ALLOWED_PROTOCOLS = frozenset({"http", "https", "ftp"})


class SanitizeMode(str, Enum):
    """
    STRICT is used for the raw template preview in the dashboard.
    RELAXED is used for the final public page: structural tags, iframes and
    inline styles (filtered declaration by declaration) are allowed.
    """

    STRICT = "strict"
    RELAXED = "relaxed"


_css_sanitizer = CSSSanitizer()


def sanitize_html(html: str, mode: SanitizeMode = SanitizeMode.STRICT) -> str:
    if not html:
        return ""

    if mode == SanitizeMode.RELAXED:
        return bleach.clean(
            html,
            tags=RELAXED_TAGS,
            attributes=RELAXED_ATTRIBUTES,
            protocols=ALLOWED_PROTOCOLS,
            css_sanitizer=_css_sanitizer,
            strip=True,
            strip_comments=True,
        )

    return bleach.clean(
        html,
        tags=STRICT_TAGS,
        attributes=STRICT_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
