import pytest

from neropage.features.rendering.services.css_sanitizer import sanitize_css


def test_plain_css_is_kept():
    css = ".card > a:hover { color: #fff; padding: 4px 8px; }"
    assert sanitize_css(css) == css


def test_empty_input():
    assert sanitize_css("") == ""
    assert sanitize_css(None) == ""


def test_style_breakout_cannot_produce_script_tag():
    cleaned = sanitize_css("a{color:red}</style><script>evil()</script>")
    assert "<" not in cleaned
    assert "script>" not in cleaned.replace("evil()", "")
    assert "a{color:red}" in cleaned


def test_media_queries_survive():
    css = "@media (max-width: 600px) { .x { display: none; } }"
    assert sanitize_css(css) == css


@pytest.mark.parametrize(
    "css",
    [
        '@import url("https://evil.example.com/x.css");',
        "@font-face { font-family: x; src: local(x); }",
        "@charset 'utf-8';",
        "@keyframes spin { from { opacity: 0; } to { opacity: 1; } }",
    ],
)
def test_other_at_rules_are_removed(css):
    assert "@" not in sanitize_css(css)


def test_at_rule_removal_keeps_following_rules():
    cleaned = sanitize_css("@import 'x.css'; body { margin: 0; }")
    assert cleaned == "body { margin: 0; }"


@pytest.mark.parametrize(
    "css, forbidden",
    [
        ("body { background: url(https://tracker.example.com/p.gif); }", "url("),
        ("div { width: expression(alert(1)); }", "expression("),
        ("div { -moz-binding: url(x.xml#xss); }", "-moz-binding"),
        ("div { behavior: url(x.htc); }", "behavior"),
        ("a { background: javascript:alert(1); }", "javascript:"),
        ("a { background: VBScript:msgbox(1); }", "vbscript:"),
        ("a { background: data:text/html,hi; }", "data:"),
    ],
)
def test_dangerous_constructs_are_removed(css, forbidden):
    assert forbidden not in sanitize_css(css).lower()


def test_escaped_sequences_are_decoded_before_filtering():
    assert "url(" not in sanitize_css(r"div { background: \75\72\6c(https://x.example.com) }").lower()
    assert "<" not in sanitize_css(r"\3c script\3e alert(1)")


def test_comments_cannot_hide_keywords():
    assert "expression" not in sanitize_css("div { width: expr/**/ession(alert(1)); }").lower()


def test_nested_fragments_cannot_reassemble():
    assert "javascript:" not in sanitize_css("a { b: javajavascript:script:alert(1) }").lower()


def test_escaped_quotes_stay_inside_strings():
    css = r'a::before { content: "a\"b"; color: red; }'
    assert sanitize_css(css) == css


def test_hex_escaped_quote_is_kept_escaped():
    assert sanitize_css(r'a::after { content: "x\22 y"; }') == r'a::after { content: "x\"y"; }'


@pytest.mark.parametrize(
    "css",
    [
        'a[href$="@example.com"] { color: red; } p { color: blue; }',
        "a[title=x@y] { color: red; } p { color: blue; }",
        'p::after { content: "@import nothing"; } p { color: blue; }',
    ],
)
def test_at_sign_in_strings_and_selectors_is_not_a_rule(css):
    assert sanitize_css(css) == css


def test_newline_ends_an_unterminated_string():
    cleaned = sanitize_css("p { content: \"open\n@import 'evil.css'; color: red; }")
    assert "@import" not in cleaned
    assert "color: red;" in cleaned


def test_at_rule_inside_block_stops_at_closing_brace():
    cleaned = sanitize_css("a { color: red; @foo bar } b { color: blue; }")
    assert cleaned == "a { color: red; } b { color: blue; }"
