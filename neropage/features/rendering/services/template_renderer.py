"""
Custom profile template rendering.

A template is plain HTML with a handful of placeholders:

    {{username}} {{bio}} {{avatar}}
    {{primaryColor}} {{backgroundColor}} {{fontFamily}}
    {{socialLinks}} {{contentBlocks}}
    {{#if fieldName}} ... {{/if}}

Conditionals are resolved first, then placeholders are substituted in a
single pass, and the result always goes through the allow-list sanitizer.
Conditionals do not nest and have no else branch: an `{{#if}}` whose body
contains another `{{#if` is left untouched, as is any unmatched tag.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional, Sequence
from urllib.parse import parse_qs, urlparse

from markupsafe import Markup, escape

from neropage.features.links.utils.platforms import link_label
from neropage.features.links.utils.scheduling import filter_active_links
from neropage.features.rendering.services.sanitizer import SanitizeMode, sanitize_html

CONDITIONAL_PATTERN = re.compile(r"\{\{#if\s+(\w+)\}\}((?:(?!\{\{#if\b).)*?)\{\{/if\}\}", re.DOTALL)
PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

# camelCase names whose snake_case form can't be derived mechanically
FIELD_ALIASES = {"customCSS": "custom_css", "templateHTML": "template_html"}

MEDIA_EMBED_TYPES = {"video", "music", "podcast"}

DEFAULT_TEMPLATE_HTML = """<header class="neropage-hero">
  {{#if avatar}}<img class="neropage-avatar" src="{{avatar}}" alt="{{username}}">{{/if}}
  <h1>@{{username}}</h1>
  {{#if bio}}<p class="neropage-bio">{{bio}}</p>{{/if}}
</header>
<main>
  <div class="neropage-links">{{socialLinks}}</div>
  {{#if contentBlocks}}<div class="neropage-blocks">{{contentBlocks}}</div>{{/if}}
</main>
<footer class="neropage-footer">
  <p>Created with <span>Neropage</span></p>
</footer>"""


def _snake_case(name: str) -> str:
    if name in FIELD_ALIASES:
        return FIELD_ALIASES[name]
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def embed_url(url: str) -> str:
    """Turn a share link from a known media host into its embeddable player URL."""
    parsed = urlparse(url)
    host = parsed.netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    path = parsed.path.strip("/")

    if host in ("youtube.com", "m.youtube.com") and parsed.path == "/watch":
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if video_id:
            return f"https://www.youtube.com/embed/{video_id}"
    if host == "youtu.be" and path:
        return f"https://www.youtube.com/embed/{path}"
    if host == "vimeo.com" and path.isdigit():
        return f"https://player.vimeo.com/video/{path}"
    if host == "open.spotify.com" and path and not path.startswith("embed/"):
        return f"https://open.spotify.com/embed/{path}"
    return url


def render_links(links: Iterable) -> str:
    parts = []
    for link in links:
        parts.append(
            f'<a href="{escape(link.url)}" id="neropage-link-{escape(link.id)}" class="neropage-link" '
            f'target="_blank" rel="noopener noreferrer">{escape(link_label(link))}</a>'
        )
    return "\n".join(parts)


def _gallery_urls(block) -> List[str]:
    urls = [line.strip() for line in (block.content or "").splitlines() if line.strip()]
    if not urls and block.media_url:
        urls = [block.media_url]
    return urls


def render_block(block, mode: SanitizeMode = SanitizeMode.RELAXED) -> str:
    block_type = block.type.value if hasattr(block.type, "value") else str(block.type)
    title = escape(block.title or "")
    body = ""

    if block_type == "text":
        body = "<p>" + str(escape(block.content or "")).replace("\n", "<br>") + "</p>"
    elif block_type == "image":
        src = block.media_url or block.content or ""
        body = f'<img src="{escape(src)}" alt="{title}">'
    elif block_type == "gallery":
        body = "".join(f'<img src="{escape(url)}" alt="{title}">' for url in _gallery_urls(block))
    elif block_type in MEDIA_EMBED_TYPES:
        url = block.media_url or block.content or ""
        if mode == SanitizeMode.RELAXED:
            body = f'<iframe src="{escape(embed_url(url))}" class="neropage-embed-{block_type}"></iframe>'
        else:
            body = f'<a href="{escape(url)}" target="_blank" rel="noopener noreferrer">{title or escape(url)}</a>'
    elif block_type == "embed":
        # raw owner markup, made safe by the sanitizer pass over the whole page
        body = block.content or ""
    elif block_type == "form":
        body = f'<div class="neropage-form" id="neropage-form-{escape(block.id)}"></div>'
        if block.content:
            body = f"<p>{escape(block.content)}</p>" + body
    elif block_type == "testimonial":
        body = f'<p class="neropage-quote">{escape(block.content or "")}</p>'
        if block.title:
            body += f'<p class="neropage-quote-author">{title}</p>'
        title = ""
    elif block_type == "faq":
        body = f'<div class="neropage-faq"><strong>{title}</strong><p>{escape(block.content or "")}</p></div>'
        title = ""

    heading = f"<h3>{title}</h3>" if title else ""
    return (
        f'<div class="neropage-block neropage-block-{escape(block_type)}" id="neropage-block-{escape(block.id)}">'
        f"{heading}{body}</div>"
    )


def render_blocks(blocks: Iterable, mode: SanitizeMode = SanitizeMode.RELAXED) -> str:
    return "\n".join(render_block(block, mode) for block in blocks)


class TemplateRenderer:
    def __init__(
        self,
        profile,
        links: Sequence = (),
        blocks: Sequence = (),
        mode: SanitizeMode = SanitizeMode.RELAXED,
        now: Optional[datetime] = None,
    ):
        self.profile = profile
        self.mode = mode
        self.links = filter_active_links(links, now)
        self.blocks = [block for block in blocks if block.is_visible]

    def _field_value(self, name: str):
        if name == "socialLinks":
            return self.links
        if name == "contentBlocks":
            return self.blocks
        # only declared profile fields; model methods like `copy` or `json` are not data
        fields = type(self.profile).model_fields
        for candidate in (name, _snake_case(name)):
            if candidate in fields:
                return getattr(self.profile, candidate)
        return None

    def _resolve_conditionals(self, html: str) -> str:
        def _replace(match):
            return match.group(2) if self._field_value(match.group(1)) else ""

        return CONDITIONAL_PATTERN.sub(_replace, html)

    def _placeholders(self) -> dict:
        profile = self.profile
        return {
            "username": escape(profile.username or ""),
            "bio": escape(profile.bio or ""),
            "avatar": escape(profile.avatar or ""),
            "primaryColor": escape(profile.primary_color or ""),
            "backgroundColor": escape(profile.background_color or ""),
            "fontFamily": escape(profile.font_family or ""),
            "socialLinks": Markup(render_links(self.links)),
            "contentBlocks": Markup(render_blocks(self.blocks, self.mode)),
        }

    def _substitute(self, html: str) -> str:
        values = self._placeholders()

        def _replace(match):
            key = match.group(1)
            return str(values[key]) if key in values else match.group(0)

        return PLACEHOLDER_PATTERN.sub(_replace, html)

    def render(self, template_html: Optional[str]) -> str:
        html = template_html or ""
        html = self._resolve_conditionals(html)
        html = self._substitute(html)
        return sanitize_html(html, self.mode)


def render_custom_template(
    profile,
    links: Sequence = (),
    blocks: Sequence = (),
    mode: SanitizeMode = SanitizeMode.RELAXED,
    template_html: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Render `template_html` (default: the profile's own template, then the stock one)."""
    source = template_html if template_html is not None else (profile.template_html or DEFAULT_TEMPLATE_HTML)
    return TemplateRenderer(profile, links, blocks, mode=mode, now=now).render(source)
