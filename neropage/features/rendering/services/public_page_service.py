import os
from typing import List, Optional
from urllib.parse import quote, urlparse

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from neropage.features.links.utils.platforms import link_label
from neropage.features.links.utils.scheduling import filter_active_links
from neropage.features.profiles.schemas.profile import BackgroundType, ProfileResponse
from neropage.features.rendering.services.css_sanitizer import sanitize_css
from neropage.features.rendering.services.sanitizer import SanitizeMode, sanitize_html
from neropage.features.rendering.services.template_renderer import render_blocks, render_custom_template
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import Storage

logger = get_logger(__name__)

template_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "../templates")

env = Environment(loader=FileSystemLoader(template_dir), autoescape=select_autoescape(["html"]))
env.globals["link_label"] = link_label

# percent-encode everything that could end a CSS url("...") token
_CSS_URL_SAFE_CHARS = ":/?&=#%.,+-_~@!$*;"


def safe_media_url(url: Optional[str]) -> Optional[str]:
    """http(s) or site-relative URLs only, percent-encoded for use inside CSS."""
    if not url:
        return None
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") and not (not parsed.scheme and url.startswith("/")):
        return None
    return quote(url.strip(), safe=_CSS_URL_SAFE_CHARS)


class PublicPageService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def _sections(self, links, groups) -> List[dict]:
        """Ungrouped links first, then one section per link group in group order."""
        known = {group.id for group in groups}
        sections = [{"name": None, "links": [link for link in links if link.group_id not in known]}]
        for group in groups:
            grouped = [link for link in links if link.group_id == group.id]
            if grouped:
                sections.append({"name": group.name, "links": grouped})
        return sections

    def render_body(self, profile: ProfileResponse, links, blocks, groups) -> str:
        if profile.use_custom_template and profile.template_html:
            return render_custom_template(profile, links, blocks, mode=SanitizeMode.RELAXED)

        active = filter_active_links(links)
        visible = [block for block in blocks if block.is_visible]
        html = env.get_template("default_layout.html").render(
            profile=profile,
            sections=self._sections(active, groups),
            blocks_html=Markup(render_blocks(visible, SanitizeMode.RELAXED)),
        )
        return sanitize_html(html, SanitizeMode.RELAXED)

    async def render(self, profile: ProfileResponse) -> str:
        links = await self.storage.get_social_links(profile.id)
        blocks = await self.storage.get_content_blocks(profile.id)
        groups = await self.storage.get_link_groups(profile.id)

        background_image = None
        background_video = None
        if profile.background_type == BackgroundType.IMAGE:
            background_image = safe_media_url(profile.background_image)
        elif profile.background_type == BackgroundType.VIDEO:
            background_video = safe_media_url(profile.background_video)

        return env.get_template("profile_page.html").render(
            profile=profile,
            title=profile.seo_title or f"@{profile.username} | Neropage",
            description=profile.seo_description or profile.bio or f"Links from @{profile.username}",
            og_image=safe_media_url(profile.og_image or profile.avatar),
            theme={
                "primary_color": sanitize_css(profile.primary_color),
                "background_color": sanitize_css(profile.background_color),
                "font_family": sanitize_css(profile.font_family),
            },
            background_image=background_image,
            background_video=background_video,
            custom_css=sanitize_css(profile.custom_css or ""),
            body=self.render_body(profile, links, blocks, groups),
        )

    def render_not_found(self, username: str) -> str:
        return env.get_template("not_found.html").render(username=username)
