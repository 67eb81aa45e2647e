"""Known link platforms, keyed by the id stored on SocialLink.platform."""

PLATFORM_NAMES = {
    # Social
    "tiktok": "TikTok",
    "instagram": "Instagram",
    "snapchat": "Snapchat",
    "youtube": "YouTube",
    "x": "X (Twitter)",
    "threads": "Threads",
    "facebook": "Facebook",
    "pinterest": "Pinterest",
    "reddit": "Reddit",
    # Professional
    "linkedin": "LinkedIn",
    "github": "GitHub",
    "medium": "Medium",
    "substack": "Substack",
    # Creator
    "twitch": "Twitch",
    "spotify": "Spotify",
    "applemusic": "Apple Music",
    "soundcloud": "SoundCloud",
    "behance": "Behance",
    "dribbble": "Dribbble",
    "patreon": "Patreon",
    "onlyfans": "OnlyFans",
    # Messaging
    "whatsapp": "WhatsApp",
    "telegram": "Telegram",
    "discord": "Discord",
    # Other
    "email": "Email",
    "website": "Website",
    "custom": "Custom Link",
}


def platform_display_name(platform_id: str) -> str:
    """Falls back to the raw id for platforms we don't know about."""
    return PLATFORM_NAMES.get((platform_id or "").lower(), platform_id or "")


def link_label(link) -> str:
    return link.custom_title or platform_display_name(link.platform)
