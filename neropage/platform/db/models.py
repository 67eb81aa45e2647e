"""Registers every ORM model on Base.metadata (create_all, alembic)."""

from neropage.features.analytics.models.events import LinkClick, ProfileView  # noqa: F401
from neropage.features.auth.models.user import User  # noqa: F401
from neropage.features.content_blocks.models.content_block import ContentBlock  # noqa: F401
from neropage.features.forms.models.form_submission import FormSubmission  # noqa: F401
from neropage.features.link_groups.models.link_group import LinkGroup  # noqa: F401
from neropage.features.links.models.social_link import SocialLink  # noqa: F401
from neropage.features.profiles.models.profile import Profile  # noqa: F401
