from neropage.features.analytics.models.events import LinkClick, ProfileView

__all__ = ["LinkClick", "ProfileView"]
