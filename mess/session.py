from dataclasses import dataclass
from typing import Optional

from django.contrib.auth.models import User

from .models import Profile

ADMIN_GROUP = "Mess Admin"


def is_mess_admin(user):
    return bool(
        user and user.is_authenticated and (
            user.is_staff or
            user.is_superuser or
            user.groups.filter(name=ADMIN_GROUP).exists()
        )
    )


@dataclass
class ResidentSession:
    """
    The authenticated identity a request acts for.

    Built once per request and handed to the booking and menu services, so
    none of them reach for request-global state.
    """
    user: Optional[User]
    profile: Optional[Profile] = None
    is_admin: bool = False

    @classmethod
    def from_request(cls, request):
        user = request.user if request.user and request.user.is_authenticated else None
        if user is None:
            return cls(user=None)
        profile = Profile.objects.filter(user=user).first()
        return cls(user=user, profile=profile, is_admin=is_mess_admin(user))

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def owner_id(self):
        return self.user.pk if self.user else None

    @property
    def key(self):
        return f"user_{self.owner_id}" if self.user else "anonymous"

    @property
    def theme(self):
        return self.profile.theme if self.profile else "light"

    def toggle_theme(self):
        """Flip the owner's persisted theme preference and return the new value."""
        if self.profile is None:
            return self.theme
        self.profile.theme = "dark" if self.profile.theme == "light" else "light"
        self.profile.save(update_fields=["theme", "updated_at"])
        return self.profile.theme
