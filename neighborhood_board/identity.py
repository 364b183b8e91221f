"""
Identity lookups backed by django.contrib.auth.

Session handling itself belongs to the host project; the board only
needs to know who is asking and which user row that is.
"""
from django.contrib.auth import get_user_model


def username_for_request(request):
    """Return the username of the authenticated user, or None."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return user.get_username()


def user_id_for_username(username):
    """Return the primary key of the user with this username, or None."""
    if not username:
        return None
    User = get_user_model()
    return (
        User.objects.filter(**{User.USERNAME_FIELD: username})
        .values_list("pk", flat=True)
        .first()
    )
